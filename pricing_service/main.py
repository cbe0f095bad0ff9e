from fastapi import FastAPI, HTTPException, Request, status
from contextlib import asynccontextmanager
import logging

# Use relative imports
from . import schemas, calculator, config

# Basic logging setup
logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Pricing Service starting up...")
    logger.info(f"Listening on {config.APP_HOST}:{config.APP_PORT}")
    app.state.settings = config.load_settings()
    if app.state.settings is None:
        logger.warning("No pricing settings configured, prices will carry no taxes or member discounts")
    else:
        logger.info(
            f"Loaded pricing settings: {len(app.state.settings.taxes)} tax rule(s), "
            f"{len(app.state.settings.member_discounts)} member discount(s)"
        )
    yield
    logger.info("Pricing Service shutting down...")

app = FastAPI(
    title="Pricing Service",
    description="Calculates order prices including taxes, coupons and member discounts.",
    version="0.1.0",
    lifespan=lifespan
)


@app.get("/health", tags=["Monitoring"], summary="Health Check")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@app.get(
    "/settings",
    response_model=schemas.Settings | None,
    tags=["Pricing"],
    summary="Current Pricing Settings"
)
async def get_settings(request: Request):
    return request.app.state.settings


@app.post(
    "/calculate_price",
    response_model=schemas.PriceCalculationResponse,
    tags=["Pricing"],
    summary="Calculate Order Price"
)
async def calculate_price_endpoint(request_data: schemas.PriceCalculationRequest, request: Request):
    """
    Receives the order's line items and calculates the itemized price
    using the site's tax and member discount settings.
    """
    logger.info(f"Received price calculation request for order_id: {request_data.order_id}")

    coupon = request_data.coupon
    if coupon is not None:
        gross = sum(item.price * item.quantity for item in request_data.items)
        if not coupon.valid_for_price(request_data.currency, gross):
            logger.info(f"Coupon {coupon.code} rejected for order {request_data.order_id}: minimum not reached")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Coupon {coupon.code} is not valid for this order amount"
            )

    try:
        price = calculator.calculate_price(
            request.app.state.settings,
            request_data.claims,
            request_data.country,
            request_data.currency,
            coupon,
            request_data.items,
        )
    except Exception as e:
        logger.exception(f"Error calculating price for order {request_data.order_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred during price calculation."
        )

    return schemas.PriceCalculationResponse(
        order_id=request_data.order_id,
        currency=request_data.currency,
        price=price,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT)
