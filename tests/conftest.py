import json
import logging

import pytest

from pricing_service.schemas import MemberDiscount, Settings, Tax



@pytest.fixture
def exclusive_settings():
    return Settings(taxes=[Tax(percentage=20)])


@pytest.fixture
def inclusive_settings():
    return Settings(prices_include_taxes=True, taxes=[Tax(percentage=20)])


@pytest.fixture
def gold_discount():
    return MemberDiscount(claims={"plan": "gold"}, percentage=5)


@pytest.fixture
def settings_file(tmp_path):
    def write(data):
        p = tmp_path / "pricing.json"
        p.write_text(json.dumps(data))
        return str(p)
    return write


@pytest.fixture
def log_capture(caplog):
    caplog.set_level(logging.DEBUG, logger="pricing_service")
    return caplog
