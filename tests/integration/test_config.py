import pytest

from pricing_service import config
from pricing_service.schemas import Settings


@pytest.mark.integration
def test_no_settings_path_means_no_settings(monkeypatch):
    monkeypatch.setattr(config, "PRICING_SETTINGS_PATH", "")
    assert config.load_settings() is None


@pytest.mark.integration
def test_load_settings_from_json(settings_file):
    path = settings_file({
        "prices_include_taxes": True,
        "taxes": [{"percentage": 19, "countries": ["DE"]}, {"percentage": 7, "product_types": ["book"]}],
        "member_discounts": [{"claims": {"plan": "gold"}, "percentage": 5, "fixed": [{"amount": "1.00", "currency": "EUR"}]}],
    })
    settings = config.load_settings(path)
    assert isinstance(settings, Settings)
    assert settings.prices_include_taxes
    assert [t.percentage for t in settings.taxes] == [19, 7]
    assert settings.member_discounts[0].fixed_discount("EUR") == 100


@pytest.mark.integration
def test_load_settings_uses_configured_path(monkeypatch, settings_file):
    monkeypatch.setattr(config, "PRICING_SETTINGS_PATH", settings_file({"taxes": [{"percentage": 20}]}))
    assert config.load_settings().taxes[0].percentage == 20


@pytest.mark.integration
def test_missing_settings_file(tmp_path):
    with pytest.raises(config.SettingsError):
        config.load_settings(str(tmp_path / "missing.json"))


@pytest.mark.integration
def test_malformed_settings_file(tmp_path):
    p = tmp_path / "pricing.json"
    p.write_text("{not json")
    with pytest.raises(config.SettingsError):
        config.load_settings(str(p))


@pytest.mark.integration
def test_invalid_settings(settings_file):
    with pytest.raises(config.SettingsError):
        config.load_settings(settings_file({"taxes": [{"percentage": -5}]}))
