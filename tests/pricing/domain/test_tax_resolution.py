"""Tests for tax rate lookup and resolution."""

import pytest
from pricing.config import PricingSettings
from pricing.tax.rates import DEFAULT_TAX_RATES, TaxRate, default_tax_rates
from pricing.tax.resolver import TaxResolver, resolve_tax
from protean.exceptions import ValidationError


class TestTaxRate:
    def test_valid_rate(self):
        rate = TaxRate(country_code="GB", rate=0.2, name="VAT")
        assert rate.rate == 0.2

    def test_rate_above_one_rejected(self):
        with pytest.raises(ValidationError):
            TaxRate(country_code="GB", rate=20, name="VAT")

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            TaxRate(country_code="GB", rate=-0.1, name="VAT")

    def test_default_table(self):
        rates = {rate.country_code: (rate.rate, rate.name) for rate in default_tax_rates()}
        assert rates == DEFAULT_TAX_RATES
        assert rates["IN"] == (0.18, "GST")
        assert rates["US"] == (0.08, "Sales Tax")


class TestTaxResolver:
    def test_india_gst(self):
        resolution = TaxResolver().resolve("IN", 10000)
        assert resolution.tax_amount == 1800
        assert resolution.tax_rate == 0.18
        assert resolution.tax_name == "GST"
        assert resolution.currency_code == "USD"

    def test_tax_rounds_to_minor_unit(self):
        # 10001 * 0.18 = 1800.18
        assert TaxResolver().resolve("IN", 10001).tax_amount == 1800

    def test_lookup_is_case_insensitive(self):
        assert TaxResolver().resolve("gb", 1000).tax_name == "VAT"

    def test_unknown_primary_market_falls_back_to_sales_tax(self):
        resolver = TaxResolver(rates=[], settings=PricingSettings(primary_market="US"))
        resolution = resolver.resolve("US", 1000)
        assert resolution.tax_rate == 0.1
        assert resolution.tax_name == "Sales Tax"
        assert resolution.tax_amount == 100

    def test_unknown_country_falls_back_to_vat(self):
        resolution = TaxResolver().resolve("BR", 1000)
        assert resolution.tax_rate == 0.1
        assert resolution.tax_name == "VAT"

    def test_malformed_country_code_still_resolves(self):
        resolution = TaxResolver().resolve("", 1000)
        assert resolution.tax_name == "VAT"
        assert resolution.tax_amount == 100

    def test_settings_drive_fallback_and_currency(self):
        settings = PricingSettings(default_tax_rate=0.05, primary_market="IN", currency_code="INR")
        resolution = TaxResolver(rates=[], settings=settings).resolve("IN", 2000)
        assert resolution.tax_amount == 100
        assert resolution.tax_name == "Sales Tax"
        assert resolution.currency_code == "INR"

    def test_custom_rate_table(self):
        resolver = TaxResolver(rates=[TaxRate(country_code="NZ", rate=0.15, name="GST")])
        assert resolver.resolve("NZ", 1000).tax_amount == 150
        assert resolver.resolve("GB", 1000).tax_rate == 0.1

    def test_zero_subtotal(self):
        assert TaxResolver().resolve("DE", 0).tax_amount == 0

    def test_negative_subtotal_rejected(self):
        with pytest.raises(ValidationError):
            TaxResolver().resolve("DE", -1)

    def test_resolution_to_dict(self):
        assert resolve_tax("JP", 5000).to_dict() == {
            "tax_amount": 500,
            "tax_rate": 0.1,
            "tax_name": "Consumption Tax",
            "currency_code": "USD",
        }


class TestPricingSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        for name in ("DEFAULT_TAX_RATE_PERCENT", "PRIMARY_MARKET", "STORE_CURRENCY", "GST_RATE_PERCENT"):
            monkeypatch.delenv(name, raising=False)
        assert PricingSettings.from_env() == PricingSettings()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_TAX_RATE_PERCENT", "7.5")
        monkeypatch.setenv("PRIMARY_MARKET", "gb")
        monkeypatch.setenv("STORE_CURRENCY", "gbp")
        monkeypatch.setenv("GST_RATE_PERCENT", "12")
        settings = PricingSettings.from_env()
        assert settings.default_tax_rate == 0.075
        assert settings.primary_market == "GB"
        assert settings.currency_code == "GBP"
        assert settings.gst_rate_percent == 12.0
