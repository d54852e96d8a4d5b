import pytest
from protean.exceptions import ValidationError

from marketplace.payments.events import PaymentSettingsUpdated
from marketplace.payments.settings import SETTINGS_ID, PaymentSettings, get_payment_settings


def _settings(**overrides):
    return PaymentSettings(id=SETTINGS_ID, **overrides)


class TestDefaults:
    def test_only_card_payments_are_enabled(self):
        settings = _settings()

        assert settings.stripe_enabled is True
        assert settings.yape_enabled is False
        assert settings.plin_enabled is False
        assert settings.commission_rate == 0.10
        assert settings.default_payment_method == "stripe"

    def test_first_read_creates_the_record_once(self):
        first = get_payment_settings()
        second = get_payment_settings()

        assert first.id == SETTINGS_ID
        assert second.id == SETTINGS_ID


class TestInvariants:
    @pytest.mark.parametrize("rate", [-0.01, 1.5])
    def test_commission_rate_outside_zero_and_one_is_rejected(self, rate):
        with pytest.raises(ValidationError) as exc:
            _settings(commission_rate=rate)

        assert "commission_rate" in exc.value.messages

    @pytest.mark.parametrize("rate", [0.0, 1.0])
    def test_commission_rate_bounds_are_inclusive(self, rate):
        assert _settings(commission_rate=rate).commission_rate == rate

    def test_enabling_yape_requires_a_phone_number(self):
        settings = _settings()

        with pytest.raises(ValidationError) as exc:
            settings.update("admin-1", yape_enabled=True)

        assert exc.value.messages["yape_phone_number"] == [
            "Yape phone number is required when Yape is enabled"
        ]

    def test_enabling_plin_with_a_phone_number(self):
        settings = _settings()

        settings.update("admin-1", plin_enabled=True, plin_phone_number="912345678")

        assert settings.is_enabled("plin")


class TestUpdate:
    def test_none_values_leave_fields_unchanged(self):
        settings = _settings(commission_rate=0.15)

        settings.update("admin-1", commission_rate=None, stripe_publishable_key="pk_test_1")

        assert settings.commission_rate == 0.15
        assert settings.stripe_publishable_key == "pk_test_1"
        assert settings.updated_by == "admin-1"

    def test_unknown_settings_are_rejected(self):
        settings = _settings()

        with pytest.raises(ValidationError) as exc:
            settings.update("admin-1", paypal_enabled=True)

        assert exc.value.messages["settings"] == ["Unknown settings: paypal_enabled"]

    def test_raises_updated_event(self):
        settings = _settings()

        settings.update("admin-1", commission_rate=0.2)

        event = settings._events[-1]
        assert isinstance(event, PaymentSettingsUpdated)
        assert event.fields == "commission_rate"
        assert event.commission_rate == 0.2


class TestEnabledMethods:
    def test_wallets_are_listed_before_card(self):
        settings = _settings(
            yape_enabled=True,
            yape_phone_number="987654321",
            stripe_publishable_key="pk_test_1",
        )

        methods = settings.enabled_methods()

        assert [m["id"] for m in methods] == ["yape", "stripe"]
        assert methods[0]["name"] == "Yape"
        assert methods[0]["phone_number"] == "987654321"
        assert methods[1]["publishable_key"] == "pk_test_1"

    def test_blank_instructions_fall_back_to_default(self):
        settings = _settings(plin_enabled=True, plin_phone_number="912345678", plin_instructions="")

        (plin, _stripe) = settings.enabled_methods()

        assert plin["instructions"].startswith("Realiza el pago")

    def test_nothing_enabled(self):
        assert _settings(stripe_enabled=False).enabled_methods() == []

    def test_unknown_method_is_never_enabled(self):
        assert _settings().is_enabled("paypal") is False
