"""FastAPI endpoints for payment settings (admin) and enabled payment methods (public)."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from marketplace.payments.api.schemas import (
    PaymentMethodsResponse,
    PaymentSettingsResponse,
    StatusResponse,
    UpdatePaymentSettingsRequest,
)
from marketplace.payments.management import UpdatePaymentSettings
from marketplace.payments.settings import CURRENCY, get_payment_settings

settings_router = APIRouter(prefix="/payment-settings", tags=["payments"])
methods_router = APIRouter(prefix="/payment-methods", tags=["payments"])


@settings_router.get("", response_model=PaymentSettingsResponse)
async def get_settings() -> PaymentSettingsResponse:
    settings = get_payment_settings()
    return PaymentSettingsResponse(
        yape_enabled=settings.yape_enabled,
        yape_phone_number=settings.yape_phone_number,
        yape_qr_code=settings.yape_qr_code,
        yape_instructions=settings.yape_instructions,
        plin_enabled=settings.plin_enabled,
        plin_phone_number=settings.plin_phone_number,
        plin_qr_code=settings.plin_qr_code,
        plin_instructions=settings.plin_instructions,
        stripe_enabled=settings.stripe_enabled,
        stripe_publishable_key=settings.stripe_publishable_key,
        default_payment_method=settings.default_payment_method,
        commission_rate=settings.commission_rate,
        currency=CURRENCY,
    )


@settings_router.put("", response_model=StatusResponse)
async def update_settings(body: UpdatePaymentSettingsRequest) -> StatusResponse:
    current_domain.process(UpdatePaymentSettings(**body.model_dump()), asynchronous=False)
    return StatusResponse()


@methods_router.get("", response_model=PaymentMethodsResponse)
async def get_payment_methods() -> PaymentMethodsResponse:
    settings = get_payment_settings()
    return PaymentMethodsResponse(
        methods=settings.enabled_methods(),
        default_method=settings.default_payment_method,
        currency=CURRENCY,
    )
