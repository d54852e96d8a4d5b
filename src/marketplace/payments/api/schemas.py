"""Pydantic schemas for payment settings and payment methods."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdatePaymentSettingsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "admin_id": "admin-001",
                    "yape_enabled": True,
                    "yape_phone_number": "987654321",
                    "commission_rate": 0.12,
                }
            ]
        }
    }

    admin_id: str
    yape_enabled: bool | None = None
    yape_phone_number: str | None = Field(None, max_length=30)
    yape_qr_code: str | None = Field(None, max_length=500)
    yape_instructions: str | None = None
    plin_enabled: bool | None = None
    plin_phone_number: str | None = Field(None, max_length=30)
    plin_qr_code: str | None = Field(None, max_length=500)
    plin_instructions: str | None = None
    stripe_enabled: bool | None = None
    stripe_publishable_key: str | None = Field(None, max_length=255)
    default_payment_method: str | None = None
    commission_rate: float | None = None


class PaymentSettingsResponse(BaseModel):
    yape_enabled: bool
    yape_phone_number: str | None = None
    yape_qr_code: str | None = None
    yape_instructions: str | None = None
    plin_enabled: bool
    plin_phone_number: str | None = None
    plin_qr_code: str | None = None
    plin_instructions: str | None = None
    stripe_enabled: bool
    stripe_publishable_key: str | None = None
    default_payment_method: str
    commission_rate: float
    currency: str


class PaymentMethodResponse(BaseModel):
    id: str
    name: str
    phone_number: str | None = None
    qr_code: str | None = None
    instructions: str | None = None
    publishable_key: str | None = None


class PaymentMethodsResponse(BaseModel):
    methods: list[PaymentMethodResponse]
    default_method: str
    currency: str


class StatusResponse(BaseModel):
    status: str = "ok"
