"""Pydantic schemas for seller applications."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubmitApplicationRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-042",
                    "full_name": "Lucia Quispe",
                    "applicant_email": "lucia@example.com",
                    "social_links": "https://instagram.com/lucia.vintage",
                    "audience_band": "10k-50k",
                    "reason": "I curate vintage pieces from Cusco.",
                }
            ]
        }
    }

    user_id: str
    full_name: str = Field(..., max_length=255)
    applicant_email: str | None = Field(None, max_length=255)
    social_links: str | None = None
    audience_band: str | None = Field(None, max_length=100)
    reason: str | None = None


class ReviewApplicationRequest(BaseModel):
    admin_id: str
    decision_note: str | None = None


class ApplicationIdResponse(BaseModel):
    application_id: str


class ApplicationResponse(BaseModel):
    application_id: str
    user_id: str
    full_name: str
    applicant_email: str | None = None
    audience_band: str | None = None
    status: str
    decision_note: str | None = None


class ApprovalResponse(BaseModel):
    status: str = "APPROVED"
    curator_id: str | None = None


class DecisionResponse(BaseModel):
    status: str
