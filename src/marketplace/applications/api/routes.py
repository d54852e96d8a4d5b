"""FastAPI endpoints for seller applications."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from marketplace.applications.api.schemas import (
    ApplicationIdResponse,
    ApplicationResponse,
    ApprovalResponse,
    DecisionResponse,
    ReviewApplicationRequest,
    SubmitApplicationRequest,
)
from marketplace.applications.application import SellerApplication
from marketplace.applications.review import (
    ApproveSellerApplication,
    RejectSellerApplication,
    SubmitSellerApplication,
)

router = APIRouter(prefix="/seller-applications", tags=["seller-applications"])


def _application_response(application: SellerApplication) -> ApplicationResponse:
    return ApplicationResponse(
        application_id=str(application.id),
        user_id=str(application.user_id),
        full_name=application.full_name,
        applicant_email=application.applicant_email,
        audience_band=application.audience_band,
        status=application.status,
        decision_note=application.decision_note,
    )


@router.post("", status_code=201, response_model=ApplicationIdResponse)
async def submit_application(body: SubmitApplicationRequest) -> ApplicationIdResponse:
    result = current_domain.process(SubmitSellerApplication(**body.model_dump()), asynchronous=False)
    return ApplicationIdResponse(application_id=result)


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(status: str | None = Query(None)) -> list[ApplicationResponse]:
    repo = current_domain.repository_for(SellerApplication)
    return [_application_response(a) for a in repo.with_status(status)]


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: str) -> ApplicationResponse:
    return _application_response(current_domain.repository_for(SellerApplication).get(application_id))


@router.put("/{application_id}/approve", response_model=ApprovalResponse)
async def approve_application(application_id: str, body: ReviewApplicationRequest) -> ApprovalResponse:
    command = ApproveSellerApplication(application_id=application_id, admin_id=body.admin_id)
    curator_id = current_domain.process(command, asynchronous=False)
    return ApprovalResponse(curator_id=curator_id)


@router.put("/{application_id}/reject", response_model=DecisionResponse)
async def reject_application(application_id: str, body: ReviewApplicationRequest) -> DecisionResponse:
    command = RejectSellerApplication(
        application_id=application_id,
        admin_id=body.admin_id,
        decision_note=body.decision_note,
    )
    status = current_domain.process(command, asynchronous=False)
    return DecisionResponse(status=status)
