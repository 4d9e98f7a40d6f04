"""
Applications API — status workflow endpoints.

Detail view with status badge, the transitions the caller may offer, the
status change itself, and the status history.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.deps import get_db, require, require_any
from backoffice.api.statuses import status_info
from backoffice.auth.context import RequestContext
from backoffice.auth.permissions import Permission
from backoffice.models import Application
from backoffice.schemas.schemas import (
    ApplicationDetail,
    ApplicationDocumentSchema,
    ApplicationStatusUpdate,
    AvailableTransitions,
    StatusHistoryEntry,
    StatusHistoryResponse,
)
from backoffice.services.status_service import STATUS_CHANGE_PERMISSIONS, ApplicationStatusService

router = APIRouter(prefix="/api/applications", tags=["applications"])


def _detail(application: Application) -> ApplicationDetail:
    return ApplicationDetail(
        id=application.id,
        applicant_name=application.applicant_name,
        company=application.company,
        email=application.email,
        status=status_info(application.status),
        created_by=application.created_by,
        created_by_role=application.created_by_role,
        assigned_manager=application.assigned_manager,
        partner_id=application.partner_id,
        document_checklist_complete=application.document_checklist_complete,
        has_required_documents=application.has_required_documents(),
        documents=[ApplicationDocumentSchema.model_validate(d) for d in application.documents],
        created_at=application.created_at,
        updated_at=application.updated_at,
    )


# ── GET /api/applications/{application_id} ──────────────────────────────────

@router.get("/{application_id}", response_model=ApplicationDetail)
async def get_application(
    application_id: str,
    ctx: RequestContext = Depends(require(Permission.APPLICATION_VIEW)),
    db: AsyncSession = Depends(get_db),
):
    application = await ApplicationStatusService(db).get(application_id)
    return _detail(application)


# ── GET /api/applications/{application_id}/transitions ──────────────────────

@router.get("/{application_id}/transitions", response_model=AvailableTransitions)
async def get_transitions(
    application_id: str,
    ctx: RequestContext = Depends(require(Permission.APPLICATION_VIEW)),
    db: AsyncSession = Depends(get_db),
):
    """Status actions the caller's portal should render for this application."""
    service = ApplicationStatusService(db)
    application = await service.get(application_id)
    recommended = service.recommended_next(application, ctx)
    return AvailableTransitions(
        application_id=application.id,
        current_status=application.status,
        available=[s.value for s in service.available_transitions(application, ctx)],
        recommended_next=recommended.value if recommended else None,
    )


# ── PUT /api/applications/{application_id}/status ──────────────────────────

@router.put("/{application_id}/status", response_model=ApplicationDetail)
async def update_application_status(
    application_id: str,
    body: ApplicationStatusUpdate,
    ctx: RequestContext = Depends(require_any(*STATUS_CHANGE_PERMISSIONS)),
    db: AsyncSession = Depends(get_db),
):
    """
    Change an application's status.

    The transition table decides legality against the stored status; pass
    `expected_status` to refuse the change if the record moved since it was
    displayed.
    """
    application = await ApplicationStatusService(db).change_status(
        application_id,
        body.status,
        ctx,
        comment=body.comment,
        expected_status=body.expected_status,
    )
    return _detail(application)


# ── GET /api/applications/{application_id}/history ──────────────────────────

@router.get("/{application_id}/history", response_model=StatusHistoryResponse)
async def get_status_history(
    application_id: str,
    ctx: RequestContext = Depends(require(Permission.APPLICATION_VIEW)),
    db: AsyncSession = Depends(get_db),
):
    entries = await ApplicationStatusService(db).history(application_id)
    return StatusHistoryResponse(
        application_id=application_id,
        items=[StatusHistoryEntry.model_validate(e) for e in entries],
    )
