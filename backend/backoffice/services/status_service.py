"""
Application Status Service

Applies status changes to stored applications:
- Ownership and document completeness derived from the record
- Validation against the transition table using the freshly read status
- Compare-and-swap update on the status column
- Append-only history entry per change
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.auth.context import RequestContext
from backoffice.auth.permissions import Permission, has_any_permission
from backoffice.middleware.metrics import status_transition_denials_total, status_transitions_total
from backoffice.models import Application, ApplicationStatusHistory
from backoffice.workflow import (
    ApplicationStatus,
    TransitionResult,
    get_available_transitions,
    get_next_recommended_status,
    validate_status_transition,
)

logger = logging.getLogger(__name__)

# Either one lets an actor change status; the transition table decides the rest.
STATUS_CHANGE_PERMISSIONS = (Permission.APPLICATION_EDIT, Permission.APPLICATION_APPROVE)


class ApplicationNotFound(LookupError):
    def __init__(self, application_id: str):
        super().__init__(f"Application {application_id} not found")
        self.application_id = application_id


class TransitionDenied(Exception):
    """The transition table refused the change; carries the engine's result."""

    def __init__(self, result: TransitionResult):
        super().__init__(result.error)
        self.result = result


class StaleStatusError(Exception):
    """The stored status no longer matches the status the caller acted on."""

    def __init__(self, application_id: str, expected: str, actual: str | None):
        super().__init__(
            f"Application {application_id} status changed: expected {expected}, found {actual}"
        )
        self.application_id = application_id
        self.expected = expected
        self.actual = actual


class ApplicationStatusService:
    """Validate-then-persist for application status changes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, application_id: str) -> Application:
        result = await self.session.execute(
            select(Application)
            .where(Application.id == application_id)
            .options(selectinload(Application.documents))
            .execution_options(populate_existing=True)
        )
        application = result.scalar_one_or_none()
        if application is None:
            raise ApplicationNotFound(application_id)
        return application

    def available_transitions(self, application: Application, ctx: RequestContext) -> list[ApplicationStatus]:
        if not has_any_permission(ctx.permissions, STATUS_CHANGE_PERMISSIONS):
            return []
        return get_available_transitions(
            application.status,
            is_admin=ctx.is_admin,
            is_owner=application.is_owned_by(ctx.user_id),
            has_documents=application.has_required_documents(),
        )

    def recommended_next(self, application: Application, ctx: RequestContext) -> ApplicationStatus | None:
        return get_next_recommended_status(
            application.status, is_admin=ctx.is_admin, is_manager=ctx.is_manager,
        )

    async def change_status(
        self,
        application_id: str,
        to_status: ApplicationStatus | str,
        ctx: RequestContext,
        *,
        comment: str | None = None,
        expected_status: ApplicationStatus | str | None = None,
    ) -> Application:
        """
        Move an application to `to_status` on behalf of `ctx`.

        Raises:
            ApplicationNotFound: no such application.
            StaleStatusError: `expected_status` (what the caller's UI showed)
                or the compare-and-swap no longer matches the stored status.
            TransitionDenied: the transition table refused the change.
        """
        application = await self.get(application_id)
        current = application.status

        if expected_status is not None and _value(expected_status) != current:
            raise StaleStatusError(application_id, _value(expected_status), current)

        result = validate_status_transition(
            current,
            to_status,
            is_admin=ctx.is_admin,
            is_owner=application.is_owned_by(ctx.user_id),
            has_documents=application.has_required_documents(),
            comment=comment,
        )
        if not result.is_valid:
            status_transition_denials_total.labels(reason=result.reason.value).inc()
            logger.info(
                "Status change denied for %s: %s -> %s (%s) by %s",
                application_id, current, _value(to_status), result.reason.value, ctx.actor,
                extra={
                    "application_id": application_id,
                    "from_status": current,
                    "to_status": _value(to_status),
                    "reason": result.reason.value,
                    "actor": ctx.actor,
                },
            )
            raise TransitionDenied(result)

        new_status = _value(to_status)
        swapped = await self.session.execute(
            update(Application)
            .where(Application.id == application_id, Application.status == current)
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        if swapped.rowcount != 1:
            actual = (await self.session.execute(
                select(Application.status).where(Application.id == application_id)
            )).scalar_one_or_none()
            logger.warning(
                "Concurrent status change on %s: read %s, now %s",
                application_id, current, actual,
                extra={"application_id": application_id},
            )
            raise StaleStatusError(application_id, current, actual)

        self.session.add(ApplicationStatusHistory(
            application_id=application_id,
            previous_status=current,
            new_status=new_status,
            changed_by=ctx.user_id,
            changed_by_role=ctx.role.value,
            comment=comment.strip() if comment and comment.strip() else None,
        ))
        await self.session.flush()

        status_transitions_total.labels(from_status=current, to_status=new_status).inc()
        logger.info(
            "Status change %s: %s -> %s by %s",
            application_id, current, new_status, ctx.actor,
            extra={
                "application_id": application_id,
                "from_status": current,
                "to_status": new_status,
                "actor": ctx.actor,
            },
        )

        return await self.get(application_id)

    async def history(self, application_id: str) -> list[ApplicationStatusHistory]:
        # Unknown applications raise instead of returning an empty history.
        await self.get(application_id)
        result = await self.session.execute(
            select(ApplicationStatusHistory)
            .where(ApplicationStatusHistory.application_id == application_id)
            .order_by(ApplicationStatusHistory.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars())


def _value(status: ApplicationStatus | str) -> str:
    return status.value if isinstance(status, ApplicationStatus) else str(status)
