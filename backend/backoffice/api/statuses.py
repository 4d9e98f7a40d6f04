"""Status metadata for badges and legends."""

from fastapi import APIRouter

from backoffice.schemas.schemas import StatusInfo, StatusListResponse
from backoffice.workflow import (
    ApplicationStatus,
    all_status_metadata,
    get_status_color,
    get_status_description,
    is_terminal,
    parse_status,
    status_metadata,
)

router = APIRouter(prefix="/api/statuses", tags=["statuses"])


def status_info(status: ApplicationStatus | str) -> StatusInfo:
    """Badge data for a stored status, tolerating values outside the enum."""
    parsed = parse_status(status)
    if parsed is None:
        color = get_status_color(status)
        return StatusInfo(
            status=str(status),
            color=color.value,
            css_classes=color.css_classes,
            description=get_status_description(status),
            terminal=is_terminal(status),
        )
    meta = status_metadata(parsed)
    return StatusInfo(
        status=meta.status.value,
        color=meta.color.value,
        css_classes=meta.css_classes,
        description=meta.description,
        terminal=meta.terminal,
        destinations=[d.value for d in meta.destinations],
    )


@router.get("", response_model=StatusListResponse)
async def list_statuses():
    """Every status in lifecycle order, with its color, description and destinations."""
    return StatusListResponse(items=[status_info(m.status) for m in all_status_metadata()])
