"""
Badge colors, descriptions and next-step hints for each status.

The color and description tables are checked at import time to cover every
ApplicationStatus, so the fallbacks below only ever apply to values from
outside the enum (e.g. a corrupted row).
"""

from dataclasses import dataclass
from enum import Enum

from backoffice.workflow.statuses import (
    ApplicationStatus,
    DEFAULT_TRANSITION_TABLE,
    TransitionTable,
    is_terminal,
    parse_status,
)


class StatusColor(str, Enum):
    GRAY = "gray"
    BLUE = "blue"
    YELLOW = "yellow"
    ORANGE = "orange"
    INDIGO = "indigo"
    PURPLE = "purple"
    GREEN = "green"
    RED = "red"
    EMERALD = "emerald"

    @property
    def css_classes(self) -> str:
        return f"bg-{self.value}-100 text-{self.value}-800"


DEFAULT_COLOR = StatusColor.GRAY
UNKNOWN_DESCRIPTION = "Unknown status"

STATUS_COLORS: dict[ApplicationStatus, StatusColor] = {
    ApplicationStatus.DRAFT: StatusColor.GRAY,
    ApplicationStatus.SUBMITTED: StatusColor.BLUE,
    ApplicationStatus.RETURNED: StatusColor.YELLOW,
    ApplicationStatus.NEED_MORE_INFO: StatusColor.ORANGE,
    ApplicationStatus.READY_FOR_BANK: StatusColor.INDIGO,
    ApplicationStatus.SENT_TO_BANK: StatusColor.PURPLE,
    ApplicationStatus.COMPLETE: StatusColor.GREEN,
    ApplicationStatus.REJECTED: StatusColor.RED,
    ApplicationStatus.PAID: StatusColor.EMERALD,
}

STATUS_DESCRIPTIONS: dict[ApplicationStatus, str] = {
    ApplicationStatus.DRAFT: "Application is being prepared",
    ApplicationStatus.SUBMITTED: "Application submitted for review",
    ApplicationStatus.RETURNED: "Application returned for corrections",
    ApplicationStatus.NEED_MORE_INFO: "Additional information required",
    ApplicationStatus.READY_FOR_BANK: "Manager reviewed and ready for admin approval",
    ApplicationStatus.SENT_TO_BANK: "Application sent to bank for processing",
    ApplicationStatus.COMPLETE: "Bank account successfully opened",
    ApplicationStatus.REJECTED: "Application rejected",
    ApplicationStatus.PAID: "Payment received",
}

for _name, _table in (("color", STATUS_COLORS), ("description", STATUS_DESCRIPTIONS)):
    _missing = set(ApplicationStatus) - _table.keys()
    if _missing:
        raise RuntimeError(
            f"Status {_name} table is missing: {sorted(s.value for s in _missing)}"
        )


def get_status_color(status: ApplicationStatus | str) -> StatusColor:
    parsed = parse_status(status)
    if parsed is None:
        return DEFAULT_COLOR
    return STATUS_COLORS.get(parsed, DEFAULT_COLOR)


def get_status_description(status: ApplicationStatus | str) -> str:
    parsed = parse_status(status)
    if parsed is None:
        return UNKNOWN_DESCRIPTION
    return STATUS_DESCRIPTIONS.get(parsed, UNKNOWN_DESCRIPTION)


# Forward step per status; the flag marks steps only an admin takes.
_RECOMMENDED_NEXT: dict[ApplicationStatus, tuple[ApplicationStatus, bool]] = {
    ApplicationStatus.DRAFT: (ApplicationStatus.SUBMITTED, False),
    ApplicationStatus.SUBMITTED: (ApplicationStatus.READY_FOR_BANK, False),
    ApplicationStatus.READY_FOR_BANK: (ApplicationStatus.SENT_TO_BANK, True),
    ApplicationStatus.SENT_TO_BANK: (ApplicationStatus.COMPLETE, True),
    ApplicationStatus.COMPLETE: (ApplicationStatus.PAID, True),
}


def get_next_recommended_status(
    current: ApplicationStatus | str,
    is_admin: bool,
    is_manager: bool,
) -> ApplicationStatus | None:
    """
    The forward status a manager or admin would usually pick next.

    A UI hint only; it has no bearing on whether a transition is allowed.
    """
    if not (is_admin or is_manager):
        return None
    parsed = parse_status(current)
    if parsed is None or parsed not in _RECOMMENDED_NEXT:
        return None
    nxt, admin_only = _RECOMMENDED_NEXT[parsed]
    if admin_only and not is_admin:
        return None
    return nxt


@dataclass(frozen=True)
class StatusMetadata:
    status: ApplicationStatus
    color: StatusColor
    description: str
    terminal: bool
    destinations: tuple[ApplicationStatus, ...]

    @property
    def css_classes(self) -> str:
        return self.color.css_classes


def status_metadata(
    status: ApplicationStatus,
    table: TransitionTable = DEFAULT_TRANSITION_TABLE,
) -> StatusMetadata:
    rule = table.rule_for(status)
    return StatusMetadata(
        status=status,
        color=get_status_color(status),
        description=get_status_description(status),
        terminal=is_terminal(status),
        destinations=rule.destinations if rule else (),
    )


def all_status_metadata(table: TransitionTable = DEFAULT_TRANSITION_TABLE) -> list[StatusMetadata]:
    return [status_metadata(s, table) for s in ApplicationStatus]
