"""
Application lifecycle statuses and the transition table.

    Draft -> Submitted -> Returned | Need More Info | Ready for Bank | Rejected
    Ready for Bank -> Sent to Bank -> Complete | Rejected
    Complete -> Paid

Rejected and Paid are terminal. Each source status has exactly one rule;
its gates (admin, comment, documents) apply to every destination of that rule.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class ApplicationStatus(str, Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    RETURNED = "Returned"
    NEED_MORE_INFO = "Need More Info"
    READY_FOR_BANK = "Ready for Bank"
    SENT_TO_BANK = "Sent to Bank"
    COMPLETE = "Complete"
    REJECTED = "Rejected"
    PAID = "Paid"


INITIAL_STATUS = ApplicationStatus.DRAFT
TERMINAL_STATUSES: frozenset[ApplicationStatus] = frozenset({
    ApplicationStatus.REJECTED,
    ApplicationStatus.PAID,
})


def parse_status(value: ApplicationStatus | str | None) -> ApplicationStatus | None:
    """Parse a stored status string; None for anything outside the enum."""
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class StatusTransitionRule:
    source: ApplicationStatus
    destinations: tuple[ApplicationStatus, ...]
    requires_admin: bool = False
    requires_comment: bool = False
    requires_documents: bool = False


class TransitionTableError(ValueError):
    """The transition table violates a structural invariant."""


@dataclass(frozen=True)
class TransitionTable:
    rules: Mapping[ApplicationStatus, StatusTransitionRule]

    def rule_for(self, status: ApplicationStatus | None) -> StatusTransitionRule | None:
        if status is None:
            return None
        return self.rules.get(status)


_S = ApplicationStatus

DEFAULT_RULES: tuple[StatusTransitionRule, ...] = (
    StatusTransitionRule(_S.DRAFT, (_S.SUBMITTED,), requires_documents=True),
    # Managers and owners can do these; Rejected here is not admin-gated.
    StatusTransitionRule(
        _S.SUBMITTED,
        (_S.RETURNED, _S.NEED_MORE_INFO, _S.READY_FOR_BANK, _S.REJECTED),
    ),
    StatusTransitionRule(_S.RETURNED, (_S.SUBMITTED,)),
    StatusTransitionRule(_S.NEED_MORE_INFO, (_S.SUBMITTED,), requires_comment=True),
    StatusTransitionRule(
        _S.READY_FOR_BANK, (_S.SENT_TO_BANK,), requires_admin=True, requires_comment=True,
    ),
    StatusTransitionRule(_S.SENT_TO_BANK, (_S.COMPLETE, _S.REJECTED), requires_admin=True),
    StatusTransitionRule(_S.COMPLETE, (_S.PAID,), requires_admin=True),
    StatusTransitionRule(_S.REJECTED, (), requires_admin=True),
    StatusTransitionRule(_S.PAID, (), requires_admin=True),
)


def build_transition_table(
    rules: Iterable[StatusTransitionRule] = DEFAULT_RULES,
) -> TransitionTable:
    """Validate rules and freeze them into a lookup table."""
    mapping: dict[ApplicationStatus, StatusTransitionRule] = {}
    for rule in rules:
        if rule.source in mapping:
            raise TransitionTableError(f"Duplicate transition rule for {rule.source.value}")
        if rule.source in TERMINAL_STATUSES and rule.destinations:
            raise TransitionTableError(
                f"Terminal status {rule.source.value} cannot have destinations"
            )
        mapping[rule.source] = rule
    return TransitionTable(rules=MappingProxyType(mapping))


DEFAULT_TRANSITION_TABLE = build_transition_table()


def is_terminal(status: ApplicationStatus | str) -> bool:
    return parse_status(status) in TERMINAL_STATUSES
