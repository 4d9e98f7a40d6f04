"""
Status transition checks.

Single source of truth for which status changes are legal and under which
preconditions. Everything here is pure: callers pass in the actor facts
(admin rank, ownership, document completeness, comment) and get a result
back. Nothing raises for domain conditions; missing configuration means
"no transitions".
"""

from dataclasses import dataclass
from enum import Enum

from backoffice.workflow.statuses import (
    ApplicationStatus,
    DEFAULT_TRANSITION_TABLE,
    TransitionTable,
    parse_status,
)


class TransitionFailure(str, Enum):
    INVALID_CURRENT_STATUS = "invalid_current_status"
    INVALID_TARGET = "invalid_target"
    ADMIN_REQUIRED = "admin_required"
    NOT_OWNER = "not_owner"
    DOCUMENTS_MISSING = "documents_missing"
    COMMENT_REQUIRED = "comment_required"


# Failures the UI resolves by asking someone else vs. by fixing the record.
AUTHORIZATION_FAILURES = frozenset({TransitionFailure.ADMIN_REQUIRED, TransitionFailure.NOT_OWNER})
PRECONDITION_FAILURES = frozenset({TransitionFailure.DOCUMENTS_MISSING, TransitionFailure.COMMENT_REQUIRED})


@dataclass(frozen=True)
class TransitionResult:
    is_valid: bool
    error: str | None = None
    reason: TransitionFailure | None = None

    @classmethod
    def ok(cls) -> "TransitionResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, reason: TransitionFailure, error: str) -> "TransitionResult":
        return cls(is_valid=False, error=error, reason=reason)


@dataclass(frozen=True)
class TransitionAttempt:
    from_status: ApplicationStatus | str
    to_status: ApplicationStatus | str
    actor_is_admin: bool
    actor_is_owner: bool
    has_required_documents: bool = False
    comment: str | None = None


def _label(value: ApplicationStatus | str | None) -> str:
    return value.value if isinstance(value, ApplicationStatus) else str(value)


def get_available_transitions(
    current: ApplicationStatus | str,
    is_admin: bool,
    is_owner: bool,
    has_documents: bool = False,
    table: TransitionTable = DEFAULT_TRANSITION_TABLE,
) -> list[ApplicationStatus]:
    """
    Statuses the actor may move the record to, in declaration order.

    All-or-nothing: if any gate of the current status's rule fails, the
    list is empty rather than filtered.
    """
    rule = table.rule_for(parse_status(current))
    if rule is None:
        return []
    if rule.requires_admin and not is_admin:
        return []
    # Non-admin actors may only act on records they own.
    if not is_admin and not is_owner:
        return []
    if rule.requires_documents and not has_documents:
        return []
    return list(rule.destinations)


def validate_status_transition(
    from_status: ApplicationStatus | str,
    to_status: ApplicationStatus | str,
    is_admin: bool,
    is_owner: bool,
    has_documents: bool = False,
    comment: str | None = None,
    table: TransitionTable = DEFAULT_TRANSITION_TABLE,
) -> TransitionResult:
    """
    Validate one proposed status change.

    Checks run in a fixed order and the first failure is reported:
    current status, target, admin rank, ownership, documents, comment.
    """
    rule = table.rule_for(parse_status(from_status))
    if rule is None:
        return TransitionResult.fail(
            TransitionFailure.INVALID_CURRENT_STATUS, "Invalid current status",
        )

    target = parse_status(to_status)
    if target is None or target not in rule.destinations:
        return TransitionResult.fail(
            TransitionFailure.INVALID_TARGET,
            f"Cannot transition from {_label(from_status)} to {_label(to_status)}",
        )

    if rule.requires_admin and not is_admin:
        return TransitionResult.fail(
            TransitionFailure.ADMIN_REQUIRED, "Admin access required for this transition",
        )

    if not is_admin and not is_owner:
        return TransitionResult.fail(
            TransitionFailure.NOT_OWNER, "You can only modify your own applications",
        )

    if rule.requires_documents and not has_documents:
        return TransitionResult.fail(
            TransitionFailure.DOCUMENTS_MISSING, "All mandatory documents must be uploaded",
        )

    if rule.requires_comment and (not comment or not comment.strip()):
        return TransitionResult.fail(
            TransitionFailure.COMMENT_REQUIRED, "Comment is required for this status change",
        )

    return TransitionResult.ok()


def validate_attempt(
    attempt: TransitionAttempt,
    table: TransitionTable = DEFAULT_TRANSITION_TABLE,
) -> TransitionResult:
    return validate_status_transition(
        attempt.from_status,
        attempt.to_status,
        is_admin=attempt.actor_is_admin,
        is_owner=attempt.actor_is_owner,
        has_documents=attempt.has_required_documents,
        comment=attempt.comment,
        table=table,
    )
