from backoffice.workflow.statuses import (
    ApplicationStatus, StatusTransitionRule, TransitionTable, TransitionTableError,
    DEFAULT_RULES, DEFAULT_TRANSITION_TABLE, INITIAL_STATUS, TERMINAL_STATUSES,
    build_transition_table, is_terminal, parse_status,
)
from backoffice.workflow.transitions import (
    TransitionAttempt, TransitionFailure, TransitionResult,
    AUTHORIZATION_FAILURES, PRECONDITION_FAILURES,
    get_available_transitions, validate_status_transition, validate_attempt,
)
from backoffice.workflow.display import (
    StatusColor, StatusMetadata, STATUS_COLORS, STATUS_DESCRIPTIONS,
    get_status_color, get_status_description, get_next_recommended_status,
    status_metadata, all_status_metadata,
)

__all__ = [
    "ApplicationStatus", "StatusTransitionRule", "TransitionTable", "TransitionTableError",
    "DEFAULT_RULES", "DEFAULT_TRANSITION_TABLE", "INITIAL_STATUS", "TERMINAL_STATUSES",
    "build_transition_table", "is_terminal", "parse_status",
    "TransitionAttempt", "TransitionFailure", "TransitionResult",
    "AUTHORIZATION_FAILURES", "PRECONDITION_FAILURES",
    "get_available_transitions", "validate_status_transition", "validate_attempt",
    "StatusColor", "StatusMetadata", "STATUS_COLORS", "STATUS_DESCRIPTIONS",
    "get_status_color", "get_status_description", "get_next_recommended_status",
    "status_metadata", "all_status_metadata",
]
