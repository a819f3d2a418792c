"""Job listing state machine for managing valid status transitions."""

from jobboard.models.job import JobStatus


# Valid state transition matrix
VALID_TRANSITIONS: dict[str, set[str]] = {
    JobStatus.OPEN.value: {JobStatus.CLOSED.value, JobStatus.CANCELLED.value},
    JobStatus.CLOSED.value: {JobStatus.CLOSED.value},  # Re-approval replaces the selected candidate
    JobStatus.CANCELLED.value: {JobStatus.CANCELLED.value},  # Repeat cancel is a no-op
}


def validate_transition(current_status: str, next_status: str) -> tuple[bool, str | None]:
    """
    Validate if a state transition is allowed.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if current_status not in VALID_TRANSITIONS:
        return False, f"Unknown current status: {current_status}"

    if next_status not in VALID_TRANSITIONS:
        return False, f"Unknown next status: {next_status}"

    allowed_next = VALID_TRANSITIONS[current_status]
    if next_status not in allowed_next:
        return (
            False,
            f"Invalid transition from {current_status} to {next_status}. "
            f"Allowed transitions: {', '.join(sorted(allowed_next)) or 'none'}",
        )

    return True, None


def allowed_sources(next_status: str) -> list[str]:
    """Statuses from which ``next_status`` may be entered."""
    return sorted(
        current for current, allowed in VALID_TRANSITIONS.items() if next_status in allowed
    )
