"""Core application modules."""

from jobboard.core.state_machine import JobStatus, VALID_TRANSITIONS, allowed_sources, validate_transition

__all__ = [
    "JobStatus",
    "VALID_TRANSITIONS",
    "allowed_sources",
    "validate_transition",
]
