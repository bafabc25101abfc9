"""
Write Guard: explicit operator opt-in before any call that mutates remote state.

The flag is read from the process environment at the time of the write,
never from settings or a .env file.
"""
from typing import Optional
import os

from pos_skills.errors import WriteNotConfirmedError

CONFIRM_VARIABLE = "CONFIRM_WRITE"
CONFIRM_VALUE = "YES"


def write_confirmation() -> Optional[str]:
    return os.environ.get(CONFIRM_VARIABLE)


def is_write_confirmed(value: Optional[str]) -> bool:
    """Only the exact string YES confirms; no trimming, no case folding."""
    return value == CONFIRM_VALUE


def confirm_write(value: Optional[str]) -> None:
    """Raise WriteNotConfirmedError unless CONFIRM_WRITE is exactly YES."""
    if not is_write_confirmed(value):
        raise WriteNotConfirmedError(
            f"write not confirmed: set {CONFIRM_VARIABLE}={CONFIRM_VALUE} to allow this operation"
        )
