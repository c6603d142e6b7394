"""Error kinds shared by services and the HTTP layer."""

from typing import Any, Sequence


class UnsupportedOperationError(Exception):
    """Raised by administrative actions that exist only as placeholders."""

    code = "unsupported_operation"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"{action} is not available")


def first_error_message(errors: Sequence[dict[str, Any]]) -> str:
    """Return the message of the first violated validation rule."""
    if not errors:
        return "Invalid request"
    return str(errors[0].get("msg") or "Invalid request")
