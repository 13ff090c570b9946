"""
Application errors for clean API error handling.

Services raise these; the API layer maps them to HTTP status codes. Use
ServiceUnavailableError when the Gemini credential is missing so the request
fails before any upstream call is attempted.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. the Gemini API) is misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidActionError(ValueError):
    """Raised when the envelope's action is missing or not a recognized tag."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"Unrecognized action: {action!r}")


class InvalidPayloadError(ValueError):
    """Raised when the request body or the action's payload fails validation."""

    def __init__(self, action: str, detail: str = "") -> None:
        self.action = action
        self.detail = detail
        super().__init__(f"Invalid payload for {action}: {detail}" if detail else f"Invalid payload for {action}")
