from typing import List, Optional


class RezdyAgentError(Exception):
    """Base class for errors raised by the Rezdy Agent client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RezdyValidationError(RezdyAgentError):
    """A request was rejected locally before reaching the upstream API."""

    def __init__(self, label: str, errors: List[str]):
        super().__init__(f"{label}: {', '.join(errors)}")
        self.label = label
        self.errors = list(errors)


class RezdyAPIError(RezdyAgentError):
    """The upstream call failed: transport error, bad body, or non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ClientNotConfiguredError(RezdyAgentError):
    def __init__(self):
        super().__init__(
            "Rezdy Agent client not configured. Please run rezdy_agent_configure first."
        )
