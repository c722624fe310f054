# otrs/errors.py

from typing import Optional


class OtrsError(Exception):
    """Base class for everything the OTRS client raises."""


class InvalidArgument(OtrsError, ValueError):
    """A required argument was empty or unusable. Raised before any I/O."""

    def __init__(self, field: str, reason: str = "must not be empty"):
        self.field = field
        super().__init__(f"{field} {reason}")


class TemplateLoadError(OtrsError):
    """A bundled envelope template is missing or is not well-formed XML."""

    def __init__(self, kind, detail: str):
        self.kind = kind
        super().__init__(f"Could not load {kind} template: {detail}")


class TransportError(OtrsError):
    """Network or HTTP-level failure talking to the connector."""

    def __init__(self, url: str, detail: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Request to {url} failed: {detail}")


class RemoteProtocolError(OtrsError):
    """The response was not what the connector is supposed to send back."""


class RemoteOperationError(OtrsError):
    """The connector answered with an <Error> element."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class ConfigurationError(OtrsError, RuntimeError):
    """Missing or broken OTRS_* settings in the environment / .env."""
