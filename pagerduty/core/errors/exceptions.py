from typing import Any


class CoreException(Exception):
    def __init__(
        self, message: str | None = None, additional_info: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.additional_info = additional_info


class PagerDutyException(CoreException):
    pass


class TransportError(PagerDutyException):
    """The request never produced a usable HTTP response."""


class APIError(TransportError):
    """The API answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        *,
        code: int | None = None,
        errors: list[str] | None = None,
    ):
        super().__init__(
            message or f"PagerDuty API responded with HTTP {status_code}",
            additional_info={"status_code": status_code, "code": code, "errors": errors or []},
        )
        self.status_code = status_code
        self.code = code
        self.errors = errors or []

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class DecodeError(PagerDutyException):
    """The response body does not match the expected page schema."""
