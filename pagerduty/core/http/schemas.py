from pydantic import Field

from pagerduty.core.schemas import Base


class ErrorObject(Base):
    code: int | None = None
    message: str | None = None
    errors: list[str] = Field(default_factory=list)


class ErrorEnvelope(Base):
    error: ErrorObject
