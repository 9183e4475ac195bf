from pydantic import BaseModel, ConfigDict, Field


class Base(BaseModel):
    # PagerDuty adds fields to its payloads without versioning them
    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        extra="ignore",
        populate_by_name=True,
    )


class APIObject(Base):
    """Reference to another PagerDuty resource, as embedded in responses."""

    id: str
    type: str | None = None
    summary: str | None = None
    self_url: str | None = Field(None, alias="self")
    html_url: str | None = None
