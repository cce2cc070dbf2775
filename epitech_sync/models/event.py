"""Canonical event model with Pydantic v2 validation."""

from pydantic import AwareDatetime, BaseModel, ConfigDict, model_validator


class ModuleRef(BaseModel):
    """Module an event belongs to."""

    model_config = ConfigDict(frozen=True)

    code: str
    instance: str = ""
    title: str = ""


class ActivityRef(BaseModel):
    """Activity an event belongs to."""

    model_config = ConfigDict(frozen=True)

    code: str
    title: str = ""


class CanonicalEvent(BaseModel):
    """Normalized, immutable event: the unit of reconciliation and export.

    ``id`` is derived from the intranet compound key and is the correlation
    key stored in every remote calendar. Text fields are unescaped; dates are
    timezone-aware instants.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    location: str = ""
    start_date: AwareDatetime
    end_date: AwareDatetime
    module: ModuleRef
    activity: ActivityRef
    event_code: str = ""
    semester: int = 0
    instructors: tuple[str, ...] = ()
    is_registered: bool = False
    is_past: bool = False

    @model_validator(mode="after")
    def validate_dates(self):
        """Ensure the event does not end before it starts."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self
