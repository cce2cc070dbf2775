"""Raw intranet planning record, decoded into tagged variants."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RegistrationStatus(str, Enum):
    """Per-event registration state reported by the intranet."""

    PRESENT = "present"
    REGISTERED = "registered"
    ABSENT = "absent"
    NOT_REGISTERED = "not_registered"

    @classmethod
    def decode(cls, value: Any) -> "RegistrationStatus":
        """Decode the ``event_registered`` field (string enum or ``false``)."""
        if isinstance(value, str):
            try:
                status = cls(value.strip().lower())
            except ValueError:
                return cls.NOT_REGISTERED
            return status
        return cls.NOT_REGISTERED

    @property
    def is_registered(self) -> bool:
        return self is not RegistrationStatus.NOT_REGISTERED


class SlotKind(str, Enum):
    """Which appointment reservation, if any, the user holds."""

    INDIVIDUAL = "individual"
    GROUP = "group"
    NONE = "none"


class SlotReservation(BaseModel):
    """Personal appointment slot, packed as ``"start|end"``."""

    model_config = ConfigDict(frozen=True)

    kind: SlotKind = SlotKind.NONE
    packed: str | None = None

    @classmethod
    def decode(cls, individual: Any, group: Any) -> "SlotReservation":
        """Pick the individual reservation over the group one."""
        if isinstance(individual, str) and individual.strip():
            return cls(kind=SlotKind.INDIVIDUAL, packed=individual.strip())
        if isinstance(group, str) and group.strip():
            return cls(kind=SlotKind.GROUP, packed=group.strip())
        return cls()

    @property
    def is_reserved(self) -> bool:
        return self.kind is not SlotKind.NONE


class Room(BaseModel):
    """Room assigned to an event."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    code: str = ""


class Instructor(BaseModel):
    """Instructor attached to an event."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    login: str = ""
    title: str | None = None

    @property
    def display_name(self) -> str:
        return self.title or self.login


class RawEvent(BaseModel):
    """One entry of the intranet ``/planning/load`` response.

    Loosely typed fields are decoded once here: ``event_registered`` becomes
    a ``RegistrationStatus``, ``is_rdv`` a boolean and the two
    ``rdv_*_registered`` strings a single ``SlotReservation``.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    scolaryear: str = ""
    codemodule: str = ""
    codeinstance: str = ""
    codeacti: str
    codeevent: str
    titlemodule: str = ""
    acti_title: str = ""
    start: str
    end: str
    room: Room | None = None
    instance_location: str | None = None
    prof_inst: list[Instructor] = Field(default_factory=list)
    semester: int = 0
    registered: bool = False
    past: bool = False
    nb_hours: str | None = None

    registration: RegistrationStatus = Field(
        default=RegistrationStatus.NOT_REGISTERED, alias="event_registered"
    )
    is_appointment: bool = Field(default=False, alias="is_rdv")
    slot: SlotReservation = Field(default_factory=SlotReservation)

    @model_validator(mode="before")
    @classmethod
    def decode_slot(cls, data: Any) -> Any:
        """Fold ``rdv_indiv_registered``/``rdv_group_registered`` into ``slot``."""
        if isinstance(data, dict) and "slot" not in data:
            data = dict(data)
            data["slot"] = SlotReservation.decode(
                data.pop("rdv_indiv_registered", None),
                data.pop("rdv_group_registered", None),
            )
        return data

    @field_validator("registration", mode="before")
    @classmethod
    def decode_registration(cls, v: Any) -> RegistrationStatus:
        if isinstance(v, RegistrationStatus):
            return v
        return RegistrationStatus.decode(v)

    @field_validator("is_appointment", mode="before")
    @classmethod
    def decode_is_rdv(cls, v: Any) -> bool:
        # "1", "0", true, false, 1, 0 all occur
        return v is True or v == 1 or v == "1"

    @field_validator("prof_inst", mode="before")
    @classmethod
    def null_instructors(cls, v: Any) -> Any:
        return v if v is not None else []

    @field_validator("semester", mode="before")
    @classmethod
    def null_semester(cls, v: Any) -> Any:
        return v if v is not None else 0

    @field_validator("registered", "past", mode="before")
    @classmethod
    def null_flag(cls, v: Any) -> Any:
        return v if v is not None else False
