"""
Roster inputs: shifts and staff members, as supplied by the scheduling layer.

A shift is a tagged union on ``shift_type``: each variant only carries the
detail record that makes sense for it, so an on-call shift can never hold
sleepover details and vice versa. Higher duties and travel can apply to any
shift and live on the common base.
"""
from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter

TimeOfDay = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]   # HH:MM 24h


class ShiftType(str, Enum):
    REGULAR = "regular"
    ON_CALL = "on_call"
    RECALL = "recall"
    SLEEPOVER = "sleepover"
    BROKEN = "broken"
    EMERGENCY = "emergency"


class OnCallDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_time: TimeOfDay
    end_time: TimeOfDay
    was_recalled: bool = False
    recall_time: Optional[TimeOfDay] = None
    recall_duration: Optional[int] = Field(default=None, ge=0)   # minutes worked after recall


class SleepoverDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    bedtime_start: TimeOfDay
    bedtime_end: TimeOfDay
    was_disturbed: bool = False
    disturbance_minutes: Optional[int] = Field(default=None, ge=0)


class BrokenShiftDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_shift_end: Optional[TimeOfDay] = None
    second_shift_start: Optional[TimeOfDay] = None
    unpaid_gap_minutes: int = Field(ge=0)


class HigherDuties(BaseModel):
    model_config = ConfigDict(frozen=True)

    classification: str
    duration_minutes: Optional[int] = Field(default=None, ge=0)   # None = whole shift


class ShiftBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    staff_id: str
    shift_date: date
    start_time: TimeOfDay
    end_time: TimeOfDay                      # earlier than start_time = crosses midnight
    break_minutes: int = Field(default=0, ge=0)
    higher_duties: Optional[HigherDuties] = None
    travel_kilometres: float = Field(default=0, ge=0)


class RegularShift(ShiftBase):
    shift_type: Literal["regular"] = "regular"


class OnCallShift(ShiftBase):
    shift_type: Literal["on_call"] = "on_call"
    on_call: Optional[OnCallDetails] = None


class RecallShift(ShiftBase):
    shift_type: Literal["recall"] = "recall"
    on_call: Optional[OnCallDetails] = None


class SleepoverShift(ShiftBase):
    shift_type: Literal["sleepover"] = "sleepover"
    sleepover: Optional[SleepoverDetails] = None


class BrokenShift(ShiftBase):
    shift_type: Literal["broken"] = "broken"
    broken: Optional[BrokenShiftDetails] = None


class EmergencyShift(ShiftBase):
    shift_type: Literal["emergency"] = "emergency"


def _shift_tag(value) -> str:
    if isinstance(value, dict):
        return value.get("shift_type", ShiftType.REGULAR.value)
    return getattr(value, "shift_type", ShiftType.REGULAR.value)


Shift = Annotated[
    Union[
        Annotated[RegularShift, Tag("regular")],
        Annotated[OnCallShift, Tag("on_call")],
        Annotated[RecallShift, Tag("recall")],
        Annotated[SleepoverShift, Tag("sleepover")],
        Annotated[BrokenShift, Tag("broken")],
        Annotated[EmergencyShift, Tag("emergency")],
    ],
    Discriminator(_shift_tag),
]

shift_adapter = TypeAdapter(Shift)


class EmploymentType(str, Enum):
    CASUAL = "casual"
    PART_TIME = "part_time"
    FULL_TIME = "full_time"


class Qualification(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str                                # e.g. "first_aid", "cert_iii"
    is_expired: bool = False


class StaffMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    employment_type: EmploymentType
    hourly_rate: Optional[float] = Field(default=None, gt=0)   # overrides the classification rate
    qualifications: list[Qualification] = []
    role: str = ""
    max_hours_per_week: float = 38

    @property
    def is_casual(self) -> bool:
        return self.employment_type == EmploymentType.CASUAL
