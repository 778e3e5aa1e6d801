"""
Award reference data: awards, classifications, rate schedules and allowances.
Loaded once into an AwardCatalog and passed around explicitly; never mutated.
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AllowanceUnit(str, Enum):
    PER_HOUR = "per_hour"
    PER_SHIFT = "per_shift"
    PER_WEEK = "per_week"
    PER_KM = "per_km"
    PER_DAY = "per_day"
    ONE_OFF = "one_off"
    PER_OCCASION = "per_occasion"


class AllowanceKind(str, Enum):
    FIRST_AID = "first_aid"
    LEADERSHIP = "leadership"
    ON_CALL = "on_call"
    SLEEPOVER = "sleepover"
    BROKEN_SHIFT = "broken_shift"
    HIGHER_DUTIES = "higher_duties"
    VEHICLE = "vehicle"
    MEAL = "meal"
    LAUNDRY = "laundry"
    OTHER = "other"


class AllowanceDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: AllowanceKind
    unit: AllowanceUnit
    amount: float = Field(ge=0)
    description: str = ""


class RateScheduleEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    effective_from: date
    weekly_rate: Optional[float] = None
    hourly_rate: Optional[float] = None

    @model_validator(mode="after")
    def _has_a_rate(self):
        if self.weekly_rate is None and self.hourly_rate is None:
            raise ValueError("rate schedule entry needs a weekly or hourly rate")
        return self


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    level: str                                   # e.g. "Level 3.1"
    description: str = ""
    base_hourly_rate: float = Field(gt=0)
    base_weekly_rate: Optional[float] = None
    qualification_required: Optional[str] = None
    rate_schedule: tuple[RateScheduleEntry, ...] = ()


class OvertimeRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_2_hours: float = 150                   # percent
    after_2_hours: float = 200
    sunday: float = 200


class AwardDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    name: str
    short_name: str = ""
    industry: str = ""
    effective_date: Optional[date] = None
    casual_loading: float = 25                   # percent added on top
    saturday_penalty: float = 150
    sunday_penalty: float = 200
    public_holiday_penalty: float = 250
    evening_penalty: Optional[float] = None
    night_penalty: Optional[float] = None
    overtime_rates: OvertimeRates = OvertimeRates()
    classifications: tuple[Classification, ...]
    allowances: tuple[AllowanceDefinition, ...] = ()
    default_classification_id: str

    @model_validator(mode="after")
    def _default_classification_exists(self):
        if not any(c.id == self.default_classification_id for c in self.classifications):
            raise ValueError(
                f"award {self.id}: default classification "
                f"{self.default_classification_id!r} is not one of its classifications"
            )
        return self

    def get_classification(self, classification_id: str) -> Optional[Classification]:
        return next((c for c in self.classifications if c.id == classification_id), None)

    @property
    def default_classification(self) -> Classification:
        return self.get_classification(self.default_classification_id)

    def find_allowance(self, kind: AllowanceKind) -> Optional[AllowanceDefinition]:
        return next((a for a in self.allowances if a.kind == kind), None)
