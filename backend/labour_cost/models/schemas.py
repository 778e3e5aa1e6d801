from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from labour_cost.models.roster import Shift, StaffMember
from labour_cost.services.day_types import DayType


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Shift conditions ---

class ConditionKind(str, Enum):
    BROKEN_SHIFT = "broken_shift"
    ON_CALL = "on_call"
    SLEEPOVER = "sleepover"
    RECALL = "recall"
    SLEEPOVER_DISTURBED = "sleepover_disturbed"
    HIGHER_DUTIES = "higher_duties"
    TRAVEL = "travel"


class ConditionOrigin(str, Enum):
    EXPLICIT = "explicit"                    # tagged or recorded on the shift
    INFERRED = "inferred"                    # guessed from times and breaks


class DetectedCondition(_Record):
    kind: ConditionKind
    origin: ConditionOrigin
    confidence: float
    reason: str


class ShiftConditions(_Record):
    shift_id: str
    conditions: list[DetectedCondition] = []

    def has(self, kind: ConditionKind) -> bool:
        return any(c.kind == kind for c in self.conditions)

    def get(self, kind: ConditionKind) -> Optional[DetectedCondition]:
        return next((c for c in self.conditions if c.kind == kind), None)

    @property
    def needs_confirmation(self) -> bool:
        return any(c.origin == ConditionOrigin.INFERRED for c in self.conditions)


class ShiftValidationResult(_Record):
    is_valid: bool
    errors: list[str]
    warnings: list[str]
    suggestions: list[str]


class AllowanceEligibility(_Record):
    allowance_code: str
    allowance_name: str
    is_eligible: bool
    reason: str
    auto_detected: bool
    requires_confirmation: bool


# --- Shift cost ---

class AppliedAllowance(_Record):
    id: str
    name: str
    amount: float
    description: str


class ShiftCostBreakdown(_Record):
    shift_id: str
    staff_id: str
    staff_name: str
    shift_date: date
    day_of_week: str
    day_type: DayType
    start_time: str
    end_time: str
    gross_minutes: int
    break_minutes: int
    net_minutes: int
    net_hours: float

    base_hourly_rate: float
    effective_hourly_rate: float             # after casual loading
    classification: str
    employment_type: str

    ordinary_hours: float = 0
    ordinary_pay: float = 0
    night_hours: float = 0                   # included in ordinary_hours

    evening_hours: float = 0
    evening_pay: float = 0
    evening_penalty_rate: float = 100

    saturday_hours: float = 0
    saturday_pay: float = 0
    saturday_penalty_rate: float = 0

    sunday_hours: float = 0
    sunday_pay: float = 0
    sunday_penalty_rate: float = 0

    public_holiday_hours: float = 0
    public_holiday_pay: float = 0
    public_holiday_penalty_rate: float = 0

    overtime_hours: float = 0
    overtime_pay: float = 0

    allowances: list[AppliedAllowance] = []
    total_allowances: float = 0

    gross_pay: float = 0
    superannuation: float = 0
    total_cost: float = 0

    is_public_holiday: bool = False
    is_school_holiday: bool = False
    is_casual: bool = False
    has_overtime: bool = False

    conditions: list[DetectedCondition] = []
    warnings: list[str] = []
    errors: list[str] = []

    @property
    def penalty_hours(self) -> float:
        return self.evening_hours + self.saturday_hours + self.sunday_hours + self.public_holiday_hours

    @property
    def penalty_pay(self) -> float:
        return self.evening_pay + self.saturday_pay + self.sunday_pay + self.public_holiday_pay


# --- Aggregates ---

class WeeklyCostSummary(_Record):
    staff_id: str
    staff_name: str
    week_start: date
    week_end: date

    total_hours: float
    ordinary_hours: float
    overtime_hours: float
    penalty_hours: float

    ordinary_pay: float
    overtime_pay: float
    penalty_pay: float
    allowances: float

    gross_pay: float
    superannuation: float
    total_cost: float

    max_hours_exceeded: bool
    shifts: list[ShiftCostBreakdown]


class DayTypeTotals(_Record):
    hours: float = 0
    cost: float = 0
    percent: float = 0


class DayTypeBreakdown(_Record):
    weekday: DayTypeTotals = DayTypeTotals()
    saturday: DayTypeTotals = DayTypeTotals()
    sunday: DayTypeTotals = DayTypeTotals()
    public_holiday: DayTypeTotals = DayTypeTotals()


class RosterCostAggregate(_Record):
    start_date: date
    end_date: date
    total_gross_pay: float
    total_superannuation: float
    total_cost: float
    total_hours: float
    staff_costs: list[WeeklyCostSummary]
    by_day_type: DayTypeBreakdown


# --- Forecast ---

class DailyForecast(_Record):
    date: date
    day_of_week: str
    day_type: DayType
    is_public_holiday: bool
    is_school_holiday: bool

    projected_shifts: int
    projected_hours: float
    projected_cost: float
    projected_superannuation: float
    total_projected_cost: float

    ordinary_cost: float
    penalty_cost: float
    overtime_cost: float
    allowances_cost: float

    confidence: float                        # 0-1


class CostComparison(_Record):
    cost_difference: float
    percent_change: float


class BudgetComparison(_Record):
    budget_amount: float
    variance: float
    percent_variance: float
    is_over_budget: bool


class WeeklyForecast(_Record):
    week_start: date
    week_end: date
    week_number: int
    days: list[DailyForecast]

    total_shifts: int
    total_hours: float
    total_cost: float

    vs_last_week: CostComparison
    vs_budget: BudgetComparison

    avg_daily_cost: float
    peak_day: str
    peak_day_cost: float
    confidence: float


class RiskSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskFactor(_Record):
    type: str
    description: str
    estimated_impact: float
    severity: RiskSeverity


class ForecastSummary(_Record):
    period_start: date
    period_end: date
    weeks_count: int

    baseline_cost: float
    total_projected_cost: float
    total_projected_hours: float
    avg_weekly_cost: float
    avg_hourly_cost: float

    period_budget: float
    projected_variance: float
    percent_variance: float
    is_over_budget: bool

    by_day_type: DayTypeBreakdown
    risk_factors: list[RiskFactor]
    recommendations: list[str]
    weeks: list[WeeklyForecast]


class ShiftProjection(_Record):
    estimated_cost: float
    base_pay: float
    penalties: float
    superannuation: float
    warnings: list[str]


# --- API requests ---

class ShiftCostRequest(BaseModel):
    award_id: Optional[str] = None
    classification_id: Optional[str] = None
    shift: Shift
    staff: StaffMember


class WeeklyCostRequest(BaseModel):
    award_id: Optional[str] = None
    week_start: date
    week_end: date
    staff: StaffMember
    shifts: list[Shift]


class RosterCostRequest(BaseModel):
    award_id: Optional[str] = None
    start_date: date
    end_date: date
    staff: list[StaffMember]
    shifts: list[Shift]


class ShiftCheckRequest(BaseModel):
    shift: Shift
    staff: Optional[StaffMember] = None


class ShiftCheckResponse(BaseModel):
    validation: ShiftValidationResult
    conditions: ShiftConditions
    enriched_shift: Shift
    eligibility: list[AllowanceEligibility] = []


class ForecastRequest(BaseModel):
    award_id: Optional[str] = None
    current_shifts: list[Shift]
    staff: list[StaffMember]
    forecast_weeks: Optional[int] = Field(default=None, ge=1, le=52)
    weekly_budget: Optional[float] = Field(default=None, ge=0)
    reference_date: Optional[date] = None


class HealthResponse(BaseModel):
    status: str
    environment: str
    awards_loaded: int


class RatesResponse(BaseModel):
    award_id: str
    classification_id: str
    classification: str
    employment_type: str
    effective_date: date
    base_rate: float
    effective_rate: float
    saturday_rate: float
    sunday_rate: float
    public_holiday_rate: float
    evening_rate: Optional[float] = None
    night_rate: Optional[float] = None
    overtime_first_2_hours: float
    overtime_after_2_hours: float
