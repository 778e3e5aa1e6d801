"""
Detection and validation of special shift conditions that trigger allowances
(on-call, sleepover, broken shift, recall, higher duties, travel).

Explicit markers on the shift always win. Where a shift is not tagged with
the category, two heuristics fill the gap on any shift type: a long break
suggests a broken shift, and a long overnight shift suggests a sleepover.
Inferred conditions are reported with their origin so the caller can ask for
confirmation; nothing here mutates the shift it is given.
"""
import logging
from typing import Optional

from labour_cost.models.roster import (
    BrokenShift,
    BrokenShiftDetails,
    OnCallDetails,
    OnCallShift,
    RecallShift,
    RegularShift,
    Shift,
    SleepoverShift,
    StaffMember,
)
from labour_cost.models.schemas import (
    AllowanceEligibility,
    ConditionKind,
    ConditionOrigin,
    DetectedCondition,
    ShiftConditions,
    ShiftValidationResult,
)
from labour_cost.services.award_rules import (
    ASSUMED_PAID_BREAK_MINUTES,
    BROKEN_SHIFT_BREAK_MINUTES,
    DEFAULT_VEHICLE_RATE_PER_KM,
    INFERRED_CONFIDENCE,
    LEADERSHIP_ROLES,
    LONG_SHIFT_NET_MINUTES,
    MINIMUM_ENGAGEMENT_MINUTES,
    SLEEPOVER_MIN_OVERNIGHT_MINUTES,
)
from labour_cost.services.time_windows import crosses_midnight, span_minutes

logger = logging.getLogger(__name__)


def _on_call_details(shift: Shift) -> Optional[OnCallDetails]:
    if isinstance(shift, (OnCallShift, RecallShift)):
        return shift.on_call
    return None


def _long_break(shift: Shift) -> bool:
    return shift.break_minutes > BROKEN_SHIFT_BREAK_MINUTES


def _long_overnight(shift: Shift) -> bool:
    return (
        crosses_midnight(shift.start_time, shift.end_time)
        and span_minutes(shift.start_time, shift.end_time) >= SLEEPOVER_MIN_OVERNIGHT_MINUTES
    )


def is_broken_shift(shift: Shift) -> bool:
    # Heuristic only: a real broken shift has two recorded segments.
    if isinstance(shift, BrokenShift):
        return True
    return _long_break(shift)


def is_on_call_shift(shift: Shift) -> bool:
    return isinstance(shift, OnCallShift) or _on_call_details(shift) is not None


def is_sleepover_shift(shift: Shift) -> bool:
    if isinstance(shift, SleepoverShift):
        return True
    return _long_overnight(shift)


def was_recalled_during_on_call(shift: Shift) -> bool:
    if isinstance(shift, RecallShift):
        return True
    details = _on_call_details(shift)
    return bool(details and details.was_recalled)


def was_sleepover_disturbed(shift: Shift) -> bool:
    return isinstance(shift, SleepoverShift) and bool(shift.sleepover and shift.sleepover.was_disturbed)


def has_higher_duties(shift: Shift) -> bool:
    return bool(shift.higher_duties and shift.higher_duties.classification)


def broken_shift_gap_minutes(shift: Shift) -> int:
    """Unpaid gap of a broken shift, from its details or estimated from a long break."""
    if isinstance(shift, BrokenShift) and shift.broken:
        return shift.broken.unpaid_gap_minutes
    if _long_break(shift):
        return shift.break_minutes - ASSUMED_PAID_BREAK_MINUTES
    return 0


def travel_allowance_amount(shift: Shift, rate_per_km: float = DEFAULT_VEHICLE_RATE_PER_KM) -> float:
    if shift.travel_kilometres <= 0:
        return 0.0
    return shift.travel_kilometres * rate_per_km


def _explicit(kind: ConditionKind, reason: str) -> DetectedCondition:
    return DetectedCondition(kind=kind, origin=ConditionOrigin.EXPLICIT, confidence=1.0, reason=reason)


def _inferred(kind: ConditionKind, reason: str) -> DetectedCondition:
    return DetectedCondition(kind=kind, origin=ConditionOrigin.INFERRED, confidence=INFERRED_CONFIDENCE, reason=reason)


def detect_conditions(shift: Shift) -> ShiftConditions:
    """Every special condition that applies to the shift, strongest evidence first."""
    found: list[DetectedCondition] = []

    if isinstance(shift, BrokenShift):
        found.append(_explicit(
            ConditionKind.BROKEN_SHIFT,
            "Recorded broken shift details" if shift.broken else "Shift tagged as broken",
        ))
    elif is_broken_shift(shift):
        found.append(_inferred(
            ConditionKind.BROKEN_SHIFT,
            f"Unpaid break exceeds 1 hour ({shift.break_minutes} mins)",
        ))

    if is_on_call_shift(shift):
        found.append(_explicit(
            ConditionKind.ON_CALL,
            "Shift tagged as on-call" if isinstance(shift, OnCallShift) else "On-call details recorded",
        ))

    if isinstance(shift, SleepoverShift):
        found.append(_explicit(ConditionKind.SLEEPOVER, "Shift tagged as sleepover"))
    elif is_sleepover_shift(shift):
        hours = span_minutes(shift.start_time, shift.end_time) / 60
        found.append(_inferred(
            ConditionKind.SLEEPOVER,
            f"Shift spans midnight for {hours:.1f} hours",
        ))

    if was_recalled_during_on_call(shift):
        found.append(_explicit(
            ConditionKind.RECALL,
            "Shift tagged as recall" if isinstance(shift, RecallShift) else "Recalled during on-call period",
        ))

    if was_sleepover_disturbed(shift):
        found.append(_explicit(ConditionKind.SLEEPOVER_DISTURBED, "Sleepover recorded as disturbed"))

    if has_higher_duties(shift):
        found.append(_explicit(
            ConditionKind.HIGHER_DUTIES,
            f"Performing {shift.higher_duties.classification} duties",
        ))

    if shift.travel_kilometres > 0:
        found.append(_explicit(
            ConditionKind.TRAVEL,
            f"{shift.travel_kilometres:g} km work-related travel",
        ))

    return ShiftConditions(shift_id=shift.id, conditions=found)


def enrich_shift(shift: Shift) -> Shift:
    """
    Returns a new shift with inferred conditions made explicit. Only regular
    shifts are changed; a sleepover inference takes precedence over a
    broken-shift inference.
    """
    if not isinstance(shift, RegularShift):
        return shift

    common = shift.model_dump(exclude={"shift_type"})
    if is_sleepover_shift(shift):
        logger.debug("Shift %s inferred as sleepover", shift.id)
        return SleepoverShift(**common)
    if is_broken_shift(shift):
        logger.debug("Shift %s inferred as broken shift", shift.id)
        return BrokenShift(
            **common,
            broken=BrokenShiftDetails(unpaid_gap_minutes=broken_shift_gap_minutes(shift)),
        )
    return shift


def validate_shift(shift: Shift) -> ShiftValidationResult:
    """Data problems (errors), likely mistakes (warnings) and hints (suggestions)."""
    errors: list[str] = []
    warnings: list[str] = []
    suggestions: list[str] = []

    gross_minutes = span_minutes(shift.start_time, shift.end_time)
    net_minutes = gross_minutes - shift.break_minutes

    if crosses_midnight(shift.start_time, shift.end_time) and not isinstance(shift, SleepoverShift):
        warnings.append(
            "This shift spans overnight. Consider marking as sleepover if employee stays at facility."
        )

    if _long_break(shift) and not isinstance(shift, BrokenShift):
        warnings.append(
            f"Break of {shift.break_minutes} minutes detected. If this is a broken/split shift, "
            "mark it as such to apply correct allowances."
        )

    if isinstance(shift, OnCallShift) and shift.on_call is None:
        warnings.append(
            "On-call shift missing details. Add on-call start/end times for accurate allowance calculation."
        )

    if isinstance(shift, RecallShift) and not (shift.on_call and shift.on_call.was_recalled):
        warnings.append("Recall shift should have on-call details with was_recalled=true.")

    if isinstance(shift, SleepoverShift) and shift.sleepover and shift.sleepover.was_disturbed \
            and not shift.sleepover.disturbance_minutes:
        warnings.append(
            "Sleepover was disturbed but disturbance duration not recorded. This affects pay calculation."
        )

    if shift.higher_duties and shift.higher_duties.duration_minutes is None:
        suggestions.append(
            "Higher duties recorded without duration. System will assume full shift at higher rate."
        )

    if net_minutes <= 0:
        errors.append("Break duration exceeds shift duration.")

    if net_minutes > LONG_SHIFT_NET_MINUTES:
        warnings.append(
            f"Long shift: {net_minutes / 60:.1f} net hours. Ensure overtime is correctly applied."
        )

    if 0 < net_minutes < MINIMUM_ENGAGEMENT_MINUTES:
        warnings.append(
            "Shift is less than 3 hours. Check minimum engagement requirements for applicable award."
        )

    for condition in detect_conditions(shift).conditions:
        if condition.origin == ConditionOrigin.INFERRED:
            suggestions.append(
                f"{condition.kind.value.replace('_', ' ').capitalize()} inferred: {condition.reason}. "
                "Please confirm."
            )

    return ShiftValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
    )


def has_valid_first_aid(staff: StaffMember) -> bool:
    return any(q.type == "first_aid" and not q.is_expired for q in staff.qualifications)


def detect_allowance_eligibility(shift: Shift, staff: StaffMember) -> list[AllowanceEligibility]:
    """Which allowances the shift attracts, and which of those were guessed."""
    conditions = detect_conditions(shift)
    out: list[AllowanceEligibility] = []

    on_call = conditions.get(ConditionKind.ON_CALL)
    out.append(AllowanceEligibility(
        allowance_code="ON_CALL",
        allowance_name="On Call Allowance",
        is_eligible=on_call is not None,
        reason="Shift marked as on-call period" if on_call else "Not an on-call shift",
        auto_detected=isinstance(shift, OnCallShift),
        requires_confirmation=False,
    ))

    sleepover = conditions.get(ConditionKind.SLEEPOVER)
    inferred_sleepover = bool(sleepover and sleepover.origin == ConditionOrigin.INFERRED)
    out.append(AllowanceEligibility(
        allowance_code="SLEEPOVER",
        allowance_name="Sleepover Allowance",
        is_eligible=sleepover is not None,
        reason="Employee required to sleep overnight at workplace" if sleepover else "Not a sleepover shift",
        auto_detected=inferred_sleepover,
        requires_confirmation=inferred_sleepover,
    ))

    broken = conditions.get(ConditionKind.BROKEN_SHIFT)
    inferred_broken = bool(broken and broken.origin == ConditionOrigin.INFERRED)
    out.append(AllowanceEligibility(
        allowance_code="BROKEN_SHIFT",
        allowance_name="Broken Shift Allowance",
        is_eligible=broken is not None,
        reason=broken.reason if broken else "Standard break duration",
        auto_detected=inferred_broken,
        requires_confirmation=inferred_broken,
    ))

    first_aid = has_valid_first_aid(staff)
    out.append(AllowanceEligibility(
        allowance_code="FIRST_AID",
        allowance_name="First Aid Allowance",
        is_eligible=first_aid,
        reason="Staff has valid first aid certification" if first_aid else "No valid first aid certification",
        auto_detected=True,
        requires_confirmation=False,
    ))

    higher = conditions.get(ConditionKind.HIGHER_DUTIES)
    out.append(AllowanceEligibility(
        allowance_code="HIGHER_DUTIES",
        allowance_name="Higher Duties Allowance",
        is_eligible=higher is not None,
        reason=higher.reason if higher else "No higher duties assigned",
        auto_detected=False,
        requires_confirmation=higher is not None,
    ))

    travel = conditions.get(ConditionKind.TRAVEL)
    out.append(AllowanceEligibility(
        allowance_code="VEHICLE",
        allowance_name="Vehicle Allowance",
        is_eligible=travel is not None,
        reason=travel.reason if travel else "No travel kilometres recorded",
        auto_detected=False,
        requires_confirmation=False,
    ))

    leader = staff.role in LEADERSHIP_ROLES
    out.append(AllowanceEligibility(
        allowance_code="LEADERSHIP",
        allowance_name="Leadership Allowance",
        is_eligible=leader,
        reason="Staff holds a leadership role" if leader else "Not a leadership role",
        auto_detected=True,
        requires_confirmation=False,
    ))

    return out
