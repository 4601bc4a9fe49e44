"""
Daily metrics aggregation and rollover.

Everything here is a pure function of its arguments: no storage, no clock
reads, no notifications. MetricsStore wires these into the application.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.health import DaySummary, DailyGoals, MetricsState, WeeklyStats, LongTermStats

HISTORY_LIMIT = 30
WEEK_DAYS = 7
LONG_TERM_DAYS = 30
ACTIVE_DAY_THRESHOLD = 60  # activity percent
BLOOD_SUGAR_THRESHOLD = 110  # mg/dL
MAX_RECOMMENDATIONS = 4

GREAT_JOB_MESSAGE = "Great job! Keep maintaining today's healthy rhythm."

GOAL_METRICS = ("steps", "water", "sleep", "calories")


@dataclass(frozen=True)
class ProfileSeed:
    """Weight and BMI copied from the profile into the current day."""
    weight: float
    bmi: float


class GoalOutcome(str, Enum):
    MET = "met"  # at least 3 of 4 goals reached
    REFOCUS = "refocus"  # at least 2 of 4 goals under half way
    NONE = "none"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with ties away from zero (7.05 -> 7.1), independent of float repr quirks."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def default_day(day: str, seed: Optional[ProfileSeed] = None) -> DaySummary:
    """Fresh record for a calendar day, seeded from the profile when available."""
    summary = DaySummary(
        date=day,
        bmi=23.5,
        blood_pressure="120/80",
        blood_sugar=95,
        steps=5420,
        sleep=3,
        weight=165,
        water=48,  # 60% of the default 80 oz goal
        calories=1680,  # 76% of the default 2200 kcal goal
        activity=68,
    )
    return apply_profile_seed(summary, seed)


def apply_profile_seed(day: DaySummary, seed: Optional[ProfileSeed]) -> DaySummary:
    if seed is None:
        return day
    return day.model_copy(update={"weight": seed.weight, "bmi": seed.bmi})


def normalize_history(days: Iterable[Optional[DaySummary]]) -> List[DaySummary]:
    """
    Drop undated records, sort newest first, keep the first record listed for
    each date and truncate to HISTORY_LIMIT. Callers put the newest snapshot
    of a date first so it replaces older ones.
    """
    dated = [d for d in days if d is not None and d.date]
    # sorted() is stable, so for equal dates the earlier-listed record stays first
    dated = sorted(dated, key=lambda d: d.date, reverse=True)

    seen = set()
    result: List[DaySummary] = []
    for day in dated:
        if day.date in seen:
            continue
        seen.add(day.date)
        result.append(day)
    return result[:HISTORY_LIMIT]


def archive_into_history(day: DaySummary, history: List[DaySummary]) -> List[DaySummary]:
    """
    Archive a day into history.

    A day closed twice on one date replaces the earlier snapshot, so the
    latest close of a date is the one kept.
    """
    return normalize_history([day, *history])


def rollover_if_needed(
    state: Optional[MetricsState],
    today: str,
    seed: Optional[ProfileSeed] = None,
) -> Tuple[MetricsState, bool]:
    """
    Bring a stored metrics record up to date with the calendar.

    Returns the current state and whether it differs from what is stored
    (and so needs persisting). Calling it again with the result and the same
    ``today`` never archives anything a second time.
    """
    if state is None:
        fresh = MetricsState(today=default_day(today, seed), history=[])
        return fresh, seed is not None

    history = normalize_history(state.history)
    stored_today = state.today

    if stored_today is not None and stored_today.date == today:
        synced = apply_profile_seed(stored_today, seed)
        return MetricsState(today=synced, history=history), seed is not None

    if stored_today is not None:
        history = archive_into_history(stored_today, history)
    return MetricsState(today=default_day(today, seed), history=history), True


def close_day(state: MetricsState, today: str, seed: Optional[ProfileSeed] = None) -> MetricsState:
    """Archive the current day and start a fresh default one."""
    return MetricsState(
        today=default_day(today, seed),
        history=archive_into_history(state.today, state.history),
    )


def goal_ratios(day: DaySummary, goals: DailyGoals) -> Dict[str, float]:
    """actual / goal for each goal metric; a zero goal gives ratio 0."""
    ratios = {}
    for name in GOAL_METRICS:
        goal = getattr(goals, name)
        ratios[name] = getattr(day, name) / goal if goal else 0
    return ratios


def evaluate_goals(day: DaySummary, goals: DailyGoals) -> GoalOutcome:
    ratios = goal_ratios(day, goals).values()
    met = sum(1 for r in ratios if r >= 1)
    far_off = sum(1 for r in ratios if r < 0.5)

    if met >= 3:
        return GoalOutcome.MET
    if far_off >= 2:
        return GoalOutcome.REFOCUS
    return GoalOutcome.NONE


def build_recommendations(day: DaySummary, goals: DailyGoals) -> List[str]:
    """Up to four nudges in fixed priority order."""
    recs: List[str] = []
    if day.steps < goals.steps:
        recs.append("Time for a 10-minute walk to boost your steps.")
    if day.water < goals.water:
        recs.append("Drink 2 glasses of water to stay hydrated.")
    if day.sleep < goals.sleep:
        recs.append("Aim for at least 7 hours of sleep tonight.")
    if day.activity < ACTIVE_DAY_THRESHOLD:
        recs.append("Add a short stretching or cycling session.")
    if day.blood_sugar > BLOOD_SUGAR_THRESHOLD:
        recs.append("Take a short walk to help stabilize blood sugar.")
    if day.calories > goals.calories:
        recs.append("Balance calories with a light, protein-rich snack.")
    if not recs:
        recs.append(GREAT_JOB_MESSAGE)
    return recs[:MAX_RECOMMENDATIONS]


def recent_days(state: MetricsState, count: int) -> List[DaySummary]:
    """Today followed by history, newest first, at most ``count`` records."""
    return [state.today, *state.history][:count]


def _mean(values: List[float]) -> float:
    return sum(values) / (len(values) or 1)


def weekly_stats(state: MetricsState) -> WeeklyStats:
    days = recent_days(state, WEEK_DAYS)
    return WeeklyStats(
        avg_steps=int(round_half_up(_mean([d.steps for d in days]))),
        avg_sleep=round_half_up(_mean([d.sleep for d in days]), 1),
        avg_water=int(round_half_up(_mean([d.water for d in days]))),
    )


def long_term_stats(state: MetricsState, goals: DailyGoals, today: Optional[str] = None) -> LongTermStats:
    days = recent_days(state, LONG_TERM_DAYS)
    count = len(days) or 1

    hydration_days = sum(1 for d in days if d.water >= goals.water)
    active_days = sum(1 for d in days if d.activity >= ACTIVE_DAY_THRESHOLD)

    best: Optional[DaySummary] = days[0] if days else None
    for day in days:
        if day.steps > (best.steps if best else 0):
            best = day
    if best is None:
        best = default_day(today or state.today.date)

    return LongTermStats(
        hydration_score=int(round_half_up(hydration_days / count * 100)),
        active_days=active_days,
        best_steps_day=best,
        avg_weight=round_half_up(_mean([d.weight or 0 for d in days]), 1),
    )
