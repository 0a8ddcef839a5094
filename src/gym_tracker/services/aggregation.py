"""Pure aggregation over already-fetched records.

Nothing here performs I/O. Every function is deterministic for identical
inputs, and malformed or legacy records (missing dates, durations or
servings) are treated as untracked/zero instead of raising.
"""

import math
from collections import Counter, defaultdict
from datetime import date

from ..db.paths import month_bucket
from ..models.attendance import AttendanceRecord, TrainingType
from ..models.stats import (
    DurationStats,
    MonthCategoryBreakdown,
    MonthDurationStat,
    MonthStat,
    NutrientTotal,
    ProductUsage,
    WorkoutTypeDurationStat,
    WorkoutTypeStat,
)
from ..models.supplements import Ingredient, SupplementLog, SupplementProduct

UNKNOWN_PRODUCT = "Unknown Product"
AMOUNT_PRECISION = 3


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (``38 == round_half_up(37.5)``)."""
    return int(math.floor(value + 0.5))


def _month_of(record_date: str, year: int) -> int | None:
    """Month number of a ``YYYY-MM-DD`` string in ``year``, else None."""
    if not isinstance(record_date, str) or not record_date.startswith(f"{year:04d}-"):
        return None
    try:
        month = int(record_date[5:7])
    except ValueError:
        return None
    return month if 1 <= month <= 12 else None


def _tracked_minutes(record: AttendanceRecord) -> int | None:
    return record.duration_minutes if record.has_tracked_duration else None


def _average(total: float, count: int) -> int:
    return round_half_up(total / count) if count else 0


# ----------------------------------------------------------------------
# Attendance
# ----------------------------------------------------------------------


def count_in_period(
    records: list[AttendanceRecord], year: int, month: int | None = None
) -> int:
    """Number of records whose date falls in the year (or year-month)."""
    prefix = f"{year:04d}-" if month is None else f"{month_bucket(year, month)}-"
    return sum(1 for r in records if isinstance(r.date, str) and r.date.startswith(prefix))


def monthly_counts(records: list[AttendanceRecord], year: int) -> list[MonthStat]:
    """Attendance count per month, always 12 entries."""
    counts = Counter(_month_of(r.date, year) for r in records)
    return [MonthStat(month=m, count=counts.get(m, 0)) for m in range(1, 13)]


def workout_type_stats(
    records: list[AttendanceRecord], training_types: list[TrainingType]
) -> list[WorkoutTypeStat]:
    """Count per training type, every type included, highest count first.

    Equal counts keep the order of ``training_types``.
    """
    counts = Counter(r.training_type_id for r in records if r.training_type_id)
    stats = [
        WorkoutTypeStat(
            id=t.id, name=t.name, color=t.color, count=counts.get(t.id, 0), icon=t.icon
        )
        for t in training_types
    ]
    stats.sort(key=lambda s: -s.count)
    return stats


def monthly_workout_breakdown(
    records: list[AttendanceRecord], training_types: list[TrainingType], year: int
) -> list[MonthCategoryBreakdown]:
    """Per-month type counts built in one pass keyed by (month, type id).

    Types without workouts in a month are left out of that month.
    """
    counts: Counter[tuple[int, str]] = Counter()
    for record in records:
        month = _month_of(record.date, year)
        if month is not None and record.training_type_id:
            counts[(month, record.training_type_id)] += 1

    breakdown = []
    for month in range(1, 13):
        types = [
            WorkoutTypeStat(
                id=t.id,
                name=t.name,
                color=t.color,
                count=counts[(month, t.id)],
                icon=t.icon,
            )
            for t in training_types
            if counts[(month, t.id)] > 0
        ]
        breakdown.append(MonthCategoryBreakdown(month=month, types=types))
    return breakdown


def duration_stats(records: list[AttendanceRecord]) -> DurationStats:
    """Average over positive durations; the rest only count as untracked."""
    tracked = [m for m in map(_tracked_minutes, records) if m is not None]
    return DurationStats(
        avg_minutes=_average(sum(tracked), len(tracked)),
        tracked_count=len(tracked),
        untracked_count=len(records) - len(tracked),
    )


def workout_type_duration_stats(
    records: list[AttendanceRecord], training_types: list[TrainingType]
) -> list[WorkoutTypeDurationStat]:
    """Average tracked duration per type, longest average first.

    Types with no tracked workouts are omitted.
    """
    totals: dict[str, list[int]] = defaultdict(list)
    for record in records:
        minutes = _tracked_minutes(record)
        if minutes is not None and record.training_type_id:
            totals[record.training_type_id].append(minutes)

    stats = [
        WorkoutTypeDurationStat(
            id=t.id,
            name=t.name,
            color=t.color,
            count=len(totals[t.id]),
            avg_minutes=_average(sum(totals[t.id]), len(totals[t.id])),
            icon=t.icon,
        )
        for t in training_types
        if totals.get(t.id)
    ]
    stats.sort(key=lambda s: -s.avg_minutes)
    return stats


def monthly_duration_averages(
    records: list[AttendanceRecord], year: int
) -> list[MonthDurationStat]:
    """Average tracked duration per month, 0 for months without any."""
    totals: dict[int, list[int]] = defaultdict(list)
    for record in records:
        month = _month_of(record.date, year)
        minutes = _tracked_minutes(record)
        if month is not None and minutes is not None:
            totals[month].append(minutes)
    return [
        MonthDurationStat(month=m, avg_minutes=_average(sum(totals[m]), len(totals[m])))
        for m in range(1, 13)
    ]


# ----------------------------------------------------------------------
# Supplements
# ----------------------------------------------------------------------


def days_elapsed(year: int, today: date) -> int:
    """Days counted for a year: full length for past years, Jan 1..today
    inclusive for the current one, and never less than 1.
    """
    if year < today.year:
        days = (date(year + 1, 1, 1) - date(year, 1, 1)).days
    elif year == today.year:
        days = (today - date(year, 1, 1)).days + 1
    else:
        days = 0
    return max(days, 1)


def consistency_percentage(
    logs: list[SupplementLog], year: int, today: date
) -> int:
    """Share of elapsed days in ``year`` with at least one log, as 0-100."""
    logged_days = {
        log.date
        for log in logs
        if _month_of(log.date, year) is not None and _servings(log) > 0
    }
    return round_half_up(100 * len(logged_days) / days_elapsed(year, today))


def _servings(log: SupplementLog) -> float:
    servings = log.servings_taken
    if isinstance(servings, bool) or not isinstance(servings, (int, float)):
        return 0
    return servings if servings > 0 else 0


def nutrient_totals(
    logs: list[SupplementLog],
    products: list[SupplementProduct],
    ingredients: list[Ingredient],
    top_n: int | None = None,
) -> list[NutrientTotal]:
    """Sum ``servings x amount`` per std id, largest total first.

    Names are resolved through the ingredient catalog after accumulation;
    std ids missing from it fall back to the id itself.
    """
    product_map = {p.id: p for p in products}
    ingredient_map = {i.id: i for i in ingredients}

    totals: dict[str, float] = defaultdict(float)
    units: dict[str, str] = {}
    for log in logs:
        product = product_map.get(log.product_id)
        servings = _servings(log)
        if product is None or not servings:
            continue
        for line in product.ingredients:
            if not line.std_id:
                continue
            totals[line.std_id] += servings * (line.amount or 0)
            units.setdefault(line.std_id, line.unit)

    results = []
    for std_id, amount in totals.items():
        ingredient = ingredient_map.get(std_id)
        results.append(
            NutrientTotal(
                std_id=std_id,
                name=ingredient.name if ingredient else std_id,
                amount=round(amount, AMOUNT_PRECISION),
                unit=ingredient.default_unit if ingredient else units.get(std_id, ""),
            )
        )
    results.sort(key=lambda n: (-n.amount, n.name, n.std_id))
    return results[:top_n] if top_n is not None else results


def _group_by_product(
    logs: list[SupplementLog], products: list[SupplementProduct]
) -> dict[str, ProductUsage]:
    """Group logs with positive servings per product; the first log's snapshot
    names the group.
    """
    product_map = {p.id: p for p in products}
    grouped: dict[str, ProductUsage] = {}
    for log in logs:
        if not _servings(log):
            continue
        usage = grouped.get(log.product_id)
        if usage is None:
            name, brand = log.product_name, log.product_brand or ""
            if not name:
                product = product_map.get(log.product_id)
                name = product.name if product else UNKNOWN_PRODUCT
                brand = product.brand if product else ""
            usage = ProductUsage(
                product_id=log.product_id,
                name=name or UNKNOWN_PRODUCT,
                brand=brand,
                total_servings=0,
                log_count=0,
            )
            grouped[log.product_id] = usage
        usage.total_servings += _servings(log)
        usage.log_count += 1
    return grouped


def daily_product_summary(
    logs: list[SupplementLog], products: list[SupplementProduct], day: str
) -> list[ProductUsage]:
    """Servings per product on one day, in order of first intake."""
    return list(_group_by_product([log for log in logs if log.date == day], products).values())


def top_products(
    logs: list[SupplementLog],
    products: list[SupplementProduct],
    year: int,
    today: date,
    top_n: int | None = None,
) -> list[ProductUsage]:
    """Products ranked by total servings in ``year`` with a daily average."""
    in_year = [log for log in logs if _month_of(log.date, year) is not None]
    elapsed = days_elapsed(year, today)
    ranked = [
        usage
        for usage in _group_by_product(in_year, products).values()
        if usage.total_servings > 0
    ]
    for usage in ranked:
        usage.avg_per_day = usage.total_servings / elapsed
    ranked.sort(key=lambda u: (-u.total_servings, u.name, u.product_id))
    return ranked[:top_n] if top_n is not None else ranked


def top_product(
    logs: list[SupplementLog],
    products: list[SupplementProduct],
    year: int,
    today: date,
) -> ProductUsage | None:
    ranked = top_products(logs, products, year, today, top_n=1)
    return ranked[0] if ranked else None
