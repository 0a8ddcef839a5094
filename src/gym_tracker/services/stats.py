"""Statistics reports: fetch through the repositories, then aggregate."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date

from ..db.repositories import AttendanceRepository, SupplementRepository
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
from . import aggregation

logger = logging.getLogger(__name__)

DEFAULT_TOP_NUTRIENTS = 5


@dataclass
class YearReport:
    year: int
    yearly_count: int = 0
    current_month_count: int = 0
    monthly: list[MonthStat] = field(default_factory=list)
    types: list[WorkoutTypeStat] = field(default_factory=list)
    breakdown: list[MonthCategoryBreakdown] = field(default_factory=list)
    duration: DurationStats = field(default_factory=DurationStats)
    type_durations: list[WorkoutTypeDurationStat] = field(default_factory=list)
    monthly_durations: list[MonthDurationStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "yearly_count": self.yearly_count,
            "current_month_count": self.current_month_count,
            "monthly": [m.to_dict() for m in self.monthly],
            "types": [t.to_dict() for t in self.types],
            "breakdown": [b.to_dict() for b in self.breakdown],
            "duration": self.duration.to_dict(),
            "type_durations": [t.to_dict() for t in self.type_durations],
            "monthly_durations": [m.to_dict() for m in self.monthly_durations],
        }


@dataclass
class MonthReport:
    year: int
    month: int
    count: int = 0
    types: list[WorkoutTypeStat] = field(default_factory=list)
    duration: DurationStats = field(default_factory=DurationStats)
    type_durations: list[WorkoutTypeDurationStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "count": self.count,
            "types": [t.to_dict() for t in self.types],
            "duration": self.duration.to_dict(),
            "type_durations": [t.to_dict() for t in self.type_durations],
        }


@dataclass
class HealthReport:
    year: int
    consistency: int = 0
    days_elapsed: int = 1
    nutrients: list[NutrientTotal] = field(default_factory=list)
    top_product: ProductUsage | None = None
    today: list[ProductUsage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "consistency": self.consistency,
            "days_elapsed": self.days_elapsed,
            "nutrients": [n.to_dict() for n in self.nutrients],
            "top_product": self.top_product.to_dict() if self.top_product else None,
            "today": [u.to_dict() for u in self.today],
        }


class StatsService:
    """Builds the statistics views for one user."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        supplements: SupplementRepository,
    ):
        self.attendance = attendance
        self.supplements = supplements

    async def year_report(
        self, user_id: str | None, year: int, today: date | None = None
    ) -> YearReport:
        today = today or date.today()
        records, types = await asyncio.gather(
            self.attendance.get_year(user_id, year),
            self.attendance.list_training_types(user_id),
        )
        logger.debug("Building year report for %s/%d from %d records", user_id, year, len(records))
        return YearReport(
            year=year,
            yearly_count=aggregation.count_in_period(records, year),
            current_month_count=(
                aggregation.count_in_period(records, year, today.month)
                if year == today.year
                else 0
            ),
            monthly=aggregation.monthly_counts(records, year),
            types=aggregation.workout_type_stats(records, types),
            breakdown=aggregation.monthly_workout_breakdown(records, types, year),
            duration=aggregation.duration_stats(records),
            type_durations=aggregation.workout_type_duration_stats(records, types),
            monthly_durations=aggregation.monthly_duration_averages(records, year),
        )

    async def month_report(
        self, user_id: str | None, year: int, month: int
    ) -> MonthReport:
        records, types = await asyncio.gather(
            self.attendance.get_month(user_id, year, month),
            self.attendance.list_training_types(user_id),
        )
        return MonthReport(
            year=year,
            month=month,
            count=aggregation.count_in_period(records, year, month),
            types=aggregation.workout_type_stats(records, types),
            duration=aggregation.duration_stats(records),
            type_durations=aggregation.workout_type_duration_stats(records, types),
        )

    async def health_report(
        self,
        user_id: str | None,
        year: int,
        today: date | None = None,
        top_n: int = DEFAULT_TOP_NUTRIENTS,
    ) -> HealthReport:
        """Nutrient totals, consistency and the most-taken product for a year."""
        today = today or date.today()
        logs, products, ingredients = await asyncio.gather(
            self.supplements.get_year_logs(user_id, year),
            self.supplements.list_products(),
            self.supplements.list_ingredients(),
        )
        logger.debug("Building health report for %s/%d from %d logs", user_id, year, len(logs))
        return HealthReport(
            year=year,
            consistency=aggregation.consistency_percentage(logs, year, today),
            days_elapsed=aggregation.days_elapsed(year, today),
            nutrients=aggregation.nutrient_totals(logs, products, ingredients, top_n=top_n),
            top_product=aggregation.top_product(logs, products, year, today),
            today=aggregation.daily_product_summary(logs, products, today.isoformat()),
        )
