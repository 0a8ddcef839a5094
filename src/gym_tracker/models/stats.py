"""Result records produced by the aggregation engine."""

from dataclasses import asdict, dataclass, field


@dataclass
class MonthStat:
    """Attendance count for one month (1-12)."""

    month: int
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WorkoutTypeStat:
    """Attendance count for one training type."""

    id: str
    name: str
    color: str
    count: int
    icon: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WorkoutTypeDurationStat:
    """Average tracked duration for one training type."""

    id: str
    name: str
    color: str
    count: int  # tracked workouts only
    avg_minutes: int
    icon: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DurationStats:
    """Average duration over tracked workouts; untracked ones are only counted."""

    avg_minutes: int = 0
    tracked_count: int = 0
    untracked_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonthDurationStat:
    month: int
    avg_minutes: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonthCategoryBreakdown:
    """Per-type counts for one month, zero-count types left out."""

    month: int
    types: list[WorkoutTypeStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"month": self.month, "types": [t.to_dict() for t in self.types]}



@dataclass
class NutrientTotal:
    """Accumulated intake of one catalog ingredient."""

    std_id: str
    name: str
    amount: float
    unit: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProductUsage:
    """Servings of one product over a period."""

    product_id: str
    name: str
    brand: str
    total_servings: float
    log_count: int
    avg_per_day: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MigrationResult:
    migrated: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
