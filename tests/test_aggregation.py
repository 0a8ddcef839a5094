"""Tests for the aggregation engine."""

from datetime import date

import pytest

from gym_tracker.models.attendance import AttendanceRecord, TrainingType
from gym_tracker.models.supplements import IngredientLine, SupplementLog, SupplementProduct
from gym_tracker.services import aggregation


def record(day: str, type_id: str | None = None, minutes: int | None = None) -> AttendanceRecord:
    return AttendanceRecord(date=day, training_type_id=type_id, duration_minutes=minutes)


def log(day: str, product_id: str, servings: float = 1, log_id: str = "", name=None) -> SupplementLog:
    return SupplementLog(
        id=log_id or f"{product_id}-{day}",
        date=day,
        product_id=product_id,
        servings_taken=servings,
        product_name=name,
    )


class TestRounding:
    """Tests for round_half_up."""

    @pytest.mark.parametrize("value,expected", [(37.5, 38), (37.49, 37), (0.5, 1), (2.5, 3), (0, 0)])
    def test_round_half_up(self, value, expected):
        assert aggregation.round_half_up(value) == expected


class TestAttendanceCounts:
    """Tests for period counts and monthly series."""

    def test_count_in_period(self):
        records = [record("2024-03-01"), record("2024-03-31"), record("2024-04-01"), record("2023-03-01")]

        assert aggregation.count_in_period(records, 2024) == 3
        assert aggregation.count_in_period(records, 2024, 3) == 2

    def test_monthly_counts_has_twelve_entries(self):
        counts = aggregation.monthly_counts([record("2024-02-10"), record("2024-02-11")], 2024)

        assert [m.month for m in counts] == list(range(1, 13))
        assert counts[1].count == 2
        assert sum(m.count for m in counts) == 2

    def test_malformed_dates_are_ignored(self):
        records = [record(""), record("garbage"), record("2024-13-01"), record("2024-01-05")]

        assert sum(m.count for m in aggregation.monthly_counts(records, 2024)) == 1


class TestWorkoutTypeStats:
    """Tests for per-category statistics."""

    def test_sorted_by_count_with_zero_types_included(self, training_types):
        records = [record("2024-01-01", "legs"), record("2024-01-02", "legs"), record("2024-01-03", "pull")]

        stats = aggregation.workout_type_stats(records, training_types)

        assert [(s.id, s.count) for s in stats] == [("legs", 2), ("pull", 1), ("push", 0)]

    def test_ties_keep_type_order(self, training_types):
        records = [record("2024-01-01", "legs"), record("2024-01-02", "push")]

        stats = aggregation.workout_type_stats(records, training_types)

        assert [s.id for s in stats] == ["push", "legs", "pull"]

    def test_breakdown_excludes_zero_counts(self, training_types):
        records = [
            record("2024-01-01", "push"),
            record("2024-01-02", "push"),
            record("2024-01-03", "legs"),
            record("2024-03-01", "pull"),
            record("2024-03-02", None),
            record("2024-03-03", "deleted-type"),
        ]

        breakdown = aggregation.monthly_workout_breakdown(records, training_types, 2024)

        assert len(breakdown) == 12
        assert [(t.id, t.count) for t in breakdown[0].types] == [("push", 2), ("legs", 1)]
        assert breakdown[1].types == []
        assert [(t.id, t.count) for t in breakdown[2].types] == [("pull", 1)]


class TestDurationStats:
    """Tests for duration averages."""

    def test_untracked_excluded_from_average(self):
        records = [
            record("2024-01-01", minutes=30),
            record("2024-01-02", minutes=45),
            record("2024-01-03", minutes=None),
            record("2024-01-04", minutes=0),
        ]

        stats = aggregation.duration_stats(records)

        assert stats.avg_minutes == 38
        assert stats.tracked_count == 2
        assert stats.untracked_count == 2

    def test_no_tracked_workouts(self):
        stats = aggregation.duration_stats([record("2024-01-01")])
        assert (stats.avg_minutes, stats.untracked_count) == (0, 1)

    def test_per_type_only_tracked_sorted_by_average(self, training_types):
        records = [
            record("2024-01-01", "push", 40),
            record("2024-01-02", "pull", 90),
            record("2024-01-03", "pull", 60),
            record("2024-01-04", "legs", 0),
        ]

        stats = aggregation.workout_type_duration_stats(records, training_types)

        assert [(s.id, s.avg_minutes, s.count) for s in stats] == [("pull", 75, 2), ("push", 40, 1)]

    def test_monthly_averages(self):
        records = [record("2024-05-01", minutes=50), record("2024-05-02", minutes=55), record("2024-06-01")]

        averages = aggregation.monthly_duration_averages(records, 2024)

        assert averages[4].avg_minutes == 53
        assert averages[5].avg_minutes == 0


class TestConsistency:
    """Tests for elapsed days and consistency percentage."""

    def test_days_elapsed(self):
        today = date(2024, 4, 9)

        assert aggregation.days_elapsed(2024, today) == 100
        assert aggregation.days_elapsed(2023, today) == 365
        assert aggregation.days_elapsed(2020, today) == 366
        assert aggregation.days_elapsed(2025, today) == 1

    def test_ten_days_out_of_hundred(self):
        logs = [log(f"2024-01-{day:02d}", "p1") for day in range(1, 11)]
        logs.append(log("2024-01-01", "p2"))

        assert aggregation.consistency_percentage(logs, 2024, date(2024, 4, 9)) == 10

    def test_first_day_of_year(self):
        logs = [log("2024-01-01", "p1")]
        assert aggregation.consistency_percentage(logs, 2024, date(2024, 1, 1)) == 100

    def test_zero_and_negative_servings_do_not_count(self):
        logs = [log(f"2023-01-{day:02d}", "p1", 0) for day in range(1, 11)]
        logs += [log(f"2023-02-{day:02d}", "p1", -1) for day in range(1, 11)]

        assert aggregation.consistency_percentage(logs, 2023, date(2024, 1, 1)) == 0

        logs.append(log("2023-03-01", "p1", 1))
        assert aggregation.consistency_percentage(logs, 2023, date(2024, 1, 1)) == 0
        assert aggregation.consistency_percentage(logs, 2023, date(2023, 1, 1)) == 100


class TestNutrientTotals:
    """Tests for nutrient accumulation."""

    def test_linear_in_servings(self, products, ingredient_catalog):
        twice = [log("2024-01-01", "multi", 1, "a"), log("2024-01-02", "multi", 1, "b")]
        double = [log("2024-01-01", "multi", 2, "c")]

        assert aggregation.nutrient_totals(twice, products, ingredient_catalog) == aggregation.nutrient_totals(
            double, products, ingredient_catalog
        )

    def test_sorted_and_resolved_by_catalog(self, products, ingredient_catalog):
        logs = [log("2024-01-01", "multi", 1), log("2024-01-01", "mag", 2)]

        totals = aggregation.nutrient_totals(logs, products, ingredient_catalog)

        assert [(n.std_id, n.name, n.amount) for n in totals] == [
            ("vit_d3", "Vitamin D3", 1000),
            ("magnesium", "Magnesium", 400),
            ("zinc", "Zinc", 10),
        ]

    def test_top_n_and_ties(self, ingredient_catalog):
        product = SupplementProduct(
            id="p",
            name="P",
            brand="",
            ingredients=[
                IngredientLine(std_id="zinc", amount=5, unit="mg"),
                IngredientLine(std_id="magnesium", amount=5, unit="mg"),
                IngredientLine(std_id="vit_d3", amount=1, unit="IU"),
            ],
        )

        totals = aggregation.nutrient_totals([log("2024-01-01", "p")], [product], ingredient_catalog, top_n=2)

        assert [n.std_id for n in totals] == ["magnesium", "zinc"]

    def test_unknown_products_and_bad_servings_skipped(self, products, ingredient_catalog):
        logs = [log("2024-01-01", "deleted"), log("2024-01-01", "mag", -1), log("2024-01-01", "mag", 0)]

        assert aggregation.nutrient_totals(logs, products, ingredient_catalog) == []

    def test_unknown_std_id_falls_back_to_id(self, ingredient_catalog):
        product = SupplementProduct(
            id="p", name="P", brand="", ingredients=[IngredientLine(std_id="legacy", amount=0.1, unit="g")]
        )

        totals = aggregation.nutrient_totals(
            [log("2024-01-01", "p", 3)], [product], ingredient_catalog
        )

        assert (totals[0].name, totals[0].amount, totals[0].unit) == ("legacy", 0.3, "g")


class TestProducts:
    """Tests for product rankings and daily grouping."""

    def test_top_product_daily_average(self, products):
        logs = [log(f"2024-01-{day:02d}", "mag", 2) for day in range(1, 6)]
        logs.append(log("2024-01-01", "multi", 1))

        top = aggregation.top_product(logs, products, 2024, date(2024, 4, 9))

        assert top.product_id == "mag"
        assert top.total_servings == 10
        assert top.avg_per_day == pytest.approx(0.1)

    def test_top_product_none_without_logs(self, products):
        assert aggregation.top_product([], products, 2024, date(2024, 4, 9)) is None

    def test_daily_summary_groups_and_names(self, products):
        logs = [
            log("2024-01-01", "mag", 1, "a"),
            log("2024-01-01", "mag", 1, "b"),
            log("2024-01-01", "gone", 1, "c", name="Old Product"),
            log("2024-01-01", "vanished", 1, "d"),
            log("2024-01-02", "mag", 1, "e"),
        ]

        summary = aggregation.daily_product_summary(logs, products, "2024-01-01")

        assert [(u.name, u.total_servings, u.log_count) for u in summary] == [
            ("Magnesium Glycinate", 2, 2),
            ("Old Product", 1, 1),
            ("Unknown Product", 1, 1),
        ]

    def test_daily_summary_skips_zero_serving_logs(self, products):
        logs = [
            log("2024-01-01", "mag", 1, "a"),
            log("2024-01-01", "mag", 0, "b"),
            log("2024-01-01", "multi", 0, "c"),
        ]

        summary = aggregation.daily_product_summary(logs, products, "2024-01-01")

        assert [(u.product_id, u.total_servings, u.log_count) for u in summary] == [("mag", 1, 1)]
