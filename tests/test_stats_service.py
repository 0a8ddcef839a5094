"""Tests for StatsService reports."""

from datetime import date

import pytest

from gym_tracker.db import AttendanceRepository, SupplementRepository
from gym_tracker.models.supplements import IngredientLine
from gym_tracker.services.stats import StatsService


@pytest.fixture
def attendance(local_store, ids):
    return AttendanceRepository(local_store, ids)


@pytest.fixture
def supplements(local_store, ids):
    return SupplementRepository(local_store, ids)


@pytest.fixture
def service(attendance, supplements):
    return StatsService(attendance, supplements)


class TestYearReport:
    """Tests for the yearly attendance report."""

    async def test_year_report(self, service, attendance):
        push = await attendance.create_training_type("u1", "Push", "#f00")
        await attendance.mark_attendance("u1", "2024-01-10", push, 30)
        await attendance.mark_attendance("u1", "2024-04-02", push, 45)
        await attendance.mark_attendance("u1", "2024-04-03", None, 0)

        report = await service.year_report("u1", 2024, today=date(2024, 4, 9))

        assert report.yearly_count == 3
        assert report.current_month_count == 2
        assert report.monthly[3].count == 2
        assert [(t.name, t.count) for t in report.types] == [("Push", 2)]
        assert report.duration.avg_minutes == 38
        assert report.duration.untracked_count == 1
        assert report.to_dict()["breakdown"][0]["types"][0]["name"] == "Push"

    async def test_past_year_has_no_current_month(self, service, attendance):
        await attendance.mark_attendance("u1", "2023-04-02")

        report = await service.year_report("u1", 2023, today=date(2024, 4, 9))

        assert report.yearly_count == 1
        assert report.current_month_count == 0

    async def test_no_user_gives_empty_report(self, service):
        report = await service.year_report(None, 2024, today=date(2024, 4, 9))

        assert report.yearly_count == 0
        assert report.types == []


class TestMonthReport:
    """Tests for the monthly report."""

    async def test_month_report(self, service, attendance):
        legs = await attendance.create_training_type("u1", "Legs", "#0f0")
        await attendance.mark_attendance("u1", "2024-05-01", legs, 60)
        await attendance.mark_attendance("u1", "2024-06-01", legs, 60)

        report = await service.month_report("u1", 2024, 5)

        assert report.count == 1
        assert report.type_durations[0].avg_minutes == 60


class TestHealthReport:
    """Tests for the supplement report."""

    async def test_health_report(self, service, supplements):
        await supplements.seed_if_empty()
        line = await supplements.compose_ingredient_line("magnesium", 200)
        product_id = await supplements.add_product("u1", "Mag", "Pure", [line])
        product = await supplements.get_product(product_id)
        for day in ["2024-01-01", "2024-01-02", "2024-04-09", "2024-04-09"]:
            await supplements.log_supplement("u1", day, product_id, 1, product.snapshot)

        report = await service.health_report("u1", 2024, today=date(2024, 4, 9))

        assert report.days_elapsed == 100
        assert report.consistency == 3
        assert report.nutrients[0].std_id == "magnesium"
        assert report.nutrients[0].amount == 800
        assert report.top_product.total_servings == 4
        assert [(u.name, u.total_servings) for u in report.today] == [("Mag", 2)]
        assert report.to_dict()["top_product"]["name"] == "Mag"

    async def test_empty_health_report(self, service):
        report = await service.health_report("u1", 2024, today=date(2024, 4, 9))

        assert report.consistency == 0
        assert report.top_product is None
        assert report.to_dict()["top_product"] is None
