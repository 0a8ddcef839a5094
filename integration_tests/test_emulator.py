"""Integration tests against a running Firestore emulator.

Start one with ``gcloud emulators firestore start --host-port=localhost:8080``
and export ``FIRESTORE_EMULATOR_HOST=localhost:8080``.
"""

from datetime import date

from gym_tracker.db import AttendanceRepository, SupplementRepository, UserProfileRepository
from gym_tracker.models.user_profile import Theme
from gym_tracker.services.stats import StatsService


class TestAttendanceFlow:
    """Attendance round trips through the emulator."""

    async def test_mark_toggle_and_year(self, emulator_store, user_id):
        repo = AttendanceRepository(emulator_store)
        await repo.mark_attendance(user_id, "2024-01-05", duration_minutes=30)
        await repo.mark_attendance(user_id, "2024-07-14", duration_minutes=45)
        assert await repo.toggle_attendance(user_id, "2024-07-15") is True

        records = await repo.get_year(user_id, 2024)

        assert [r.date for r in records] == ["2024-01-05", "2024-07-14", "2024-07-15"]
        assert records[2].duration_minutes is None

    async def test_backfill(self, emulator_store, user_id):
        repo = AttendanceRepository(emulator_store)
        await emulator_store.set(
            f"users/{user_id}/attendances/2024-02/days", "2024-02-02", {"date": "2024-02-02"}
        )

        result = await repo.backfill_duration(user_id, years=[2024])

        assert (result.migrated, result.total) == (1, 1)


class TestSupplementFlow:
    """Catalog, logs and reports through the emulator."""

    async def test_health_report(self, emulator_store, user_id):
        supplements = SupplementRepository(emulator_store)
        await supplements.seed_if_empty()
        line = await supplements.compose_ingredient_line("zinc", 15)
        product_id = await supplements.add_product(user_id, "Zinc", "Acme", [line])
        product = await supplements.get_product(product_id)
        await supplements.log_supplement(user_id, "2024-01-01", product_id, 2, product.snapshot)

        service = StatsService(AttendanceRepository(emulator_store), supplements)
        report = await service.health_report(user_id, 2024, today=date(2024, 1, 1))

        assert report.consistency == 100
        assert report.nutrients[0].amount == 30

    async def test_theme_merge(self, emulator_store, user_id):
        profiles = UserProfileRepository(emulator_store)
        await profiles.ensure_profile(user_id, "it@example.com", "Integration")
        await profiles.set_theme(user_id, Theme.DARK)

        profile = await profiles.get_profile(user_id)

        assert profile.email == "it@example.com"
        assert profile.theme == Theme.DARK
