"""Tests for bucket keys and storage paths."""

from datetime import date

import pytest

from gym_tracker.db import paths


class TestBuckets:
    """Tests for year-month bucket helpers."""

    def test_bucket_key(self):
        assert paths.bucket_key("2024-03-05") == "2024-03"

    def test_month_bucket_is_zero_padded(self):
        assert paths.month_bucket(2024, 3) == "2024-03"

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_bucket_out_of_range(self, month):
        with pytest.raises(ValueError):
            paths.month_bucket(2024, month)

    def test_buckets_between_crosses_year(self):
        assert paths.buckets_between(date(2023, 11, 20), date(2024, 2, 1)) == [
            "2023-11",
            "2023-12",
            "2024-01",
            "2024-02",
        ]

    def test_buckets_between_empty_when_reversed(self):
        assert paths.buckets_between(date(2024, 2, 1), date(2024, 1, 1)) == []


class TestPaths:
    """Tests for logical storage paths."""

    def test_attendance_path(self):
        assert paths.attendance_days("u1", "2024-03") == "users/u1/attendances/2024-03/days"

    def test_health_log_path(self):
        assert paths.health_log_entries("u1", "2024-03") == "users/u1/healthLogs/2024-03/entries"

    def test_global_collections(self):
        assert paths.ingredients() == "ingredients"
        assert paths.products() == "supplementProducts"
        assert paths.training_types("u1") == "users/u1/trainingTypes"
        assert paths.user_doc("u1") == ("users", "u1")

    def test_join_rejects_bad_segments(self):
        with pytest.raises(ValueError):
            paths.join("users", "", "trainingTypes")
        with pytest.raises(ValueError):
            paths.join("users", "a/b")

    def test_split_bucket(self):
        assert paths.split_bucket("users/u1/attendances/2024-03/days") == (
            "users/u1/attendances",
            "2024-03",
        )
        assert paths.split_bucket("users/u1/trainingTypes") == ("users/u1/trainingTypes", None)
        assert paths.split_bucket("ingredients") == ("ingredients", None)

    def test_split_bucket_ignores_month_shaped_user_ids(self):
        assert paths.split_bucket("users/2024-03/trainingTypes") == (
            "users/2024-03/trainingTypes",
            None,
        )
        assert paths.split_bucket("users/2024-03/attendances/2024-04/days") == (
            "users/2024-03/attendances",
            "2024-04",
        )
