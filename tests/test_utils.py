"""Tests for utility functions."""

from gym_tracker.utils.ids import IdGenerator


class TestIdGenerator:
    """Tests for IdGenerator."""

    def test_ids_are_unique(self):
        generate = IdGenerator()
        ids = {generate() for _ in range(500)}

        assert len(ids) == 500

    def test_length(self):
        assert len(IdGenerator(length=12).new_id()) == 12
        assert len(IdGenerator().new_id()) == 20
