"""Tests for id generation."""

from training_app.identifiers import IdGenerator, new_id
from training_app.workspace import Workspace


class TestIdGenerator:
    def test_uses_milliseconds(self):
        gen = IdGenerator(clock=lambda: 1700000000.123)
        assert gen() == "1700000000123"

    def test_frozen_clock_still_unique(self):
        """Sequential calls within the same millisecond get bumped ids."""
        gen = IdGenerator(clock=lambda: 5.0)
        assert [gen(), gen(), gen()] == ["5000", "5001", "5002"]

    def test_clock_going_backwards(self):
        ticks = iter([10.0, 9.0, 11.0])
        gen = IdGenerator(clock=lambda: next(ticks))
        assert [gen(), gen(), gen()] == ["10000", "10001", "11000"]

    def test_default_generator_unique(self):
        ids = [new_id() for _ in range(500)]
        assert len(set(ids)) == 500

    def test_observe_skips_stored_ids(self):
        gen = IdGenerator(clock=lambda: 5.0)
        gen.observe("5002")
        gen.observe("not-a-number")
        assert gen() == "5003"


class TestRestart:
    """Ids handed out ahead of the clock stay unique across a restart."""

    def test_no_reissue_after_quick_restart(self, data_dir):
        first = Workspace(data_dir, id_factory=IdGenerator(clock=lambda: 5.0))
        squat = first.exercises.add("Squat", "3", "10", "80")
        bench = first.exercises.add("Bench", "5", "5", "60")
        plan = first.plans.add("Day A", "", [squat, bench])

        second = Workspace(data_dir, id_factory=IdGenerator(clock=lambda: 5.001))
        row = second.exercises.add("Row", "3", "12", "40")
        assert row["id"] not in {squat["id"], bench["id"], plan["id"]}

    def test_embedded_copies_count_as_taken(self, data_dir):
        first = Workspace(data_dir, id_factory=IdGenerator(clock=lambda: 5.0))
        squat = first.exercises.add("Squat", "3", "10", "80")
        plan = first.plans.add("Day A", "", [squat])
        bench = first.exercises.add("Bench", "5", "5", "60")
        first.plans.update(plan["id"], "Day A", "", [squat, bench])
        first.exercises.remove(bench["id"])

        second = Workspace(data_dir, id_factory=IdGenerator(clock=lambda: 5.0))
        assert second.exercises.add("Row", "3", "12", "40")["id"] != bench["id"]
