"""Tests for the exercise repository."""

import json
import os

import pytest

from training_app import storage
from training_app.errors import NotFoundError, ValidationError
from training_app.exercises import ExerciseRepository, sort_by_name
from training_app.storage import JsonStore, EXERCISES_KEY


@pytest.fixture
def repo(data_dir):
    return ExerciseRepository(JsonStore(data_dir))


def _on_disk(data_dir):
    path = os.path.join(data_dir, "exercises.json")
    if not os.path.exists(path):
        return None
    with open(path) as f:
        return json.load(f)


class TestAdd:
    def test_add_persists(self, repo, data_dir):
        squat = repo.add("Squat", "3", "10", "80")
        assert squat["name"] == "Squat"
        assert repo.list() == [squat]
        assert _on_disk(data_dir) == [squat]

    def test_ids_are_unique(self, repo):
        ids = {repo.add(f"Ex {i}", "3", "10", "20")["id"] for i in range(50)}
        assert len(ids) == 50

    def test_blank_name_rejected(self, repo, data_dir):
        with pytest.raises(ValidationError) as exc:
            repo.add("", "3", "10", "50")
        assert exc.value.fields == ["name"]
        assert repo.list() == []
        assert _on_disk(data_dir) is None

    def test_whitespace_counts_as_blank(self, repo):
        with pytest.raises(ValidationError) as exc:
            repo.add("Row", "  ", "10", "\t")
        assert exc.value.fields == ["sets", "weight"]

    def test_values_stay_free_form_text(self, repo):
        ex = repo.add("Plank", "3", "60s", "bodyweight")
        assert ex["reps"] == "60s"
        assert ex["weight"] == "bodyweight"


class TestUpdate:
    def test_update_keeps_id(self, repo, data_dir):
        ex = repo.add("Squat", "3", "10", "80")
        updated = repo.update(ex["id"], weight="85")
        assert updated == {**ex, "weight": "85"}
        assert _on_disk(data_dir) == [updated]

    def test_update_missing_id(self, repo):
        with pytest.raises(NotFoundError):
            repo.update("nope", name="Squat")

    def test_update_to_blank_rejected(self, repo):
        ex = repo.add("Squat", "3", "10", "80")
        with pytest.raises(ValidationError):
            repo.update(ex["id"], name=" ")
        assert repo.get(ex["id"])["name"] == "Squat"

    def test_update_unknown_field_rejected(self, repo):
        ex = repo.add("Squat", "3", "10", "80")
        with pytest.raises(ValidationError):
            repo.update(ex["id"], id="other")
        assert repo.get(ex["id"]) == ex


class TestRemove:
    def test_remove(self, repo, data_dir):
        a = repo.add("A", "1", "1", "1")
        b = repo.add("B", "1", "1", "1")
        repo.remove(a["id"])
        assert repo.list() == [b]
        assert _on_disk(data_dir) == [b]

    def test_remove_missing_is_noop_without_write(self, repo, data_dir):
        repo.remove("nope")
        assert _on_disk(data_dir) is None


class TestSnapshots:
    def test_list_returns_copies(self, repo):
        ex = repo.add("Squat", "3", "10", "80")
        listed = repo.list()
        listed[0]["name"] = "Changed"
        assert repo.get(ex["id"])["name"] == "Squat"

    def test_sort_by_name_is_presentation_only(self, repo):
        repo.add("curl", "3", "10", "10")
        repo.add("Bench", "3", "10", "60")
        assert [e["name"] for e in sort_by_name(repo.list())] == ["Bench", "curl"]
        assert [e["name"] for e in repo.list()] == ["curl", "Bench"]


class TestHydrate:
    def test_reload_after_restart(self, repo, data_dir):
        repo.add("Squat", "3", "10", "80")
        repo.add("Bench", "5", "5", "60")
        assert ExerciseRepository(JsonStore(data_dir)).list() == repo.list()

    def test_bad_records_skipped(self, data_dir):
        with open(os.path.join(data_dir, "exercises.json"), "w") as f:
            json.dump([{"id": "1", "name": "Squat", "sets": 3, "reps": "10"}, "junk", {"name": "no id"}], f)
        repo = ExerciseRepository(JsonStore(data_dir))
        assert repo.list() == [{"id": "1", "name": "Squat", "sets": "3", "reps": "10", "weight": ""}]


class TestWriteFailure:
    def test_memory_kept_and_flagged(self, repo, monkeypatch):
        real = storage.save_json

        def broken(path, data):
            raise OSError("read-only file system")

        monkeypatch.setattr(storage, "save_json", broken)
        ex = repo.add("Squat", "3", "10", "80")
        assert repo.list() == [ex]
        assert repo.dirty
        assert "read-only" in str(repo.last_write_error)

        monkeypatch.setattr(storage, "save_json", real)
        assert repo.flush() is True
        assert not repo.dirty
        assert repo.last_write_error is None
        assert JsonStore(repo.store.data_dir).load(EXERCISES_KEY) == [ex]
