from .errors import ValidationError
from .repository import CollectionRepository
from .storage import EXERCISES_KEY

EXERCISE_FIELDS = ("name", "sets", "reps", "weight")


def as_text(value):
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_exercise(exercise):
    """Return a clean exercise record, or None when it can't be one."""
    if not isinstance(exercise, dict) or exercise.get("id") in (None, ""):
        return None
    record = {"id": as_text(exercise["id"])}
    for field in EXERCISE_FIELDS:
        record[field] = as_text(exercise.get(field))
    return record


def blank_fields(values: dict, fields=EXERCISE_FIELDS):
    return [f for f in fields if not as_text(values.get(f)).strip()]


def sort_by_name(exercises):
    return sorted(exercises, key=lambda e: e["name"].casefold())


class ExerciseRepository(CollectionRepository):
    key = EXERCISES_KEY
    kind = "exercise"

    def normalize(self, record):
        return normalize_exercise(record)

    def add(self, name, sets, reps, weight):
        values = {"name": name, "sets": sets, "reps": reps, "weight": weight}
        missing = blank_fields(values)
        if missing:
            raise ValidationError("Exercise fields must not be empty", missing)

        record = {"id": self.new_id()}
        for field in EXERCISE_FIELDS:
            record[field] = as_text(values[field])
        return self._append(record)

    def update(self, exercise_id, **fields):
        current = self._find(exercise_id)
        unknown = set(fields) - set(EXERCISE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown exercise fields: {', '.join(sorted(unknown))}", sorted(unknown))

        merged = dict(current)
        merged.update(fields)
        missing = blank_fields(merged)
        if missing:
            raise ValidationError("Exercise fields must not be empty", missing)

        for field in EXERCISE_FIELDS:
            current[field] = as_text(merged[field])
        self._persist()
        return dict(current)
