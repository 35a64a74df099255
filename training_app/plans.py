from .errors import ValidationError
from .exercises import normalize_exercise, as_text
from .repository import CollectionRepository
from .storage import PLANS_KEY


def copy_exercises(exercises):
    """
    Value copies of the given exercises.
    Plans keep these snapshots; they never point back at the exercise list.
    """
    copies = []
    for exercise in exercises or []:
        record = normalize_exercise(exercise)
        if record is not None:
            copies.append(record)
    return copies


def normalize_plan(plan):
    if not isinstance(plan, dict) or plan.get("id") in (None, ""):
        return None
    exercises = plan.get("exercises")
    return {
        "id": as_text(plan["id"]),
        "name": as_text(plan.get("name")),
        "day": as_text(plan.get("day")),
        "exercises": copy_exercises(exercises if isinstance(exercises, list) else []),
    }


def _validate(name, exercises):
    missing = []
    if not as_text(name).strip():
        missing.append("name")
    if not exercises:
        missing.append("exercises")
    if missing:
        raise ValidationError("A plan needs a name and at least one exercise", missing)


def preview(plan: dict, limit: int = 3):
    """Short summary used by plan lists: title plus the first few exercises."""
    title = plan["name"]
    if plan.get("day"):
        title = f"{title} – {plan['day']}"
    return {
        "title": title,
        "exercises": [
            {
                "name": ex["name"],
                "volume": f"{ex['sets']} x {ex['reps']}",
                "weight": f"{ex['weight']} kg",
            }
            for ex in plan["exercises"][:limit]
        ],
        "more": max(len(plan["exercises"]) - limit, 0),
    }


class PlanRepository(CollectionRepository):
    key = PLANS_KEY
    kind = "plan"

    def normalize(self, record):
        return normalize_plan(record)

    def _observe(self, record):
        super()._observe(record)
        for exercise in record["exercises"]:
            super()._observe(exercise)

    def add(self, name, day, selected_exercises):
        exercises = copy_exercises(selected_exercises)
        _validate(name, exercises)
        return self._append({
            "id": self.new_id(),
            "name": as_text(name),
            "day": as_text(day),
            "exercises": exercises,
        })

    def update(self, plan_id, name, day, selected_exercises):
        current = self._find(plan_id)
        exercises = copy_exercises(selected_exercises)
        _validate(name, exercises)

        current["name"] = as_text(name)
        current["day"] = as_text(day)
        current["exercises"] = exercises
        self._persist()
        return self.get(plan_id)
