"""
Transient editing state for composing a plan out of the exercise list.

A session is opened for a new plan or for an existing one, collects a name,
a day and a set of exercises, and ends either by commit (written to the plan
repository) or cancel. Nothing here is ever persisted on its own.
"""

import copy

from .errors import NotFoundError, SessionClosedError, ValidationError
from .exercises import as_text
from .plans import copy_exercises


class SelectionSession:
    def __init__(self, exercises, plans, plan=None):
        self._exercises = exercises
        self._plans = plans
        self._open = True

        if plan is None:
            self.editing_plan_id = None
            self.name = ""
            self.day = ""
            embedded = []
        else:
            self.editing_plan_id = plan["id"]
            self.name = plan["name"]
            self.day = plan["day"]
            embedded = copy_exercises(plan["exercises"])

        # id -> exercise snapshot, insertion ordered
        self._selected = {ex["id"]: ex for ex in embedded}
        # copies the edited plan started with, so a deleted exercise can be re-selected
        self._embedded = {ex["id"]: ex for ex in embedded}

    @property
    def is_open(self) -> bool:
        return self._open

    def _ensure_open(self):
        if not self._open:
            raise SessionClosedError("selection session is closed")

    def set_name(self, name: str):
        self._ensure_open()
        self.name = as_text(name)

    def set_day(self, day: str):
        self._ensure_open()
        self.day = as_text(day)

    def is_selected(self, exercise_id) -> bool:
        return exercise_id in self._selected

    @property
    def selected(self):
        return [copy.deepcopy(ex) for ex in self._selected.values()]

    def toggle(self, exercise_id) -> bool:
        """Flip membership of `exercise_id`. Returns True when it ends up selected."""
        self._ensure_open()
        if exercise_id in self._selected:
            del self._selected[exercise_id]
            return False

        try:
            exercise = self._exercises.get(exercise_id)
        except NotFoundError:
            if exercise_id not in self._embedded:
                raise
            exercise = copy.deepcopy(self._embedded[exercise_id])
        self._selected[exercise_id] = exercise
        return True

    def is_valid(self) -> bool:
        return bool(self.name.strip()) and bool(self._selected)

    def commit(self):
        self._ensure_open()
        if not self.is_valid():
            missing = []
            if not self.name.strip():
                missing.append("name")
            if not self._selected:
                missing.append("exercises")
            raise ValidationError("A plan needs a name and at least one exercise", missing)

        chosen = list(self._selected.values())
        if self.editing_plan_id is None:
            plan = self._plans.add(self.name, self.day, chosen)
        else:
            plan = self._plans.update(self.editing_plan_id, self.name, self.day, chosen)
        self._open = False
        return plan

    def cancel(self):
        self._open = False

    def snapshot(self) -> dict:
        return {
            "editingPlanId": self.editing_plan_id,
            "name": self.name,
            "day": self.day,
            "selected": list(self._selected),
            "valid": self.is_valid(),
        }


class SelectionDesk:
    """Holds the one selection session that may be open at a time."""

    def __init__(self, exercises, plans):
        self._exercises = exercises
        self._plans = plans
        self._session = None

    def begin(self, plan_id=None) -> SelectionSession:
        plan = self._plans.get(plan_id) if plan_id is not None else None
        if self._session is not None:
            # Opening a second form replaces whatever the first one held
            self._session.cancel()
        self._session = SelectionSession(self._exercises, self._plans, plan)
        return self._session

    @property
    def current(self):
        if self._session is not None and not self._session.is_open:
            self._session = None
        return self._session

    def require(self) -> SelectionSession:
        session = self.current
        if session is None:
            raise SessionClosedError("no selection session is open")
        return session

    def commit(self):
        plan = self.require().commit()
        self._session = None
        return plan

    def cancel(self):
        session = self.current
        if session is not None:
            session.cancel()
        self._session = None
