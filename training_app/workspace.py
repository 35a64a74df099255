from .exercises import ExerciseRepository
from .plans import PlanRepository
from .selection import SelectionDesk
from .storage import JsonStore


class Workspace:
    """Everything one data directory needs: the store, both repositories and the session desk."""

    def __init__(self, data_dir: str, id_factory=None):
        self.store = JsonStore(data_dir)
        self.exercises = ExerciseRepository(self.store, id_factory)
        self.plans = PlanRepository(self.store, id_factory)
        self.selection = SelectionDesk(self.exercises, self.plans)

    def write_notices(self):
        errors = [repo.last_write_error for repo in (self.exercises, self.plans)]
        return [str(e) for e in errors if e is not None]

    def flush(self) -> bool:
        results = [self.exercises.flush(), self.plans.flush()]
        return all(results)
