import os
import json

from planner_core import log_action
from .errors import PersistenceReadError, PersistenceWriteError

EXERCISES_KEY = "exercises"
PLANS_KEY = "trainingPlans"


def ensure_data_dir(base_dir: str) -> str:
    data_dir = os.path.join(base_dir, "training_app", "data")
    os.makedirs(data_dir, exist_ok=True)
    return data_dir


def save_json(path: str, data):
    tmp_path = path + ".tmp"
    with open(tmp_path, "w") as f:
        json.dump(data, f, indent=2)
    os.replace(tmp_path, path)


class JsonStore:
    """
    Key/value store where every key is one JSON array file in `data_dir`.
    Collections are always read and written whole.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(data_dir, exist_ok=True)
        self._write_errors = {}

    def path_for(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    def read(self, key: str) -> list:
        """Like load() but raises PersistenceReadError on unreadable content."""
        path = self.path_for(key)
        if not os.path.exists(path):
            return []
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceReadError(key, str(e)) from e
        if not isinstance(data, list):
            raise PersistenceReadError(key, f"expected a list, got {type(data).__name__}")
        return data

    def load(self, key: str) -> list:
        try:
            return self.read(key)
        except PersistenceReadError as e:
            # Start empty rather than crash the caller on a corrupt file
            log_action("storage_read_failed", {"key": key, "error": str(e)})
            return []

    def save(self, key: str, items: list) -> bool:
        try:
            save_json(self.path_for(key), list(items))
        except (OSError, TypeError, ValueError) as e:
            err = PersistenceWriteError(key, str(e))
            self._write_errors[key] = err
            log_action("storage_write_failed", {"key": key, "error": str(err)})
            return False
        self._write_errors.pop(key, None)
        return True

    def write_error(self, key: str):
        """The PersistenceWriteError of the last failed save for `key`, None once a save succeeds."""
        return self._write_errors.get(key)
