#!/usr/bin/env python3
import os

from planner_core import BASE_DIR
from training_app.errors import ValidationError
from training_app.storage import ensure_data_dir
from training_app.workspace import Workspace


def main():
    data_dir = os.environ.get("TRAINING_DATA_DIR") or ensure_data_dir(BASE_DIR)
    workspace = Workspace(data_dir)

    name = input("Exercise name: ").strip()
    sets = input("Sets: ").strip()
    reps = input("Reps: ").strip()
    weight = input("Weight (kg): ").strip()

    try:
        exercise = workspace.exercises.add(name, sets, reps, weight)
    except ValidationError as e:
        print(f"Cannot be empty: {', '.join(e.fields)}.")
        return

    if workspace.exercises.dirty:
        print(f"Could not save: {workspace.exercises.last_write_error}")
        return

    print(f"Exercise '{exercise['name']}' added ({exercise['sets']} x {exercise['reps']}, {exercise['weight']} kg).")


if __name__ == "__main__":
    main()
