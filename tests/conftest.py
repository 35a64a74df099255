import pytest

import planner_core
from app import create_app
from training_app.workspace import Workspace


@pytest.fixture(autouse=True)
def action_log(tmp_path):
    """Keep the action log out of the project directory."""
    previous = planner_core.get_log_file()
    path = tmp_path / "logs.jsonl"
    planner_core.set_log_file(str(path))
    yield path
    planner_core.set_log_file(previous)


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return str(path)


@pytest.fixture
def workspace(data_dir):
    return Workspace(data_dir)


@pytest.fixture
def app(data_dir, action_log):
    app = create_app({"DATA_DIR": data_dir, "LOG_FILE": str(action_log), "TESTING": True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
