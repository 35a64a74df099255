#!/usr/bin/env python3
import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from planner_core import BASE_DIR, get_log_file, set_log_file, log_action, load_logs
from training_app import training_bp
from training_app.storage import ensure_data_dir
from training_app.workspace import Workspace


def create_app(config=None):
    app = Flask(__name__)

    # ───────────── Config ─────────────
    app.config["DATA_DIR"] = os.environ.get("TRAINING_DATA_DIR")
    app.config["LOG_FILE"] = os.environ.get("TRAINING_LOG_FILE", get_log_file())
    if config:
        app.config.update(config)

    set_log_file(app.config["LOG_FILE"])
    data_dir = app.config["DATA_DIR"] or ensure_data_dir(BASE_DIR)
    app.config["DATA_DIR"] = data_dir

    # Both collections hydrate once here; requests only see the in-memory copies
    app.extensions["training"] = Workspace(data_dir)
    app.register_blueprint(training_bp, url_prefix="/training")

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"ok": False, "error": e.name.lower().replace(" ", "_"), "message": e.description}), e.code

    @app.route("/logs")
    def view_logs():
        return jsonify({"ok": True, "logs": load_logs(limit=200)})

    log_action("app_started", {"data_dir": data_dir})
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8000, debug=True)
