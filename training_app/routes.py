from flask import request, jsonify, current_app

from . import training_bp
from .errors import NotFoundError, SessionClosedError, ValidationError
from .exercises import EXERCISE_FIELDS, sort_by_name
from .plans import preview

from planner_core import log_action


def _workspace():
    return current_app.extensions["training"]


def _payload():
    try:
        data = request.get_json(force=True, silent=True) or {}
    except Exception:
        data = {}
    if not data and request.form:
        data = request.form.to_dict()
    return data if isinstance(data, dict) else {}


def _ok(status=200, **body):
    body = {"ok": True, **body}
    notices = _workspace().write_notices()
    if notices:
        body["notice"] = "Changes are kept but could not be saved: " + "; ".join(notices)
    return jsonify(body), status


@training_bp.errorhandler(ValidationError)
def _validation_failed(e):
    log_action("training_validation_failed", {"fields": e.fields})
    return jsonify({"ok": False, "error": "validation", "message": str(e), "fields": e.fields}), 400


@training_bp.errorhandler(NotFoundError)
def _not_found(e):
    log_action("training_not_found", {"kind": e.kind, "id": e.id})
    return jsonify({"ok": False, "error": "not_found", "message": str(e)}), 404


@training_bp.errorhandler(SessionClosedError)
def _no_session(e):
    return jsonify({"ok": False, "error": "no_session", "message": str(e)}), 409


# ───────── Exercises ─────────

@training_bp.route("/exercises", methods=["GET"])
def list_exercises():
    exercises = _workspace().exercises.list()
    if request.args.get("sort") == "name":
        exercises = sort_by_name(exercises)
    log_action("exercise_list_view", {"count": len(exercises)})
    return _ok(exercises=exercises)


@training_bp.route("/exercises", methods=["POST"])
def add_exercise():
    data = _payload()
    exercise = _workspace().exercises.add(*(data.get(f) for f in EXERCISE_FIELDS))
    log_action("exercise_added", {"id": exercise["id"], "name": exercise["name"]})
    return _ok(201, exercise=exercise)


@training_bp.route("/exercises/<exercise_id>", methods=["GET"])
def view_exercise(exercise_id):
    return _ok(exercise=_workspace().exercises.get(exercise_id))


@training_bp.route("/exercises/<exercise_id>", methods=["PUT", "PATCH"])
def update_exercise(exercise_id):
    data = _payload()
    fields = {f: data[f] for f in EXERCISE_FIELDS if f in data}
    exercise = _workspace().exercises.update(exercise_id, **fields)
    log_action("exercise_updated", {"id": exercise_id, "name": exercise["name"]})
    return _ok(exercise=exercise)


@training_bp.route("/exercises/<exercise_id>", methods=["DELETE"])
def delete_exercise(exercise_id):
    _workspace().exercises.remove(exercise_id)
    log_action("exercise_deleted", {"id": exercise_id})
    return _ok()


# ───────── Plans ─────────

@training_bp.route("/plans", methods=["GET"])
def list_plans():
    plans = _workspace().plans.list()
    limit = request.args.get("preview", type=int)
    if limit is not None:
        for plan in plans:
            plan["preview"] = preview(plan, max(limit, 0))
    log_action("plan_list_view", {"count": len(plans)})
    return _ok(plans=plans)


@training_bp.route("/plans/<plan_id>", methods=["GET"])
def view_plan(plan_id):
    plan = _workspace().plans.get(plan_id)
    log_action("plan_view", {"id": plan_id})
    return _ok(plan=plan)


@training_bp.route("/plans/<plan_id>", methods=["DELETE"])
def delete_plan(plan_id):
    _workspace().plans.remove(plan_id)
    log_action("plan_deleted", {"id": plan_id})
    return _ok()


# ───────── Selection session (plan form) ─────────

@training_bp.route("/session", methods=["POST"])
def begin_session():
    plan_id = _payload().get("plan_id")
    session = _workspace().selection.begin(plan_id)
    log_action("plan_form_opened", {"plan_id": plan_id})
    return _ok(201, session=session.snapshot())


@training_bp.route("/session", methods=["GET"])
def session_state():
    return _ok(session=_workspace().selection.require().snapshot())


@training_bp.route("/session", methods=["PATCH"])
def session_fields():
    data = _payload()
    session = _workspace().selection.require()
    if "name" in data:
        session.set_name(data.get("name"))
    if "day" in data:
        session.set_day(data.get("day"))
    return _ok(session=session.snapshot())


@training_bp.route("/session/toggle/<exercise_id>", methods=["POST"])
def session_toggle(exercise_id):
    session = _workspace().selection.require()
    selected = session.toggle(exercise_id)
    log_action("plan_form_toggle", {"exercise_id": exercise_id, "selected": selected})
    return _ok(session=session.snapshot())


@training_bp.route("/session/commit", methods=["POST"])
def session_commit():
    desk = _workspace().selection
    editing = desk.require().editing_plan_id
    plan = desk.commit()
    log_action("plan_updated" if editing else "plan_added", {"id": plan["id"], "name": plan["name"]})
    return _ok(200 if editing else 201, plan=plan)


@training_bp.route("/session/cancel", methods=["POST"])
def session_cancel():
    _workspace().selection.cancel()
    log_action("plan_form_cancelled")
    return _ok()


@training_bp.route("/flush", methods=["POST"])
def flush():
    saved = _workspace().flush()
    log_action("training_flush", {"saved": saved})
    return _ok(saved=saved)
