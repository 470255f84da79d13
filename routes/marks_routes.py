from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from routes.common import error_response, get_store
from services.blueprint_service import (
    create_blueprint, parse_blueprint_payload, parse_questions,
    serialize_blueprint, update_blueprint
)
from services.internal_totals import fill_internal_totals
from services.mark_entry import get_internal_totals, get_marks_grid, save_single_mark
from utils.decorators import role_required
from utils.validation import optional_int, require_number, require_str, require_int

marks_bp = Blueprint("marks", __name__, url_prefix="/marks/internal")


# =========================================================
# BLUEPRINTS
# =========================================================
@marks_bp.route("/blueprints", methods=["POST"])
@login_required
@role_required("admin", "faculty")
def create_blueprint_route():
    data = request.json or {}
    try:
        store = get_store()
        payload = parse_blueprint_payload(data)
        created_by = current_user.user_id if current_user.is_authenticated else None
        blueprint = create_blueprint(store, payload, created_by=created_by)
        return jsonify(serialize_blueprint(store, blueprint)), 201
    except Exception as exc:
        return error_response(exc)


@marks_bp.route("/blueprints/<int:subject_id>/<int:cie_no>")
def get_blueprint_route(subject_id, cie_no):
    store = get_store()
    blueprint = store.get_blueprint(subject_id, cie_no)
    if blueprint is None:
        return jsonify({"error": "Blueprint not found"}), 404
    return jsonify(serialize_blueprint(store, blueprint))


@marks_bp.route("/blueprints/<int:blueprint_id>", methods=["PUT"])
@login_required
@role_required("admin", "faculty")
def update_blueprint_route(blueprint_id):
    data = request.json or {}
    try:
        store = get_store()
        blueprint = update_blueprint(store, blueprint_id, parse_questions(data))
        return jsonify(serialize_blueprint(store, blueprint))
    except Exception as exc:
        return error_response(exc)


# =========================================================
# MARK ENTRY
# =========================================================
@marks_bp.route("/grid/<int:subject_id>/<int:cie_no>")
def marks_grid(subject_id, cie_no):
    try:
        return jsonify(get_marks_grid(get_store(), subject_id, cie_no))
    except Exception as exc:
        return error_response(exc)


@marks_bp.route("/marks", methods=["POST"])
@login_required
@role_required("admin", "faculty")
def save_mark():
    data = request.json or {}
    try:
        subq_id = require_int(data, "subq_id", minimum=1)
        usn = require_str(data, "usn")
        marks = None if data.get("marks") is None else require_number(data, "marks")
        return jsonify(save_single_mark(get_store(), subq_id, usn, marks))
    except Exception as exc:
        return error_response(exc)


# =========================================================
# TOTALS
# =========================================================
@marks_bp.route("/totals/<int:subject_id>/<int:cie_no>")
def internal_totals(subject_id, cie_no):
    return jsonify({
        "subject_id": subject_id,
        "cie_no": cie_no,
        "data": get_internal_totals(get_store(), subject_id, cie_no)
    })


@marks_bp.route("/recalculate", methods=["POST"])
@login_required
@role_required("admin", "faculty")
def recalculate():
    data = request.json or {}
    try:
        subject_id = optional_int(data, "subject_id", minimum=1)
        cie_no = optional_int(data, "cie_no", minimum=1)
    except Exception as exc:
        return error_response(exc)

    report = fill_internal_totals(get_store(), subject_id=subject_id, cie_no=cie_no)
    return jsonify(report.as_dict()), 200 if report.ok else 207
