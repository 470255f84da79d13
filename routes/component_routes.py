import re

from flask import Blueprint, jsonify, request, send_file
from flask_login import login_required

from models import COMPONENTS
from routes.common import error_response, get_store, page_args
from services.component_service import (
    configure_component, get_component_grid, get_overall_rows,
    get_overall_totals, parse_component, save_component_mark, serialize_config
)
from services.component_totals import fill_overall_totals
from services.export_service import overall_totals_csv, overall_totals_pdf
from utils.decorators import role_required
from utils.validation import optional_int, require_int, require_number, require_str

components_bp = Blueprint("components", __name__, url_prefix="/marks/components")


@components_bp.route("/<int:subject_id>")
def list_components(subject_id):
    configs = get_store().component_configs(subject_id)
    return jsonify({
        "subject_id": subject_id,
        "components": [serialize_config(c) for c in configs],
        "available": list(COMPONENTS)
    })


@components_bp.route("/config", methods=["POST"])
@login_required
@role_required("admin", "faculty")
def configure():
    data = request.json or {}
    try:
        config = configure_component(get_store(), data)
        return jsonify(serialize_config(config))
    except Exception as exc:
        return error_response(exc)


@components_bp.route("/grid")
def component_grid():
    try:
        subject_id = require_int(request.args, "subject_id", minimum=1)
        component = parse_component(request.args)
        attempt_no = require_int(request.args, "attempt_no", minimum=1, maximum=2)
        page, size = page_args()
        return jsonify(get_component_grid(get_store(), subject_id, component, attempt_no, page, size))
    except Exception as exc:
        return error_response(exc)


@components_bp.route("/marks", methods=["POST"])
@login_required
@role_required("admin", "faculty")
def save_mark():
    data = request.json or {}
    try:
        result = save_component_mark(
            get_store(),
            usn=require_str(data, "usn"),
            subject_id=require_int(data, "subject_id", minimum=1),
            component=parse_component(data),
            attempt_no=require_int(data, "attempt_no", minimum=1, maximum=2),
            marks=require_number(data, "marks", minimum=0)
        )
        return jsonify(result)
    except Exception as exc:
        return error_response(exc)


@components_bp.route("/recalculate", methods=["POST"])
@login_required
@role_required("admin", "faculty")
def recalculate():
    data = request.json or {}
    try:
        subject_id = optional_int(data, "subject_id", minimum=1)
    except Exception as exc:
        return error_response(exc)

    report = fill_overall_totals(get_store(), subject_id=subject_id)
    return jsonify(report.as_dict()), 200 if report.ok else 207


# =========================================================
# OVERALL TOTALS
# =========================================================
@components_bp.route("/totals/<int:subject_id>")
def overall_totals(subject_id):
    try:
        page, size = page_args()
        return jsonify(get_overall_totals(get_store(), subject_id, page, size))
    except Exception as exc:
        return error_response(exc)


@components_bp.route("/totals/<int:subject_id>/export")
def export_overall_totals(subject_id):
    export_format = (request.args.get("format") or "csv").lower()
    if export_format not in ("csv", "pdf"):
        return jsonify({"error": "format must be csv or pdf"}), 400

    store = get_store()
    subject = store.get_subject(subject_id)
    if subject is None:
        return jsonify({"error": "Subject not found"}), 404

    rows = get_overall_rows(store, subject)
    safe_code = re.sub(r"[^a-zA-Z0-9]+", "_", subject.subject_code).strip("_")

    if export_format == "pdf":
        return send_file(
            overall_totals_pdf(subject, rows),
            as_attachment=True,
            download_name=f"{safe_code}_Overall_Totals.pdf",
            mimetype="application/pdf"
        )

    return send_file(
        overall_totals_csv(subject, rows),
        as_attachment=True,
        download_name=f"{safe_code}_Overall_Totals.csv",
        mimetype="text/csv"
    )
