import logging

from flask import current_app, jsonify, request

from extensions import db
from services.marks_store import MarksStore
from utils.errors import MarksError
from utils.validation import optional_int

logger = logging.getLogger(__name__)


def get_store():
    return MarksStore(db.session)


def error_response(exc):
    db.session.rollback()
    if isinstance(exc, MarksError):
        return jsonify({"error": str(exc)}), exc.status_code
    logger.exception("Unhandled error in %s %s", request.method, request.path)
    return jsonify({"error": str(exc)}), 500


def page_args():
    page = optional_int(request.args, "page", minimum=1, default=1)
    size = optional_int(
        request.args, "size",
        minimum=1,
        maximum=current_app.config["MARKS_MAX_PAGE_SIZE"],
        default=current_app.config["MARKS_PAGE_SIZE"]
    )
    return page, size
