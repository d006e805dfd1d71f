from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from models.exceptions import StorageError


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # 400 Bad Request (generic)
    @app.errorhandler(400)
    def bad_request(e):
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=e)
        message = getattr(e, "description", "Bad request")
        return error_response("BAD_REQUEST", message, 400)

    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=e)
        return error_response("NOT_FOUND", "Resource not found", 404)

    # Marshmallow validation errors and rejected Author fields map to 422
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=err)
        return error_response("VALIDATION_ERROR", "Invalid input", 422, details=err.normalized_messages())

    # Wrapped store failures: unique email violations become 409
    @app.errorhandler(StorageError)
    def handle_storage_error(err: StorageError):
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=err)
        if isinstance(err.orig, IntegrityError):
            message = str(getattr(err.orig, "orig", err.orig))
            return error_response("CONFLICT", "Unique constraint violated.", 409, details={"db_error": message})
        return error_response("STORAGE_ERROR", str(err), 500)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # e.g. 405 -> METHOD_NOT_ALLOWED
        error = err.name.upper().replace(" ", "_")
        return error_response(error, err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        # In dev, include exception details to speed up debugging
        details = None
        if current_app and current_app.debug:
            logging.exception("Unhandled exception", exc_info=err)
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
