from flask import current_app, jsonify
from sqlalchemy.exc import OperationalError
from chemistry.domain.exceptions import (
    CycleError,
    PageNotFound,
    PersistenceFailure,
    RecordNotFound,
    ValidationError,
)


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": "ValidationError",
            "errors": error.to_list(),
        })
        response.status_code = 422
        return response

    @app.errorhandler(CycleError)
    def handle_cycle_error(error):
        response = jsonify({
            "error": "CycleError",
            "message": str(error),
        })
        response.status_code = 409
        return response

    @app.errorhandler(RecordNotFound)
    def handle_not_found(error):
        body = {"error": "NotFound", "message": str(error)}
        if isinstance(error, PageNotFound) and error.path is not None:
            body["path"] = error.path
        response = jsonify(body)
        response.status_code = 404
        return response

    @app.errorhandler(PersistenceFailure)
    @app.errorhandler(OperationalError)
    def handle_persistence_failure(error):
        current_app.logger.error("Persistence failure: %s", error)
        response = jsonify({
            "error": "PersistenceFailure",
            "message": "The content store is unavailable",
        })
        response.status_code = 503
        return response
