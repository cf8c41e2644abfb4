from flask import current_app, jsonify
from portfolio.domain.exceptions import (
    DataAccessError,
    RecordNotFound,
    UploadError,
    ValidationError,
)


def _error_response(error, status_code, **extra):
    response = jsonify({
        "error": error.__class__.__name__,
        "message": str(error),
        **extra
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        current_app.logger.warning("Validation failed: %s", error)
        return _error_response(error, 400, fields=error.fields)

    @app.errorhandler(RecordNotFound)
    def handle_record_not_found(error):
        return _error_response(error, 404)

    @app.errorhandler(UploadError)
    def handle_upload_error(error):
        current_app.logger.error("Upload failed: %s", error)
        return _error_response(error, 502)

    @app.errorhandler(DataAccessError)
    def handle_data_access_error(error):
        current_app.logger.error("Data access failed: %s", error)
        return _error_response(error, 500)
