from flask import jsonify


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class PersistenceError(CatalogError):
    """Raised when the database rejects or cannot run a statement."""
    status_code = 500


def error_response(logger, error, endpoint, **extra):
    extra.update({'endpoint': endpoint, 'status_code': error.status_code, 'error': error.message})
    if error.status_code >= 500:
        logger.error("Request failed", extra=extra)
    else:
        logger.warning("Request rejected", extra=extra)
    return jsonify({"error": error.message}), error.status_code
