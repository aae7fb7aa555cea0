"""Error taxonomy shared by services and routes.

Every error carries a human-readable message and the HTTP status it maps to.
The app factory registers a single handler that renders them as
``{"error": message}``.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(ServiceError):
    """Caller input is missing or has the wrong type."""
    status_code = 400


class ExtractionError(ServiceError):
    """A provider answered, but not with the shape we need."""
    status_code = 400


class WeightParseError(ExtractionError):
    """A numeric match was found but is not a finite number."""


class NotFoundError(ServiceError):
    status_code = 404


class UpstreamError(ServiceError):
    """A third-party provider was unreachable or rejected the call."""
    status_code = 500


class StorageError(ServiceError):
    status_code = 500
