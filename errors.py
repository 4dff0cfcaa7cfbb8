"""Error kinds raised by the store and the chat proxy.

Each kind carries the HTTP status it maps to; ``main`` turns any of them into
the ``{"success": false, "error": ...}`` envelope.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class MissingFieldError(ServiceError):
    status_code = 400
    default_message = "Missing required field."


class DuplicateStudentError(ServiceError):
    status_code = 409
    default_message = "Duplicate ID."


class StudentNotFoundError(ServiceError):
    status_code = 404
    default_message = "Student not found."


class ConfigurationError(ServiceError):
    status_code = 500
    default_message = "Service is not configured."


class UpstreamError(ServiceError):
    status_code = 502
    default_message = "AI returned no response."


class TransportError(ServiceError):
    status_code = 500
    default_message = "Server error communicating with AI."
