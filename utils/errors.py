class MarksError(Exception):
    """Base error for the marks module, carries the HTTP status to answer with."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MarksError):
    status_code = 400


class NotFoundError(MarksError):
    status_code = 404


class ConflictError(MarksError):
    status_code = 409
