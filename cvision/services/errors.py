class CVisionError(Exception):
    """Base class for errors the API reports back to the caller."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"error": self.message}


class Unauthenticated(CVisionError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(CVisionError):
    status_code = 403
    default_message = "You are not authorized to perform this action"


class NotFound(CVisionError):
    status_code = 404
    default_message = "Not found"


class InvalidPayload(CVisionError):
    status_code = 400
    default_message = "Invalid payload"


class Conflict(CVisionError):
    status_code = 409
    default_message = "Conflict"
