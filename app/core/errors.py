"""Application error taxonomy, mapped to HTTP responses in app.main."""


class AppError(Exception):
    """Base for errors a request can fail with. Never fatal to the process."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input that the schema layer could not catch."""

    status_code = 400


class NotFoundError(AppError):
    """The operation needs state that does not exist (e.g. ending a fast when none is active)."""

    status_code = 404


class ConflictError(AppError):
    """The write would break the one-active-session-per-user rule."""

    status_code = 409
