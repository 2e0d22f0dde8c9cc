"""Error types shared by the data layer, reminders and the session gate."""


class ClinicError(Exception):
    """Base class for every error raised by the clinic core."""


class StorageFault(ClinicError):
    """Schema creation, query or mutation failure.

    `cause` keeps the underlying SQLAlchemy/OS error so callers can log it.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class NotFound(StorageFault):
    """The row an update/delete targeted does not exist."""


class ValidationFault(ClinicError, ValueError):
    """Form-level validation failure, raised before any storage call.

    `errors` maps a field name to a user-facing message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(summary or "Invalid input")


class NotificationFault(ClinicError):
    """Reminder could not be scheduled or cancelled. Never fatal."""


class AuthFault(ClinicError):
    """Wrong PIN or failed biometric check."""
