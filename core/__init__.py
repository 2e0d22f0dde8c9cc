from .database import Database, Base
from .errors import (
    ClinicError,
    StorageFault,
    NotFound,
    ValidationFault,
    NotificationFault,
    AuthFault,
)

__all__ = [
    "Database",
    "Base",
    "ClinicError",
    "StorageFault",
    "NotFound",
    "ValidationFault",
    "NotificationFault",
    "AuthFault",
]
