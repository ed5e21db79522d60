import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    STORAGE = "storage"
    PERMISSION = "permission"
    NETWORK = "network"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


HTTP_STATUS = {
    ErrorKind.STORAGE: 503,
    ErrorKind.PERMISSION: 403,
    ErrorKind.NETWORK: 503,
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNKNOWN: 500,
}

USER_MESSAGES = {
    ErrorKind.STORAGE: "Storage service error. Please try again.",
    ErrorKind.PERMISSION: "Permission denied. Please check your account.",
    ErrorKind.NETWORK: "Network error. Please check your connection.",
    ErrorKind.UNKNOWN: "An unexpected error occurred. Please try again.",
}


class ServiceError(Exception):
    """Failure raised by services with a known category."""

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


def classify_error(exc: BaseException) -> ErrorKind:
    """
    Categorise an exception. ServiceError carries its own kind; for anything
    else only the message text is available, so fall back to keyword matching.
    """
    if isinstance(exc, ServiceError):
        return exc.kind
    if isinstance(exc, PermissionError):
        return ErrorKind.PERMISSION
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return ErrorKind.NETWORK
    text = str(exc).lower()
    if "storage" in text:
        return ErrorKind.STORAGE
    if "permission" in text:
        return ErrorKind.PERMISSION
    if "network" in text:
        return ErrorKind.NETWORK
    return ErrorKind.UNKNOWN


def user_message(exc: BaseException) -> str:
    kind = classify_error(exc)
    if kind in USER_MESSAGES:
        return USER_MESSAGES[kind]
    # Validation / not-found / conflict messages are written for users already.
    return str(exc) or USER_MESSAGES[ErrorKind.UNKNOWN]
