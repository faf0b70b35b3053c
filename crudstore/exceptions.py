"""
crudstore exceptions
====================

Exception Hierarchy:
    CrudError (base, carries the HTTP status it maps to)
    ├── InvalidIDError          400
    ├── InvalidPayloadError     400
    ├── RecordNotFoundError     404
    └── UnsupportedMethodError  405
    ConfigurationError          bad server settings
    CrudClientError             non-success answer seen by CrudClient

Store operations never raise: a missing record is reported by the store as
None / False and turned into RecordNotFoundError by the dispatcher.
"""

from typing import Optional


class CrudError(Exception):
    """
    Base for errors answered to the HTTP caller.

    Attributes:
        message: Human-readable message, sent back as ``detail``
        status_code: HTTP status the error maps to
        error_code: Machine-readable code for logs
    """

    status_code: int = 500
    error_code: str = "CRUD_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidIDError(CrudError):
    status_code = 400
    error_code = "INVALID_ID"

    def __init__(self, raw_id: Optional[str] = None):
        super().__init__("Invalid ID")
        self.raw_id = raw_id


class InvalidPayloadError(CrudError):
    status_code = 400
    error_code = "INVALID_PAYLOAD"

    def __init__(self, reason: str = ""):
        super().__init__("Invalid request payload")
        self.reason = reason


class RecordNotFoundError(CrudError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, record_id: int):
        super().__init__("Item not found")
        self.record_id = record_id


class UnsupportedMethodError(CrudError):
    status_code = 405
    error_code = "METHOD_NOT_ALLOWED"

    def __init__(self, method: str):
        super().__init__("Unsupported method")
        self.method = method


class ConfigurationError(Exception):
    """Raised when a server setting is missing or malformed."""


class CrudClientError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
