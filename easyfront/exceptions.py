"""
Exception hierarchy for EasyFront.

Store and parser operations never raise for missing elements or
malformed CSS; these exceptions cover the service and I/O boundaries.
"""

from typing import Optional, Dict, Any


class EasyFrontError(Exception):
    """Base exception for all EasyFront errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [super().__str__()]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)


class PersistenceError(EasyFrontError):
    """The project/widget store could not be read or written"""
    pass


class RecordNotFoundError(EasyFrontError):
    """No record with the requested id in a collection"""
    pass


class DuplicateRecordError(EasyFrontError):
    """A record with the same id already exists"""
    pass


class WidgetNotFoundError(RecordNotFoundError):
    """A dropped widget id could not be resolved"""
    pass


class WidgetValidationError(EasyFrontError):
    """Imported widget is missing its name or HTML body"""
    pass


class LoadInProgressError(EasyFrontError):
    """Another project load is still running for this session"""
    pass
