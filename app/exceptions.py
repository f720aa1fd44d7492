"""
Exception classes for ClearVision.

Every error raised by the service layer derives from ``ClearVisionError`` so
the API can map it to an HTTP status in one place.
"""

from typing import Any, Dict, Optional


class ClearVisionError(Exception):
    """Base exception for all ClearVision errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationError(ClearVisionError):
    """A required field was empty or malformed. Raised before any collaborator call."""
    pass


class DataStoreError(ClearVisionError):
    """The persistence provider could not be reached or rejected the call."""
    pass


class RecordNotFound(DataStoreError):
    """No record with the requested id exists in the collection."""

    def __init__(self, collection: str, record_id: Any):
        super().__init__(
            f"{collection} record {record_id} not found",
            error_code="NOT_FOUND",
            details={"collection": collection, "id": record_id},
        )
        self.collection = collection
        self.record_id = record_id


class TextGenerationError(ClearVisionError):
    """The text-generation provider failed or returned an unusable payload."""
    pass
