from typing import Any, Dict
from pydantic import BaseModel


class ErrorInfo(BaseModel):
    message: str
    status: int


class ErrorResponse(BaseModel):
    """Envelope every failed request is rendered with."""

    error: ErrorInfo

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-serializable values."""
        return self.model_dump(mode="json")

    @classmethod
    def fail(cls, message: str, status: int) -> "ErrorResponse":
        return cls(error=ErrorInfo(message=message, status=status))
