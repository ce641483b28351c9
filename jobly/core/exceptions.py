from typing import Any, Dict, List, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class BadRequestError(AppException):
    """Caller input that cannot be turned into a valid statement."""
    def __init__(self, message: str = "Bad Request", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="BAD_REQUEST",
            details=details
        )

class NotFoundError(AppException):
    def __init__(self, message: str = "Not Found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="UNAUTHORIZED"
        )

def format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Flatten pydantic error dicts into one human readable message."""
    messages = []
    for error in errors:
        # loc is usually ('body', 'field_name') or ('query', 'field_name')
        loc = list(error.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        field = ".".join(str(part) for part in loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(messages)
