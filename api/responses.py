"""
Response envelope helpers.

Every response body is ``{success, message, data}``. Error envelopes are
built by the exception handlers in backend.main.
"""

from typing import Any, Dict, Optional

from application.use_cases import PageResult


def success(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    return {"success": True, "message": message, "data": data}


def paginated(key: str, page: PageResult, message: str = "Success") -> Dict[str, Any]:
    """Wrap a page of results as ``data = {<key>: [...], pagination: {...}}``."""
    return success(
        {
            key: page.items,
            "pagination": page.pagination.model_dump() if page.pagination else None,
        },
        message,
    )


def error_body(
    message: str,
    errors: Optional[list] = None,
    detail: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build an error envelope.

    Args:
        message: Human readable summary
        errors: Field-level validation errors, if any
        detail: Raw exception text, only passed in development
    """
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    if detail is not None:
        body["error"] = detail
    return body
