"""
Notes Backend: Exception Hierarchy
==================================

What:  Application-specific exceptions raised by the store and service layers.
How:   Each exception carries a human-readable message and an optional context
       dict. Global handlers in main.py translate them into JSON error bodies.

Exception Hierarchy:
    NotesAppError (base)
    └── NotFoundError   → 404 Not Found

Request validation failures never reach the service layer: FastAPI raises
RequestValidationError at the boundary and main.py maps it to 400. Anything
else (driver errors, lost connections) propagates unchanged and becomes 500.
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description, returned in the API response.
        context:  Extra diagnostic info, logged but not returned.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(NotesAppError):
    """
    Raised when a requested note does not exist.

    When:  get, update, delete or stats on an unknown id.
    HTTP:  404 Not Found

    The message always names the missing id:
        "Note with id 42 not found"
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id
