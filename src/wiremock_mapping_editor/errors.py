"""Error taxonomy for the log view and mapping workflow.

Every error raised inside an operation is caught at that operation's boundary,
stored as the owner's ``last_error`` and logged; none escapes to crash the
workflow. The message attribute is the user-facing text.

Hierarchy:
    WorkflowError
        ParseError      editor text is not a JSON object (blocks any network call)
        DispatchError   create/update rejected (blocks the persist step)
        PersistError    persist-to-disk rejected (remote may be ahead of disk)
        TransportError  list load failed (previous data stays visible)
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "AdminApiError",
    "DispatchError",
    "ParseError",
    "PersistError",
    "TransportError",
    "WorkflowError",
]


class AdminApiError(RuntimeError):
    """Non-2xx response or transport failure from the admin API.

    ``status_code`` is None when no HTTP response was received at all.
    """

    def __init__(self, status_code: Optional[int], detail: Optional[str] = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"HTTP {status_code}"
        else:
            message = detail or "request failed"
        super().__init__(message)
        self.message = message


class WorkflowError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(WorkflowError):
    pass


class DispatchError(WorkflowError):
    def __init__(self, action: str, cause: AdminApiError):
        super().__init__(f"{action} failed: {cause.message}")
        self.action = action
        self.status_code = cause.status_code


class PersistError(WorkflowError):
    def __init__(self, cause: AdminApiError):
        super().__init__(f"Save-to-disk failed: {cause.message}")
        self.status_code = cause.status_code


class TransportError(WorkflowError):
    def __init__(self, cause: AdminApiError):
        super().__init__(cause.message)
        self.status_code = cause.status_code
