"""Marketplace-specific exceptions.

Field-level rule violations use ``protean.exceptions.ValidationError`` and
missing aggregates use ``protean.exceptions.ObjectNotFoundError``; the two
classes below cover the remaining cases.
"""


# Outcome reported to callers when a ConflictError is absorbed
ALREADY_PROCESSED = "already_processed"


class ConflictError(Exception):
    """The requested transition already happened (liquidate twice, moderate a decided product).

    Handlers treat this as a benign idempotency hit and report
    ``already_processed`` to the caller instead of failing.
    """

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class PermissionDenied(Exception):
    """The caller's role or identity does not allow the operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
