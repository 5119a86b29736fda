"""Mapping of workflow failures to HTTP responses.

Error bodies are ``{"error": <message>}``; a membership mismatch also
carries the ``debug`` payload describing the mismatch.
"""

import logging
from typing import Optional

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from aura.core.workflow.errors import (
    WorkflowError,
    ValidationError,
    NotFoundError,
    NomineeNotFound,
    RosterUnavailable,
    AmbiguousMember,
    NotAGroupMember,
    ConflictError,
)

logger = logging.getLogger(__name__)


def status_for(exc: WorkflowError) -> int:
    """HTTP status code for a workflow failure."""
    # The nomination endpoint reports these as the original surface did
    if isinstance(exc, (NomineeNotFound, NotAGroupMember)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, RosterUnavailable):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (AmbiguousMember, ConflictError)):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(message: str, status_code: int, debug: Optional[dict] = None) -> JSONResponse:
    content = {"error": message}
    if debug is not None:
        content["debug"] = debug
    return JSONResponse(status_code=status_code, content=content)


def workflow_error_response(exc: WorkflowError) -> JSONResponse:
    debug = exc.detail if isinstance(exc, NotAGroupMember) else None
    return error_response(exc.message, status_for(exc), debug)


def store_error_response(exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Store error: {exc}")
    return error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)


def missing_parameters(message: str = "Missing required parameters") -> JSONResponse:
    return error_response(message, status.HTTP_400_BAD_REQUEST)
