"""Engine failures and their classification.

Every failure surfaced to the user is one of two variants, chosen where the
error is raised:

* ``TypedFailure`` -- carries a user-facing message that is shown verbatim
  (e.g. the image could not be brought under an engine's upload limit).
* ``GenericFailure`` -- carries only a catalog message id; the technical
  detail stays in the logs.

Exceptions that do not derive from ``EngineError`` (network errors, bugs)
classify as ``GenericFailure("error_engine")``.
"""

from dataclasses import dataclass
from typing import Union

GENERIC_ERROR_ID = "error_engine"


@dataclass(frozen=True)
class TypedFailure:
    message: str


@dataclass(frozen=True)
class GenericFailure:
    error_id: str = GENERIC_ERROR_ID


EngineFailure = Union[TypedFailure, GenericFailure]


class EngineError(Exception):
    """Base class for failures raised by the search pipeline."""

    @property
    def failure(self) -> EngineFailure:
        return GenericFailure(GENERIC_ERROR_ID)


class TypedEngineError(EngineError):
    """Failure whose message is meant for the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def failure(self) -> EngineFailure:
        return TypedFailure(self.message)


class GenericEngineError(EngineError):
    """Failure shown to the user only as generic catalog text."""

    def __init__(self, detail: str = "search failed", error_id: str = GENERIC_ERROR_ID):
        super().__init__(detail)
        self.error_id = error_id

    @property
    def failure(self) -> EngineFailure:
        return GenericFailure(self.error_id)


def classify_error(exc: BaseException) -> EngineFailure:
    """Map any raised exception to the failure variant shown to the user."""
    if isinstance(exc, EngineError):
        return exc.failure
    return GenericFailure()
