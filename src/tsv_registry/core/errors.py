from __future__ import annotations

import traceback
from dataclasses import dataclass


class RegistryError(RuntimeError):
    """Base error"""


@dataclass(frozen=True, slots=True)
class StageError:
    """
    A normalized error record for stage failures.
    """

    exc_type: str
    message: str
    traceback: str


def stage_error_from_exc(exc: BaseException) -> StageError:
    return StageError(
        exc_type=type(exc).__name__,
        message=str(exc),
        traceback=traceback.format_exc(),
    )


class InputDataError(RegistryError):
    """
    Input file is missing, unreadable or not decodable
    """


class ParseError(RegistryError):
    """Markdown table could not be located or is malformed"""


class RegistryValidationError(RegistryError):
    """
    One or more rows violate the registry rules.

    Carries every violation message so callers can render them individually.
    """

    def __init__(self, message: str, *, violations: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.violations = violations


class PublishError(RegistryError):
    """Writing the registry artifacts failed"""


class ServeConfigError(RegistryError):
    """Invalid server configuration (address or directory)"""
