from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PancakesError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class NoHandlersAvailable(PancakesError):
    pass


@dataclass(frozen=True)
class HandlerNotFound(PancakesError):
    target: str = ""
    listing: tuple[str, ...] = ()


class HandlerRegistrationError(PancakesError):
    pass


class ConfigInvalid(PancakesError):
    pass


class SchemaInvalid(PancakesError):
    pass


class CommandTimedOut(PancakesError):
    pass


class LaunchFailed(PancakesError):
    pass
