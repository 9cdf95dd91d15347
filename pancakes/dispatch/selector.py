from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .errors import HandlerNotFound, NoHandlersAvailable
from .handlers import LauncherHandler


@dataclass(frozen=True)
class SelectionResult:
    handler: LauncherHandler
    notices: tuple[str, ...] = ()

    @property
    def ambiguous(self) -> bool:
        return bool(self.notices)


def describe_candidate(candidate: LauncherHandler) -> str:
    aliases = ", ".join(getattr(candidate, "aliases", ()) or ())
    return f"{candidate.label}: {aliases}"


def select(candidates: Sequence[LauncherHandler], explicit_target: str | None = None) -> SelectionResult:
    """Pick one launcher from ``candidates`` (already validated, discovery order).

    With a target, the first candidate having an alias that contains the
    target wins; later matches are not reported. Without one, the first
    candidate wins and a notice is attached when there was a choice.
    """
    target = (explicit_target or "").strip()
    if target:
        for candidate in candidates:
            if any(target in alias for alias in getattr(candidate, "aliases", ()) or ()):
                return SelectionResult(handler=candidate)
        listing = tuple(describe_candidate(c) for c in candidates)
        raise HandlerNotFound(
            code="HANDLER_NOT_FOUND",
            message=f"{target} was not found. Valid apps: {'; '.join(listing) or '(none)'}",
            target=target,
            listing=listing,
        )

    if not candidates:
        raise NoHandlersAvailable(code="NO_HANDLERS", message="no applications available to open the database")
    if len(candidates) == 1:
        return SelectionResult(handler=candidates[0])

    labels = ", ".join(c.label for c in candidates)
    notice = f"Multiple applications were found: {labels}. Add --app to be specific on the app."
    return SelectionResult(handler=candidates[0], notices=(notice,))
