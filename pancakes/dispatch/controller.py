from __future__ import annotations

import logging
from typing import Any, Sequence

from pancakes.context import LaunchContext

from .handlers import LauncherHandler
from .registry import REGISTRY, HandlerRegistry
from .selector import describe_candidate, select

logger = logging.getLogger(__name__)


class DispatchController:
    def __init__(self, context: LaunchContext, registry: HandlerRegistry = REGISTRY) -> None:
        self.context = context
        self.registry = registry

    def candidates(self, args: Sequence[str], options: dict[str, Any]) -> list[LauncherHandler]:
        """Fresh launcher instances that accept this call, in discovery order."""
        out: list[LauncherHandler] = []
        for entry in self.registry.discover():
            handler = entry.factory(self.context)
            if entry.validates and not handler.validate(args, options):
                logger.debug("Skipping %s: validation failed", entry.label)
                continue
            out.append(handler)
        return out

    def dispatch(self, args: Sequence[str], options: dict[str, Any]) -> None:
        candidates = self.candidates(args, options)
        logger.debug("Valid candidates: %s", "; ".join(describe_candidate(c) for c in candidates) or "(none)")

        result = select(candidates, options.get("app"))
        site = self.context.connection.display_name()
        for notice in result.notices:
            logger.info(notice)
        logger.info("Opening %s database in %s.", site, result.handler.label)

        result.handler.run(args, options)
