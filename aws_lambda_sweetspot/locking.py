"""Per-function leases so two sweeps never reconfigure the same function."""

import logging
from contextlib import asynccontextmanager
from typing import Set

from .exceptions import SweepInProgressError

logger = logging.getLogger(__name__)


class LeaseRegistry:
    """
    Tracks which functions are currently being swept in this process.

    Leases are not shared across processes; running sweeps against the same
    function from different machines is still the caller's responsibility.
    """

    def __init__(self):
        self._held: Set[str] = set()

    def is_held(self, function_arn: str) -> bool:
        return function_arn in self._held

    @asynccontextmanager
    async def lease(self, function_arn: str):
        """Hold ``function_arn`` for the duration of the block."""
        if function_arn in self._held:
            raise SweepInProgressError(f"A sweep is already running for {function_arn}")

        self._held.add(function_arn)
        logger.debug(f"Acquired lease on {function_arn}")
        try:
            yield
        finally:
            self._held.discard(function_arn)
            logger.debug(f"Released lease on {function_arn}")


default_lease_registry = LeaseRegistry()
