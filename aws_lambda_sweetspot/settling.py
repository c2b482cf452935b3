"""
Strategies for waiting until a memory change is live.

``update_function_configuration`` returns before the new memory size serves
invocations, so the orchestrator settles after every change.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY = 8.0


class Settler(ABC):
    """Waits for a configuration change to propagate."""

    @abstractmethod
    async def settle(self, client, function_arn: str) -> None:
        """Return once ``function_arn`` can be invoked with its new configuration."""


class FixedDelaySettler(Settler):
    """Sleeps for a fixed interval."""

    def __init__(self, seconds: float = DEFAULT_SETTLE_DELAY):
        if seconds < 0:
            raise ConfigurationError("Settle delay cannot be negative")
        self.seconds = seconds

    async def settle(self, client, function_arn: str) -> None:
        if self.seconds:
            logger.info(f"Waiting {self.seconds:g}s for configuration update...")
        await asyncio.sleep(self.seconds)

    def __repr__(self):
        return f"FixedDelaySettler(seconds={self.seconds})"


class PollingSettler(Settler):
    """Polls the function until its last update is reported successful."""

    def __init__(self, poll_interval: int = 2, max_attempts: int = 60):
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts

    async def settle(self, client, function_arn: str) -> None:
        logger.info("Polling until the configuration update is active...")
        await client.wait_until_updated(
            function_arn, delay=self.poll_interval, max_attempts=self.max_attempts
        )

    def __repr__(self):
        return f"PollingSettler(poll_interval={self.poll_interval}, max_attempts={self.max_attempts})"


def build_settler(strategy: str = "fixed", delay: float = DEFAULT_SETTLE_DELAY) -> Settler:
    """
    Create a settler by name.

    Args:
        strategy: 'fixed' or 'poll'
        delay: Seconds to sleep for 'fixed', poll interval for 'poll'
    """
    if strategy == "fixed":
        return FixedDelaySettler(delay)
    if strategy == "poll":
        return PollingSettler(poll_interval=max(1, int(delay)))
    raise ConfigurationError(f"Unknown settle strategy: {strategy}. Must be 'fixed' or 'poll'")
