"""
Orchestrator module for AWS Lambda Sweet Spot.
Drives the reconfigure -> settle -> invoke -> measure cycle for every memory size.
"""

import asyncio
import time
import logging
from datetime import datetime
from typing import List, Optional, Iterable, Union

from .exceptions import (
    BaselineCaptureError,
    ConfigurationError,
    MetricExtractionError,
    ReconfigurationError,
    InvocationError,
    RestorationError,
    RemoteError,
)
from .locking import LeaseRegistry, default_lease_registry
from .metrics import extract_duration_ms
from .models import SweepFailure, SweepResult, SweepSession, SweepState
from .pricing import PricingModel, PricingTable
from .providers.aws import create_lambda_client
from .settling import Settler, FixedDelaySettler, build_settler
from .utils import encode_payload

logger = logging.getLogger(__name__)


class SweepOrchestrator:
    """Sweeps one function across memory sizes and puts it back afterwards."""

    def __init__(
        self,
        function_arn: str,
        client,
        pricing: Optional[PricingModel] = None,
        settler: Optional[Settler] = None,
        memory_sizes: Optional[Iterable[int]] = None,
        payload: Union[str, dict, None] = None,
        lease_registry: Optional[LeaseRegistry] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            function_arn: Target function
            client: Remote execution client (see ``providers.aws.LambdaClient``)
            pricing: Pricing model, built-in prices by default
            settler: Settle strategy, an 8 second fixed delay by default
            memory_sizes: Sizes to sweep; every size in the price table if omitted
            payload: Optional JSON payload, validated here before anything runs
            lease_registry: Registry guarding against concurrent sweeps
        """
        self.function_arn = function_arn
        self.client = client
        self.pricing = pricing or PricingModel()
        self.settler = settler or FixedDelaySettler()
        self.memory_sizes = list(memory_sizes) if memory_sizes is not None else None
        self.payload = encode_payload(payload)
        self.lease_registry = lease_registry or default_lease_registry
        self.state = SweepState.IDLE
        self.session = SweepSession(function_arn=function_arn)
        self._stop_requested = False

    def request_stop(self):
        """Stop after the current memory size; the function is still restored."""
        logger.info("Stop requested, finishing current configuration")
        self._stop_requested = True

    def _transition(self, state: SweepState):
        logger.debug(f"Sweep state: {self.state.value} -> {state.value}")
        self.state = state

    def _candidates(self, table: PricingTable) -> List[int]:
        if self.memory_sizes is None:
            return sorted(table)

        candidates = sorted(set(self.memory_sizes))
        unknown = [size for size in candidates if size not in table]
        if unknown:
            raise ConfigurationError(
                f"No price known for memory sizes {unknown}. "
                f"Available sizes: {sorted(table)}"
            )
        return candidates

    async def run(self) -> SweepSession:
        """
        Run the complete sweep.

        Returns:
            SweepSession holding the results gathered, even if empty
        """
        # Each run starts from a clean session
        self.session = SweepSession(function_arn=self.function_arn)
        self._stop_requested = False
        self.state = SweepState.IDLE

        start_time = time.time()
        self.session.started_at = datetime.now()

        async with self.lease_registry.lease(self.function_arn):
            logger.info(f"Starting sweep for function: {self.function_arn}")

            self._transition(SweepState.CAPTURING_BASELINE)
            try:
                baseline = await self.client.get_configuration(self.function_arn)
            except RemoteError as e:
                logger.error(f"Error getting function metadata: {e}")
                self._transition(SweepState.DONE)
                raise BaselineCaptureError(f"Could not read original configuration: {e}") from e

            original_memory = baseline.memory_size
            architecture = baseline.architecture
            table = self.pricing.lookup(architecture)
            self.session.original_memory = original_memory
            self.session.architecture = architecture
            logger.info(f"Original memory configuration: {original_memory}MB")
            logger.info(f"Detected architecture: {architecture}")

            try:
                candidates = self._candidates(table)
            except ConfigurationError:
                self._transition(SweepState.DONE)
                raise

            self._transition(SweepState.SWEEPING)
            try:
                for memory_size in candidates:
                    if self._stop_requested:
                        self.session.interrupted = True
                        break
                    await self._sweep_one(memory_size, table)
            except asyncio.CancelledError:
                self.session.interrupted = True
                raise
            finally:
                self._transition(SweepState.RESTORING)
                await self._restore(original_memory)

                self.session.completed_at = datetime.now()
                self.session.duration_seconds = time.time() - start_time
                self._transition(SweepState.DONE)

        logger.info(
            f"Sweep completed in {self.session.duration_seconds:.2f} seconds: "
            f"{len(self.session.results)}/{len(candidates)} configurations measured"
        )
        return self.session

    async def _sweep_one(self, memory_size: int, table: PricingTable):
        """Measure one memory size, recording a result or a failure."""
        logger.info(f"Testing configuration: {memory_size}MB")

        try:
            await self._reconfigure(memory_size)
        except ReconfigurationError as e:
            logger.warning(f"Error updating function memory to {memory_size}MB: {e}")
            self._record_failure(memory_size, "reconfigure", e)
            return

        try:
            outcome = await self._invoke(memory_size)
        except InvocationError as e:
            logger.warning(f"Error invoking function at {memory_size}MB: {e}")
            self._record_failure(memory_size, "invoke", e)
            return

        try:
            duration_ms = extract_duration_ms(outcome.log_result)
        except MetricExtractionError as e:
            logger.warning(f"Error parsing duration from logs at {memory_size}MB: {e}")
            self._record_failure(memory_size, "extract", e)
            self.session.results.append(
                SweepResult.degraded(memory_size, outcome.log_result, str(e))
            )
            return

        result = SweepResult.measured(memory_size, duration_ms, table[memory_size], outcome.log_result)
        logger.info(f"Execution duration: {duration_ms:.2f} ms, cost: ${result.cost:.10f}")
        self.session.results.append(result)

    async def _reconfigure(self, memory_size: int):
        try:
            await self.client.set_memory(self.function_arn, memory_size)
            await self.settler.settle(self.client, self.function_arn)
        except RemoteError as e:
            raise ReconfigurationError(str(e)) from e

    async def _invoke(self, memory_size: int):
        try:
            return await self.client.invoke(self.function_arn, self.payload)
        except RemoteError as e:
            raise InvocationError(str(e)) from e

    async def _restore(self, original_memory: int):
        """Put the original memory size back. Called exactly once per sweep."""
        logger.info(f"Reverting function configuration to original memory size: {original_memory}MB")
        try:
            await self.client.set_memory(self.function_arn, original_memory)
        except RemoteError as e:
            error = RestorationError(str(e))
            logger.error(f"Error reverting function configuration: {error}")
            self._record_failure(original_memory, "restore", error)
            self.session.restored = False
        else:
            self.session.restored = True

    def _record_failure(self, memory_size: int, stage: str, error: Exception):
        self.session.failures.append(
            SweepFailure(memory_size=memory_size, stage=stage, message=str(error))
        )


# Convenience functions
async def run_sweep(
    function_arn: str,
    candidate_sizes: Optional[Iterable[int]],
    payload: Union[str, dict, None],
    client,
    pricing: Optional[PricingModel] = None,
    settler: Optional[Settler] = None,
) -> List[SweepResult]:
    """Run a sweep and return the ordered results."""
    orchestrator = SweepOrchestrator(
        function_arn,
        client,
        pricing=pricing,
        settler=settler,
        memory_sizes=candidate_sizes,
        payload=payload,
    )
    session = await orchestrator.run()
    return session.results


async def run_sweep_session(config, client=None) -> SweepSession:
    """Run a sweep described by a ``SweepConfig``."""
    pricing = PricingModel.from_file(config.pricing_file) if config.pricing_file else PricingModel()
    client = client or create_lambda_client(config.function_arn, profile=config.profile)
    orchestrator = SweepOrchestrator(
        config.function_arn,
        client,
        pricing=pricing,
        settler=build_settler(config.settle_strategy, config.settle_delay),
        memory_sizes=config.memory_sizes,
        payload=config.payload,
    )
    return await orchestrator.run()
