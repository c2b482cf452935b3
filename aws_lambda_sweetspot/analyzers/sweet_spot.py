"""Sweet spot selection over sweep results."""

import logging
from typing import Sequence

from ..exceptions import EmptyResultSetError
from ..models import SweepResult, SweetSpots

logger = logging.getLogger(__name__)


def select_sweet_spots(results: Sequence[SweepResult]) -> SweetSpots:
    """
    Find the fastest and the cheapest configuration.

    Every record competes, including degraded ones whose duration and cost
    are zero; callers check ``SweepResult.usable`` on the winners. Ties keep
    the first record, which for an ascending sweep is the smallest memory size.

    Raises:
        EmptyResultSetError: If there are no results at all
    """
    if not results:
        raise EmptyResultSetError("No test results were collected")

    perf_best = results[0]
    cost_best = results[0]
    for result in results:
        if result.duration_ms < perf_best.duration_ms:
            perf_best = result
        if result.cost < cost_best.cost:
            cost_best = result

    if not (perf_best.usable and cost_best.usable):
        logger.warning("A sweet spot was taken from a result without a measured duration")

    logger.info(
        f"Performance sweet spot: {perf_best.memory_size}MB, "
        f"cost sweet spot: {cost_best.memory_size}MB"
    )
    return SweetSpots(performance=perf_best, cost=cost_best)
