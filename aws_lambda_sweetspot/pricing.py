"""
Lambda price tables.

A table maps a memory size in MB to the price of one millisecond of execution
in USD. The built-in tables are the published eu-west-1 prices; a different
source can be loaded with ``PricingModel.from_file``.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Any

from .exceptions import ConfigurationError
from .models import ARM_ARCHITECTURE, DEFAULT_ARCHITECTURE
from .utils import load_config_file

logger = logging.getLogger(__name__)

PricingTable = Mapping[int, float]

X86_64_PRICES: Dict[int, float] = {
    128: 0.0000000021,
    512: 0.0000000083,
    1024: 0.0000000167,
    1536: 0.0000000250,
    2048: 0.0000000333,
    3072: 0.0000000500,
    4096: 0.0000000667,
    5120: 0.0000000833,
    6144: 0.0000001000,
    7168: 0.0000001167,
    8192: 0.0000001333,
    9216: 0.0000001500,
    10240: 0.0000001667,
}

ARM64_PRICES: Dict[int, float] = {
    128: 0.0000000017,
    512: 0.0000000067,
    1024: 0.0000000133,
    1536: 0.0000000200,
    2048: 0.0000000267,
    3072: 0.0000000400,
    4096: 0.0000000533,
    5120: 0.0000000667,
    6144: 0.0000000800,
    7168: 0.0000000933,
    8192: 0.0000001067,
    9216: 0.0000001200,
    10240: 0.0000001333,
}

DEFAULT_PRICING = {
    DEFAULT_ARCHITECTURE: X86_64_PRICES,
    ARM_ARCHITECTURE: ARM64_PRICES,
}


def _freeze(table: Mapping[Any, Any], architecture: str) -> PricingTable:
    frozen = {}
    for memory, price in table.items():
        try:
            memory = int(memory)
            price = float(price)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid {architecture} price entry: {memory!r} -> {price!r}"
            )
        if memory <= 0:
            raise ConfigurationError(f"Invalid memory size in {architecture} table: {memory}")
        if price <= 0:
            raise ConfigurationError(
                f"Price for {memory}MB on {architecture} must be positive, got {price}"
            )
        frozen[memory] = price
    if not frozen:
        raise ConfigurationError(f"Pricing table for {architecture} is empty")
    return MappingProxyType(dict(sorted(frozen.items())))


class PricingModel:
    """Looks up the price table for an architecture label."""

    def __init__(self, tables: Optional[Mapping[str, Mapping[Any, Any]]] = None):
        """
        Initialize the pricing model.

        Args:
            tables: Architecture label -> {memory MB: price per ms}. Must
                contain an ``x86_64`` table. Defaults to the built-in prices.
        """
        tables = DEFAULT_PRICING if tables is None else tables
        if DEFAULT_ARCHITECTURE not in tables:
            raise ConfigurationError(
                f"Pricing data must contain a '{DEFAULT_ARCHITECTURE}' table"
            )
        self._tables = {arch: _freeze(table, arch) for arch, table in tables.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[Any, Any]]) -> "PricingModel":
        """Create a pricing model from a mapping (keys may be strings, as in JSON)."""
        return cls(data)

    @classmethod
    def from_file(cls, filepath: str) -> "PricingModel":
        """Load price tables from a JSON or YAML file."""
        try:
            data = load_config_file(filepath)
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Could not load pricing file: {e}")
        logger.info(f"Loaded pricing data from {filepath}")
        return cls.from_dict(data)

    @property
    def architectures(self) -> List[str]:
        return sorted(self._tables)

    def lookup(self, architecture: str) -> PricingTable:
        """
        Return the price table for an architecture.

        Labels without a table of their own fall back to the x86_64 table.
        """
        table = self._tables.get(architecture)
        if table is None:
            logger.debug(
                f"No pricing table for '{architecture}', using {DEFAULT_ARCHITECTURE}"
            )
            return self._tables[DEFAULT_ARCHITECTURE]
        return table

    def memory_sizes(self, architecture: str) -> List[int]:
        """Memory sizes that can be swept for an architecture, ascending."""
        return sorted(self.lookup(architecture))


def get_pricing_table(architecture: str) -> PricingTable:
    """Return the built-in price table for an architecture."""
    return PricingModel().lookup(architecture)
