"""
Configuration management for AWS Lambda Sweet Spot.
"""

import json
from typing import List, Dict, Any, Optional, Union
from dataclasses import dataclass, asdict, fields
from pathlib import Path
import logging

import yaml

from .exceptions import ConfigurationError
from .settling import DEFAULT_SETTLE_DELAY
from .utils import parse_region, encode_payload, load_config_file

logger = logging.getLogger(__name__)

SETTLE_STRATEGIES = ["fixed", "poll"]
OUTPUT_FORMATS = ["json", "csv", "html"]


@dataclass
class SweepConfig:
    """Configuration for a memory sweep."""

    function_arn: str

    payload: Union[str, dict, None] = None
    memory_sizes: Optional[List[int]] = None
    settle_delay: float = DEFAULT_SETTLE_DELAY
    settle_strategy: str = "fixed"
    pricing_file: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    output_dir: str = "./sweep-results"
    output_format: str = "json"
    visualize: bool = True

    def __post_init__(self):
        """Validate and process configuration after initialization."""
        # Region is also what rejects malformed ARNs
        derived_region = parse_region(self.function_arn)
        if not self.region:
            self.region = derived_region

        # Malformed payloads are rejected before any sweep starts
        encode_payload(self.payload)

        if self.memory_sizes is not None:
            if not self.memory_sizes:
                raise ConfigurationError("memory_sizes cannot be empty")
            for size in self.memory_sizes:
                if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
                    raise ConfigurationError(
                        f"Invalid memory size: {size}. Must be a positive integer"
                    )

        if self.settle_delay < 0:
            raise ConfigurationError("settle_delay cannot be negative")

        if self.settle_strategy not in SETTLE_STRATEGIES:
            raise ConfigurationError(
                f"Invalid settle strategy: {self.settle_strategy}. Must be one of {SETTLE_STRATEGIES}"
            )

        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format: {self.output_format}. Must be one of {OUTPUT_FORMATS}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SweepConfig":
        """Create configuration from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        if "function_arn" not in data:
            raise ConfigurationError("function_arn is required")
        return cls(**data)

    @classmethod
    def from_file(cls, filepath: str) -> "SweepConfig":
        """Load configuration from a JSON or YAML file."""
        try:
            data = load_config_file(filepath)
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Could not load configuration: {e}")
        return cls.from_dict(data)

    def save(self, filepath: str):
        """Save configuration to file, as YAML when the extension asks for it."""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w") as f:
            if str(filepath).endswith((".yaml", ".yml")):
                yaml.safe_dump(self.to_dict(), f, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Configuration saved to {filepath}")
