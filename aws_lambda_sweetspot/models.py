"""Data models for the AWS Lambda sweet spot sweep."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any

DEFAULT_ARCHITECTURE = "x86_64"
ARM_ARCHITECTURE = "arm64"


class SweepState(Enum):
    """Lifecycle of a single sweep."""

    IDLE = "idle"
    CAPTURING_BASELINE = "capturing_baseline"
    SWEEPING = "sweeping"
    RESTORING = "restoring"
    DONE = "done"


@dataclass
class FunctionConfiguration:
    """The part of a Lambda configuration the sweep cares about."""

    memory_size: int
    architectures: List[str] = field(default_factory=lambda: [DEFAULT_ARCHITECTURE])

    def __post_init__(self):
        # Functions created before Graviton support report no architecture at all
        if not self.architectures:
            self.architectures = [DEFAULT_ARCHITECTURE]

    @property
    def architecture(self) -> str:
        """Architecture label used to pick a pricing table."""
        if ARM_ARCHITECTURE in self.architectures:
            return ARM_ARCHITECTURE
        return DEFAULT_ARCHITECTURE


@dataclass
class InvocationOutcome:
    """What a single invocation hands back."""

    log_result: str
    payload: bytes = b""
    status_code: int = 200
    function_error: Optional[str] = None


@dataclass(frozen=True)
class SweepResult:
    """Measurement for one memory size.

    Instances are built through ``measured`` or ``degraded`` so that ``cost``
    always equals ``duration_ms`` times the per-ms price of ``memory_size``.
    """

    memory_size: int
    duration_ms: float
    cost: float
    raw_log: str = ""
    extraction_error: Optional[str] = None

    @classmethod
    def measured(
        cls, memory_size: int, duration_ms: float, price_per_ms: float, raw_log: str = ""
    ) -> "SweepResult":
        return cls(
            memory_size=memory_size,
            duration_ms=duration_ms,
            cost=duration_ms * price_per_ms,
            raw_log=raw_log,
        )

    @classmethod
    def degraded(cls, memory_size: int, raw_log: str, reason: str) -> "SweepResult":
        return cls(
            memory_size=memory_size,
            duration_ms=0.0,
            cost=0.0,
            raw_log=raw_log,
            extraction_error=reason,
        )

    @property
    def usable(self) -> bool:
        """True when the duration was actually read from the log."""
        return self.extraction_error is None

    def to_dict(self, include_log: bool = False) -> Dict[str, Any]:
        data = {
            "memory_size": self.memory_size,
            "duration_ms": self.duration_ms,
            "cost": self.cost,
            "extraction_error": self.extraction_error,
        }
        if include_log:
            data["raw_log"] = self.raw_log
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SweepResult":
        return cls(
            memory_size=int(data["memory_size"]),
            duration_ms=float(data["duration_ms"]),
            cost=float(data["cost"]),
            raw_log=data.get("raw_log", ""),
            extraction_error=data.get("extraction_error"),
        )


@dataclass
class SweepFailure:
    """A recoverable failure recorded while sweeping."""

    memory_size: int
    stage: str  # 'reconfigure', 'invoke', 'extract' or 'restore'
    message: str


@dataclass
class SweetSpots:
    """Best configurations by duration and by cost."""

    performance: SweepResult
    cost: SweepResult


@dataclass
class SweepSession:
    """Everything a sweep produced."""

    function_arn: str
    original_memory: Optional[int] = None
    architecture: Optional[str] = None
    results: List[SweepResult] = field(default_factory=list)
    failures: List[SweepFailure] = field(default_factory=list)
    restored: bool = False
    interrupted: bool = False
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_seconds: float = 0.0

    @property
    def usable_results(self) -> List[SweepResult]:
        return [r for r in self.results if r.usable]

    def to_dict(self, include_logs: bool = False) -> Dict[str, Any]:
        return {
            "function_arn": self.function_arn,
            "original_memory": self.original_memory,
            "architecture": self.architecture,
            "results": [r.to_dict(include_log=include_logs) for r in self.results],
            "failures": [
                {"memory_size": f.memory_size, "stage": f.stage, "message": f.message}
                for f in self.failures
            ],
            "restored": self.restored,
            "interrupted": self.interrupted,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SweepSession":
        started = data.get("started_at")
        completed = data.get("completed_at")
        return cls(
            function_arn=data.get("function_arn", "unknown"),
            original_memory=data.get("original_memory"),
            architecture=data.get("architecture"),
            results=[SweepResult.from_dict(r) for r in data.get("results", [])],
            failures=[SweepFailure(**f) for f in data.get("failures", [])],
            restored=data.get("restored", False),
            interrupted=data.get("interrupted", False),
            started_at=datetime.fromisoformat(started) if started else None,
            completed_at=datetime.fromisoformat(completed) if completed else None,
            duration_seconds=data.get("duration_seconds", 0.0),
        )
