"""
AWS Lambda Sweet Spot

Sweeps a Lambda function across memory sizes and reports the fastest
and the cheapest configuration.
"""

__version__ = "1.0.0"
__author__ = "AWS Lambda Sweet Spot Contributors"

# Import main components
from .config_module import SweepConfig
from .orchestrator_module import SweepOrchestrator
from .report_service import ReportGenerator
from .pricing import PricingModel, get_pricing_table
from .metrics import extract_duration_ms
from .analyzers.sweet_spot import select_sweet_spots
from .settling import FixedDelaySettler, PollingSettler
from .locking import LeaseRegistry
from .models import (
    FunctionConfiguration,
    SweepResult,
    SweepFailure,
    SweepSession,
    SweetSpots,
    SweepState,
)
from .exceptions import (
    SweepException,
    ConfigurationError,
    InvalidPayloadError,
    RemoteError,
    AWSPermissionError,
    FunctionNotFoundError,
    BaselineCaptureError,
    ReconfigurationError,
    InvocationError,
    RestorationError,
    MetricExtractionError,
    EmptyResultSetError,
    SweepInProgressError,
    ReportGenerationError,
    VisualizationError,
)

# Convenience imports
from .orchestrator import run_sweep, run_sweep_session
from .reports import (
    generate_summary_report,
    export_to_json,
    export_to_csv,
    export_to_html,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core classes
    "SweepConfig",
    "SweepOrchestrator",
    "ReportGenerator",
    "PricingModel",
    "FixedDelaySettler",
    "PollingSettler",
    "LeaseRegistry",
    # Models
    "FunctionConfiguration",
    "SweepResult",
    "SweepFailure",
    "SweepSession",
    "SweetSpots",
    "SweepState",
    # Exceptions
    "SweepException",
    "ConfigurationError",
    "InvalidPayloadError",
    "RemoteError",
    "AWSPermissionError",
    "FunctionNotFoundError",
    "BaselineCaptureError",
    "ReconfigurationError",
    "InvocationError",
    "RestorationError",
    "MetricExtractionError",
    "EmptyResultSetError",
    "SweepInProgressError",
    "ReportGenerationError",
    "VisualizationError",
    # Functions
    "get_pricing_table",
    "extract_duration_ms",
    "select_sweet_spots",
    "run_sweep",
    "run_sweep_session",
    "generate_summary_report",
    "export_to_json",
    "export_to_csv",
    "export_to_html",
]
