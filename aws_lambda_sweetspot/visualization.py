"""
Visualization entry point for AWS Lambda Sweet Spot.
This module imports and exposes the main visualization functionality.
"""

from .visualization_module import (
    VisualizationEngine,
    create_performance_chart,
    create_cost_chart,
    create_combined_chart,
)

__all__ = [
    "VisualizationEngine",
    "create_performance_chart",
    "create_cost_chart",
    "create_combined_chart",
]
