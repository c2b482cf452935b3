"""
Orchestrator entry point for AWS Lambda Sweet Spot.
This module imports and exposes the main orchestrator functionality.
"""

from .orchestrator_module import (
    SweepOrchestrator,
    run_sweep,
    run_sweep_session
)

__all__ = [
    'SweepOrchestrator',
    'run_sweep',
    'run_sweep_session'
]
