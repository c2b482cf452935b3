"""
Reports entry point for AWS Lambda Sweet Spot.
This module imports and exposes the main report functionality.
"""

from .report_service import (
    ReportGenerator,
    generate_summary_report,
    export_to_json,
    export_to_csv,
    export_to_html
)

__all__ = [
    'ReportGenerator',
    'generate_summary_report',
    'export_to_json',
    'export_to_csv',
    'export_to_html'
]
