"""
Report generation service for AWS Lambda Sweet Spot.
Turns a sweep session into tables, JSON, CSV and HTML reports.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import logging

import pandas as pd
from jinja2 import Environment
from tabulate import tabulate

from .analyzers.sweet_spot import select_sweet_spots
from .exceptions import EmptyResultSetError, ReportGenerationError
from .models import SweepSession, SweetSpots
from .utils import format_cost, format_timestamp, save_json_file

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["memory_size", "duration_ms", "cost"]

HTML_TEMPLATE = Environment(autoescape=True).from_string("""<!DOCTYPE html>
<html>
<head>
    <title>Lambda Sweet Spot Report</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; }
        h1, h2 { color: #333; }
        .summary { background: #f0f0f0; padding: 15px; border-radius: 5px; margin: 20px 0; }
        .metric { margin: 10px 0; }
        .metric-label { font-weight: bold; }
        table { border-collapse: collapse; width: 100%; margin: 20px 0; }
        th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
        th { background-color: #4CAF50; color: white; }
        tr:nth-child(even) { background-color: #f2f2f2; }
        .optimal { background-color: #d4edda; }
        .degraded { color: #999; }
    </style>
</head>
<body>
    <h1>AWS Lambda Memory Sweet Spot Report</h1>
    <p>Function: <code>{{ summary.function_arn }}</code></p>

    <div class="summary">
        <h2>Summary</h2>
        <div class="metric">
            <span class="metric-label">Performance Sweet Spot:</span>
            {{ summary.performance_memory }}MB with duration {{ "%.2f"|format(summary.performance_duration_ms) }} ms
        </div>
        <div class="metric">
            <span class="metric-label">Cost Effective Sweet Spot:</span>
            {{ summary.cost_memory }}MB with cost ${{ "%.10f"|format(summary.cost_per_invocation) }}
        </div>
        {% if summary.performance_degraded or summary.cost_degraded %}
        <div class="metric degraded">
            A sweet spot comes from a result whose duration could not be read from the logs.
        </div>
        {% endif %}
        <div class="metric">
            <span class="metric-label">Original Memory:</span> {{ summary.original_memory }}MB
            ({{ "restored" if summary.restored else "NOT restored" }})
        </div>
    </div>

    <h2>Results</h2>
    <table>
        <tr>
            <th>Memory (MB)</th>
            <th>Duration (ms)</th>
            <th>Cost ($)</th>
            <th>Note</th>
        </tr>
        {% for result in results %}
        <tr class="{{ 'optimal' if result.memory_size in (summary.performance_memory, summary.cost_memory) else ('degraded' if result.extraction_error else '') }}">
            <td>{{ result.memory_size }}</td>
            <td>{{ "%.2f"|format(result.duration_ms) }}</td>
            <td>{{ "%.10f"|format(result.cost) }}</td>
            <td>{{ result.extraction_error or '' }}</td>
        </tr>
        {% endfor %}
    </table>

    {% if failures %}
    <h2>Skipped Configurations</h2>
    <ul>
        {% for failure in failures %}
        <li>{{ failure.memory_size }}MB ({{ failure.stage }}): {{ failure.message }}</li>
        {% endfor %}
    </ul>
    {% endif %}

    <hr>
    <p><small>Generated on {{ timestamp }}</small></p>
</body>
</html>
""")


class ReportGenerator:
    """Generates reports from a sweep session."""

    def __init__(self, session: SweepSession, sweet_spots: Optional[SweetSpots] = None):
        """
        Initialize report generator.

        Args:
            session: Completed sweep session
            sweet_spots: Pre-computed sweet spots, selected from the session if omitted
        """
        self.session = session
        self._sweet_spots = sweet_spots
        self.timestamp = format_timestamp()

    @property
    def sweet_spots(self) -> SweetSpots:
        if self._sweet_spots is None:
            self._sweet_spots = select_sweet_spots(self.session.results)
        return self._sweet_spots

    def get_summary(self) -> Dict[str, Any]:
        """
        Generate a summary report.

        Raises:
            EmptyResultSetError: If the session has no result at all
        """
        try:
            spots = self.sweet_spots
            return {
                'function_arn': self.session.function_arn,
                'original_memory': self.session.original_memory,
                'architecture': self.session.architecture,
                'restored': self.session.restored,
                'performance_memory': spots.performance.memory_size,
                'performance_duration_ms': spots.performance.duration_ms,
                'cost_memory': spots.cost.memory_size,
                'cost_per_invocation': spots.cost.cost,
                'performance_degraded': not spots.performance.usable,
                'cost_degraded': not spots.cost.usable,
                'configurations_measured': len(self.session.usable_results),
                'configurations_failed': len(
                    [f for f in self.session.failures if f.stage != 'restore']
                ),
                'test_duration': self.session.duration_seconds,
                'timestamp': self.timestamp
            }

        except EmptyResultSetError:
            raise
        except Exception as e:
            logger.error(f"Error generating summary: {e}")
            raise ReportGenerationError(f"Failed to generate summary: {e}")

    def to_dataframe(self) -> pd.DataFrame:
        """Results as a DataFrame ordered by memory size."""
        rows = [r.to_dict() for r in self.session.results]
        return pd.DataFrame(rows, columns=RESULT_COLUMNS + ['extraction_error'])

    def summary_table(self, tablefmt: str = 'simple') -> str:
        """Plain text table of every result with the sweet spots marked."""
        spots = self._sweet_spots
        if spots is None and self.session.results:
            spots = self.sweet_spots

        rows = []
        for result in self.session.results:
            marks = []
            if spots and result == spots.performance:
                marks.append('fastest')
            if spots and result == spots.cost:
                marks.append('cheapest')
            if not result.usable:
                marks.append('no duration')
            rows.append([
                result.memory_size,
                f"{result.duration_ms:.2f}",
                format_cost(result.cost),
                ', '.join(marks),
            ])

        return tabulate(
            rows,
            headers=['Memory (MB)', 'Duration (ms)', 'Cost', ''],
            tablefmt=tablefmt,
            disable_numparse=True,
        )

    def save_json(self, filepath: str, include_logs: bool = False):
        """Save session and summary as JSON."""
        report = self.session.to_dict(include_logs=include_logs)
        if self.session.results:
            report['summary'] = self.get_summary()
        save_json_file(report, filepath)
        logger.info(f"JSON report saved to {filepath}")

    def save_csv(self, filepath: str):
        """Save the result triples as CSV."""
        try:
            Path(filepath).parent.mkdir(parents=True, exist_ok=True)
            self.to_dataframe().to_csv(filepath, index=False)
            logger.info(f"CSV report saved to {filepath}")
        except OSError as e:
            logger.error(f"Error saving CSV report: {e}")
            raise ReportGenerationError(f"Failed to save CSV report: {e}")

    def save_html(self, filepath: str):
        """Save report as HTML."""
        summary = self.get_summary()
        try:
            html_content = HTML_TEMPLATE.render(
                summary=summary,
                results=self.session.results,
                failures=self.session.failures,
                timestamp=self.timestamp,
            )

            Path(filepath).parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, 'w') as f:
                f.write(html_content)

            logger.info(f"HTML report saved to {filepath}")

        except OSError as e:
            logger.error(f"Error saving HTML report: {e}")
            raise ReportGenerationError(f"Failed to save HTML report: {e}")


# Convenience functions for standalone usage
def generate_summary_report(session: SweepSession) -> Dict[str, Any]:
    """Generate a summary report from a session."""
    return ReportGenerator(session).get_summary()


def export_to_json(session: SweepSession, filepath: str):
    """Export a session to JSON."""
    ReportGenerator(session).save_json(filepath)


def export_to_csv(session: SweepSession, filepath: str):
    """Export a session to CSV."""
    ReportGenerator(session).save_csv(filepath)


def export_to_html(session: SweepSession, filepath: str):
    """Export a session to HTML."""
    ReportGenerator(session).save_html(filepath)
