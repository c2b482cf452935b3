"""
Interactive dashboard components for AWS Lambda Sweet Spot.
Renders sweep results as a single HTML page of Plotly charts.
"""

from typing import List, Sequence
from pathlib import Path
import logging
from datetime import datetime

import plotly.graph_objects as go
import plotly.offline as pyo
from plotly.subplots import make_subplots
from jinja2 import Template

from ..exceptions import VisualizationError
from ..models import SweepResult

logger = logging.getLogger(__name__)

DEFAULT_DASHBOARD_PATH = "visualization.html"

PAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html>
<head>
    <title>{{ title }}</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <script src="https://cdn.plot.ly/plotly-2.35.2.min.js"></script>
    <style>
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            margin: 0;
            padding: 20px;
            background-color: #f8f9fa;
        }
        .dashboard-container { max-width: 1400px; margin: 0 auto; }
        .chart {
            background: white;
            border-radius: 8px;
            box-shadow: 0 2px 10px rgba(0,0,0,0.1);
            margin-bottom: 30px;
            padding: 10px;
        }
    </style>
</head>
<body>
    <div class="dashboard-container">
        <h1>{{ title }}</h1>
        <p><small>Generated on {{ generated }}</small></p>
        {% for chart in charts %}
        <div class="chart">{{ chart }}</div>
        {% endfor %}
    </div>
</body>
</html>
""")


class SweetSpotDashboard:
    """Creates the duration, cost and combined charts for a sweep."""

    def __init__(self, results: Sequence[SweepResult]):
        """
        Initialize the dashboard.

        Args:
            results: Ordered sweep results
        """
        if not results:
            raise VisualizationError("No results to visualize")

        self.results = list(results)
        self.memory_labels = [str(r.memory_size) for r in self.results]
        self.durations = [r.duration_ms for r in self.results]
        self.costs = [r.cost for r in self.results]

    def performance_figure(self) -> go.Figure:
        fig = go.Figure(
            go.Scatter(x=self.memory_labels, y=self.durations, mode='lines+markers', name='Duration')
        )
        fig.update_layout(
            title='Lambda Performance (Duration vs Memory)',
            xaxis_title='Memory (MB)',
            yaxis_title='Duration (ms)',
            template='plotly_white',
        )
        return fig

    def cost_figure(self) -> go.Figure:
        fig = go.Figure(
            go.Scatter(x=self.memory_labels, y=self.costs, mode='lines+markers', name='Cost',
                       line=dict(color='orange'))
        )
        fig.update_layout(
            title='Lambda Cost (Cost vs Memory)',
            xaxis_title='Memory (MB)',
            yaxis_title='Cost ($)',
            yaxis_tickformat='.2e',
            template='plotly_white',
        )
        return fig

    def combined_figure(self) -> go.Figure:
        fig = make_subplots(specs=[[{"secondary_y": True}]])
        fig.add_trace(
            go.Scatter(x=self.memory_labels, y=self.durations, mode='lines+markers', name='Duration'),
            secondary_y=False,
        )
        fig.add_trace(
            go.Scatter(x=self.memory_labels, y=self.costs, mode='lines+markers', name='Cost'),
            secondary_y=True,
        )
        fig.update_layout(
            title='Balanced Sweet Spot (Cost & Performance)',
            template='plotly_white',
        )
        fig.update_xaxes(title_text='Memory (MB)')
        fig.update_yaxes(title_text='Duration (ms)', secondary_y=False)
        fig.update_yaxes(title_text='Cost ($)', tickformat='.2e', secondary_y=True)
        return fig

    def figures(self) -> List[go.Figure]:
        return [self.performance_figure(), self.cost_figure(), self.combined_figure()]

    def save(self, output_path: str = DEFAULT_DASHBOARD_PATH,
             title: str = 'Lambda Memory Sweet Spot'):
        """
        Write all charts into one HTML page.

        Args:
            output_path: Path to save the HTML page
            title: Page title
        """
        try:
            config = {'displaylogo': False}
            charts = [
                pyo.plot(fig, output_type='div', include_plotlyjs=False, config=config)
                for fig in self.figures()
            ]
            html = PAGE_TEMPLATE.render(
                title=title,
                generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                charts=charts,
            )

            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w') as f:
                f.write(html)

            logger.info(f"Interactive dashboard saved to {output_path}")

        except OSError as e:
            logger.error(f"Error saving interactive HTML: {e}")
            raise VisualizationError(f"Failed to save interactive HTML: {e}")


def create_sweet_spot_dashboard(results: Sequence[SweepResult],
                                output_path: str = DEFAULT_DASHBOARD_PATH):
    """Create the sweet spot HTML dashboard."""
    SweetSpotDashboard(results).save(output_path)
