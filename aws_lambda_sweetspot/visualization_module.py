"""
Visualization module for AWS Lambda Sweet Spot.
Static PNG charts of duration and cost against memory size.
"""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from typing import List, Optional, Sequence
from pathlib import Path
import logging

from .exceptions import VisualizationError
from .models import SweepResult, SweetSpots

logger = logging.getLogger(__name__)

# Set style
plt.style.use('seaborn-v0_8-darkgrid')
sns.set_palette("husl")


class VisualizationEngine:
    """Engine for creating sweep charts."""

    def __init__(self, results: Sequence[SweepResult], sweet_spots: Optional[SweetSpots] = None):
        """
        Initialize visualization engine.

        Args:
            results: Ordered sweep results
            sweet_spots: Optional sweet spots to highlight
        """
        if not results:
            raise VisualizationError("No results to visualize")

        self.results = list(results)
        self.sweet_spots = sweet_spots
        self.memory_sizes = [r.memory_size for r in self.results]
        self.durations = [r.duration_ms for r in self.results]
        self.costs = [r.cost for r in self.results]

    def _highlight(self, bars, best: Optional[SweepResult]):
        if best is None:
            return
        for bar, result in zip(bars, self.results):
            if result == best:
                bar.set_edgecolor('black')
                bar.set_linewidth(2)

    def plot_performance(self, output_path: str):
        """
        Bar chart of duration per memory size.

        Args:
            output_path: Path to save the chart
        """
        try:
            fig, ax = plt.subplots(figsize=(12, 6))
            x_pos = np.arange(len(self.memory_sizes))
            bars = ax.bar(x_pos, self.durations, alpha=0.8)

            # Green = faster
            if max(self.durations) > min(self.durations):
                norm = plt.Normalize(min(self.durations), max(self.durations))
                for bar, color in zip(bars, plt.cm.RdYlGn_r(norm(self.durations))):
                    bar.set_color(color)

            self._highlight(bars, self.sweet_spots.performance if self.sweet_spots else None)

            for bar, duration in zip(bars, self.durations):
                ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                        f'{duration:.1f}ms', ha='center', va='bottom', fontsize=10)

            ax.set_xlabel('Memory (MB)', fontsize=12)
            ax.set_ylabel('Duration (ms)', fontsize=12)
            ax.set_title('Lambda Performance (Duration vs Memory)', fontsize=14, fontweight='bold')
            ax.set_xticks(x_pos)
            ax.set_xticklabels([f'{size}MB' for size in self.memory_sizes])
            ax.grid(True, axis='y', alpha=0.3)

            self._save_figure(fig, output_path)

        except VisualizationError:
            raise
        except Exception as e:
            logger.error(f"Error creating performance chart: {e}")
            raise VisualizationError(f"Failed to create performance chart: {e}")

    def plot_cost(self, output_path: str):
        """
        Bar chart of cost per invocation per memory size.

        Args:
            output_path: Path to save the chart
        """
        try:
            fig, ax = plt.subplots(figsize=(12, 6))
            x_pos = np.arange(len(self.memory_sizes))
            bars = ax.bar(x_pos, self.costs, alpha=0.8, color='orange')

            self._highlight(bars, self.sweet_spots.cost if self.sweet_spots else None)

            for bar, cost in zip(bars, self.costs):
                ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                        f'${cost:.2e}', ha='center', va='bottom', fontsize=9)

            ax.set_xlabel('Memory (MB)', fontsize=12)
            ax.set_ylabel('Cost per Invocation ($)', fontsize=12)
            ax.set_title('Lambda Cost (Cost vs Memory)', fontsize=14, fontweight='bold')
            ax.set_xticks(x_pos)
            ax.set_xticklabels([f'{size}MB' for size in self.memory_sizes])
            ax.grid(True, axis='y', alpha=0.3)

            self._save_figure(fig, output_path)

        except VisualizationError:
            raise
        except Exception as e:
            logger.error(f"Error creating cost chart: {e}")
            raise VisualizationError(f"Failed to create cost chart: {e}")

    def plot_combined(self, output_path: str):
        """
        Duration and cost on twin y axes.

        Args:
            output_path: Path to save the chart
        """
        try:
            fig, ax1 = plt.subplots(figsize=(12, 6))
            ax2 = ax1.twinx()

            ax1.plot(self.memory_sizes, self.durations, 'o-', color='tab:blue', label='Duration')
            ax2.plot(self.memory_sizes, self.costs, 's--', color='tab:orange', label='Cost')

            ax1.set_xlabel('Memory (MB)', fontsize=12)
            ax1.set_ylabel('Duration (ms)', fontsize=12, color='tab:blue')
            ax2.set_ylabel('Cost ($)', fontsize=12, color='tab:orange')
            ax1.set_title('Balanced Sweet Spot (Cost & Performance)', fontsize=14, fontweight='bold')

            lines = ax1.get_lines() + ax2.get_lines()
            ax1.legend(lines, [line.get_label() for line in lines], loc='upper right')

            self._save_figure(fig, output_path)

        except VisualizationError:
            raise
        except Exception as e:
            logger.error(f"Error creating combined chart: {e}")
            raise VisualizationError(f"Failed to create combined chart: {e}")

    def plot_all(self, output_dir: str) -> List[str]:
        """Write every chart into ``output_dir`` and return the paths."""
        paths = [
            str(Path(output_dir) / 'performance.png'),
            str(Path(output_dir) / 'cost.png'),
            str(Path(output_dir) / 'combined.png'),
        ]
        self.plot_performance(paths[0])
        self.plot_cost(paths[1])
        self.plot_combined(paths[2])
        return paths

    def _save_figure(self, fig: plt.Figure, output_path: str):
        """Save figure to file."""
        try:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)

            fig.savefig(output_path, dpi=150, bbox_inches='tight')
            plt.close(fig)

            logger.info(f"Chart saved to {output_path}")

        except Exception as e:
            plt.close(fig)
            raise VisualizationError(f"Failed to save figure: {e}")


# Convenience functions for standalone usage
def create_performance_chart(results: Sequence[SweepResult], output_path: str):
    """Create duration chart."""
    VisualizationEngine(results).plot_performance(output_path)


def create_cost_chart(results: Sequence[SweepResult], output_path: str):
    """Create cost chart."""
    VisualizationEngine(results).plot_cost(output_path)


def create_combined_chart(results: Sequence[SweepResult], output_path: str):
    """Create combined duration and cost chart."""
    VisualizationEngine(results).plot_combined(output_path)
