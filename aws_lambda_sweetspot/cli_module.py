"""
Command Line Interface for AWS Lambda Sweet Spot.
"""

import click
import asyncio
import sys
from typing import Optional
import logging
from pathlib import Path

from tabulate import tabulate

from .config_module import SweepConfig, SETTLE_STRATEGIES, OUTPUT_FORMATS
from .exceptions import SweepException, ConfigurationError
from .models import SweepSession
from .orchestrator_module import run_sweep_session
from .pricing import PricingModel
from .prompts import prompt_for_function_arn, prompt_for_payload, prompt_yes_no
from .providers.aws import create_lambda_client
from .report_service import ReportGenerator
from .reporting.interactive_dashboards import create_sweet_spot_dashboard
from .settling import DEFAULT_SETTLE_DELAY
from .utils import load_json_file, parse_memory_sizes, format_cost
from .visualization_module import VisualizationEngine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAMPLE_CONFIG = {
    'function_arn': 'arn:aws:lambda:us-east-1:123456789012:function:my-function',
    'payload': '{}',
    'memory_sizes': [128, 512, 1024, 2048],
    'settle_delay': DEFAULT_SETTLE_DELAY,
    'settle_strategy': 'fixed',
    'output_dir': './sweep-results',
    'output_format': 'json',
    'visualize': True,
}


def _print_summary(report_gen: ReportGenerator) -> bool:
    """Print the sweet spots. Returns False when there was nothing to select from."""
    session = report_gen.session
    click.echo()
    click.echo(report_gen.summary_table())

    if not session.results:
        click.echo("\nNo test results were collected.")
        return False

    summary = report_gen.get_summary()
    click.echo("\n--- Test Summary ---")
    click.echo(
        f"Performance Sweet Spot: {summary['performance_memory']} MB "
        f"with duration {summary['performance_duration_ms']:.2f} ms"
    )
    click.echo(
        f"Cost Effective Sweet Spot: {summary['cost_memory']} MB "
        f"with cost {format_cost(summary['cost_per_invocation'])}"
    )
    if summary['performance_degraded'] or summary['cost_degraded']:
        click.echo(
            "⚠️  A sweet spot comes from a result whose duration could not be read "
            "from the logs. Check the function's log output before acting on it.",
            err=True,
        )
    return True


def _write_visualizations(report_gen: ReportGenerator, output_dir: Path):
    results = report_gen.session.results
    dashboard_path = output_dir / 'visualization.html'
    create_sweet_spot_dashboard(results, str(dashboard_path))
    VisualizationEngine(results, report_gen.sweet_spots).plot_all(str(output_dir))
    click.echo(f"📈 Visualization saved as {dashboard_path}")


@click.group()
@click.version_option(version='1.0.0', prog_name='aws-lambda-sweetspot')
def cli():
    """AWS Lambda Sweet Spot - find the fastest and the cheapest memory size."""
    pass


@cli.command()
@click.option('--output', '-o', default='sweetspot.config.json',
              help='Output configuration file path (.json, .yaml or .yml)')
def init(output: str):
    """Generate a sample configuration file."""
    try:
        config = SweepConfig.from_dict(dict(SAMPLE_CONFIG))
        config.save(output)

        click.echo(f"✅ Configuration file created: {output}")
        click.echo("\nNext steps:")
        click.echo("1. Edit the configuration file with your Lambda function ARN")
        click.echo("2. Adjust the payload and memory sizes if needed")
        click.echo(f"3. Run: aws-lambda-sweetspot tune --config {output}")

    except (SweepException, OSError) as e:
        click.echo(f"❌ Error creating configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file path')
@click.option('--function-arn', '-f', help='Lambda function ARN')
@click.option('--payload', '-p', help='JSON payload for Lambda invocation')
@click.option('--payload-file', type=click.Path(exists=True), help='File containing JSON payload')
@click.option('--memory-sizes', '-m', help='Comma-separated memory sizes (e.g., 128,512,1024)')
@click.option('--settle-delay', type=float, default=DEFAULT_SETTLE_DELAY, show_default=True,
              help='Seconds to wait after each memory change')
@click.option('--settle-strategy', type=click.Choice(SETTLE_STRATEGIES), default='fixed',
              help='Sleep a fixed delay or poll until the update is active')
@click.option('--pricing-file', type=click.Path(exists=True),
              help='JSON or YAML file with per-architecture price tables')
@click.option('--profile', help='AWS profile to use')
@click.option('--output-dir', '-o', default='./sweep-results', help='Output directory for results')
@click.option('--format', 'output_format', type=click.Choice(OUTPUT_FORMATS),
              default='json', help='Output format for results')
@click.option('--visualize/--no-visualize', default=None,
              help='Generate visualization charts')
@click.option('--interactive/--no-interactive', default=None,
              help='Prompt for missing input (default: only when no ARN is given)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def tune(config_file: Optional[str], function_arn: Optional[str], payload: Optional[str],
         payload_file: Optional[str], memory_sizes: Optional[str], settle_delay: float,
         settle_strategy: str, pricing_file: Optional[str], profile: Optional[str],
         output_dir: str, output_format: str, visualize: Optional[bool],
         interactive: Optional[bool], verbose: bool):
    """Sweep a Lambda function across memory sizes."""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if config_file:
            sweep_config = SweepConfig.from_file(config_file)
            if interactive is None:
                interactive = False
        else:
            if interactive is None:
                interactive = not function_arn

            if not function_arn:
                if not interactive:
                    raise ConfigurationError(
                        "Function ARN is required. Use --function-arn or provide a config file."
                    )
                function_arn = prompt_for_function_arn()

            # Handle payload
            if payload_file:
                with open(payload_file, 'r') as f:
                    payload_data = f.read()
            elif payload is not None:
                payload_data = payload
            elif interactive and prompt_yes_no("Do you want to use custom JSON test event data?"):
                payload_data = prompt_for_payload()
            else:
                payload_data = None

            sweep_config = SweepConfig(
                function_arn=function_arn,
                payload=payload_data,
                memory_sizes=parse_memory_sizes(memory_sizes) if memory_sizes else None,
                settle_delay=settle_delay,
                settle_strategy=settle_strategy,
                pricing_file=pricing_file,
                profile=profile,
                output_dir=output_dir,
                output_format=output_format,
                visualize=True if visualize is None else visualize,
            )

        click.echo("🚀 Starting Lambda memory sweep...")
        click.echo(f"   Function: {sweep_config.function_arn}")
        click.echo(f"   Region: {sweep_config.region}")
        if sweep_config.memory_sizes:
            click.echo(f"   Memory sizes: {sweep_config.memory_sizes}")

        client = create_lambda_client(sweep_config.function_arn, profile=sweep_config.profile)
        session = asyncio.run(run_sweep_session(sweep_config, client=client))

        if not session.restored:
            click.echo(
                f"⚠️  Could not restore original memory size "
                f"({session.original_memory}MB). Please check the function configuration.",
                err=True,
            )

        report_gen = ReportGenerator(session)
        output_path = Path(sweep_config.output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        if not _print_summary(report_gen):
            report_gen.save_json(str(output_path / 'sweep-results.json'))
            return

        if sweep_config.output_format == 'json':
            report_path = output_path / 'sweep-results.json'
            report_gen.save_json(str(report_path))
        elif sweep_config.output_format == 'csv':
            report_path = output_path / 'sweep-results.csv'
            report_gen.save_csv(str(report_path))
        else:
            report_path = output_path / 'sweep-report.html'
            report_gen.save_html(str(report_path))
        click.echo(f"\n✅ Results saved to: {report_path}")

        show_charts = sweep_config.visualize if visualize is None else visualize
        if interactive and visualize is None:
            show_charts = prompt_yes_no("Would you like to see a visualization of the results?")
        if show_charts:
            _write_visualizations(report_gen, output_path)

    except SweepException as e:
        click.echo(f"❌ Sweep error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('results-file', type=click.Path(exists=True))
@click.option('--visualize', is_flag=True, help='Regenerate the charts')
@click.option('--output-dir', '-o', default='./sweep-results', help='Output directory for charts')
def report(results_file: str, visualize: bool, output_dir: str):
    """Show the sweet spots of a saved sweep."""
    try:
        session = SweepSession.from_dict(load_json_file(results_file))
        report_gen = ReportGenerator(session)

        if _print_summary(report_gen) and visualize:
            output_path = Path(output_dir)
            output_path.mkdir(parents=True, exist_ok=True)
            _write_visualizations(report_gen, output_path)

    except (SweepException, ValueError, KeyError) as e:
        click.echo(f"❌ Error generating report: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--architecture', '-a', default='x86_64', show_default=True,
              help='Architecture label (unknown labels use x86_64 prices)')
@click.option('--pricing-file', type=click.Path(exists=True),
              help='JSON or YAML file with per-architecture price tables')
def pricing(architecture: str, pricing_file: Optional[str]):
    """Show the price per millisecond for every memory size."""
    try:
        model = PricingModel.from_file(pricing_file) if pricing_file else PricingModel()
        table = model.lookup(architecture)
        rows = [[memory, f"{price:.10f}"] for memory, price in table.items()]
        click.echo(f"\n💲 Prices for {architecture}")
        click.echo(tabulate(rows, headers=['Memory (MB)', 'Price per ms ($)'],
                            disable_numparse=True))

    except SweepException as e:
        click.echo(f"❌ Error loading pricing: {e}", err=True)
        sys.exit(1)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
