"""
Basic example of using AWS Lambda Sweet Spot.

This example sweeps a function across a few memory sizes from Python
instead of the command line and prints both sweet spots.
"""

import asyncio
from aws_lambda_sweetspot import SweepConfig, ReportGenerator, run_sweep_session
from aws_lambda_sweetspot.exceptions import EmptyResultSetError


async def main():
    """Run basic sweep example."""

    # Create configuration
    config = SweepConfig(
        function_arn='arn:aws:lambda:us-east-1:123456789012:function:my-api-handler',
        payload={
            "httpMethod": "GET",
            "path": "/users",
            "headers": {
                "Content-Type": "application/json"
            }
        },
        memory_sizes=[128, 512, 1024, 1536],
        settle_strategy='poll',
        settle_delay=2,
    )

    print(f"Starting memory sweep for: {config.function_arn}")
    print(f"Memory configurations to test: {config.memory_sizes}")

    session = await run_sweep_session(config)

    print("\nSweep completed!")
    print(f"Total time: {session.duration_seconds:.2f} seconds")
    print(f"Original memory restored: {session.restored}")

    report_gen = ReportGenerator(session)
    print(report_gen.summary_table())

    try:
        summary = report_gen.get_summary()
    except EmptyResultSetError:
        print("No test results were collected.")
        return

    print("\n=== SWEET SPOTS ===")
    print(f"Fastest: {summary['performance_memory']}MB "
          f"({summary['performance_duration_ms']:.2f}ms)")
    print(f"Cheapest: {summary['cost_memory']}MB "
          f"(${summary['cost_per_invocation']:.10f} per invocation)")
    if summary['performance_degraded'] or summary['cost_degraded']:
        print("Warning: a sweet spot has no measured duration, check the function logs.")

    # Save reports
    report_gen.save_json('sweep-results.json')
    report_gen.save_html('sweep-report.html')

    print("\nReports saved:")
    print("- sweep-results.json")
    print("- sweep-report.html")


if __name__ == '__main__':
    # Run the example
    asyncio.run(main())
