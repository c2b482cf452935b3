"""
Interactive prompts used when the CLI is missing input.
"""

import json
from typing import Optional

import click

from .utils import validate_arn


def _validate_function_arn(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise click.BadParameter("Lambda ARN cannot be empty")
    if not validate_arn(value):
        raise click.BadParameter(
            "Expected an ARN like arn:aws:lambda:<region>:<account>:function:<name>"
        )
    return value


def prompt_for_function_arn() -> str:
    """Ask for the Lambda function ARN until a usable one is entered."""
    return click.prompt("Enter the Lambda function ARN", value_proc=_validate_function_arn)


def prompt_yes_no(label: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return click.confirm(label, default=default)


def prompt_for_payload() -> Optional[str]:
    """
    Ask for a JSON test event.

    Invalid JSON can be re-entered; declining proceeds without a payload.
    """
    while True:
        text = click.prompt("Please paste your JSON-formatted test event data")
        try:
            json.loads(text)
            return text
        except json.JSONDecodeError:
            if not prompt_yes_no("Invalid JSON. Do you want to re-enter the data?"):
                click.echo("Proceeding without custom test event data.")
                return None
