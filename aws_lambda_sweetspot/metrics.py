"""Duration extraction from Lambda tail logs."""

import base64
import binascii
import re
from typing import Union

from .exceptions import (
    EmptyInputError,
    LogDecodeError,
    PatternNotFoundError,
    NumericParseError,
)

# REPORT RequestId: ...	Duration: 12.34 ms	Billed Duration: 13 ms	...
DURATION_LABEL = re.compile(r"Duration:")
DURATION_ENTRY = re.compile(r"Duration:\s+(\S+)\s+ms")
DURATION_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")


def decode_log_result(log_result: Union[str, bytes, None]) -> str:
    """
    Decode the base64 ``LogResult`` returned by a ``LogType=Tail`` invocation.

    Raises:
        EmptyInputError: If there is nothing to decode
        LogDecodeError: If the input is not base64 encoded UTF-8 text
    """
    if not log_result:
        raise EmptyInputError("No log result available")

    try:
        raw = base64.b64decode(log_result, validate=True)
    except (binascii.Error, ValueError) as e:
        raise LogDecodeError(f"Failed to decode log result: {e}")

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LogDecodeError(f"Log result is not UTF-8 text: {e}")


def extract_duration_ms(log_result: Union[str, bytes, None]) -> float:
    """
    Read the execution duration out of an encoded tail log.

    Only the first ``Duration:`` entry is read, which on a REPORT line is the
    measured duration rather than the billed one. A malformed first entry is
    an error; later entries are never used in its place.

    Args:
        log_result: Base64 encoded log text

    Returns:
        float: Duration in milliseconds, unrounded
    """
    text = decode_log_result(log_result)

    label = DURATION_LABEL.search(text)
    if not label:
        raise PatternNotFoundError("Duration not found in logs")

    entry = DURATION_ENTRY.match(text, label.start())
    if not entry:
        raise PatternNotFoundError("Duration entry is not followed by a value in ms")

    value = entry.group(1)
    if not DURATION_NUMBER.fullmatch(value):
        raise NumericParseError(f"Could not parse duration '{value}'")
    return float(value)
