"""
Utility functions for the AWS Lambda Sweet Spot package.
"""

import json
import os
import logging
from datetime import datetime
from typing import List, Dict, Any, Optional, Union

import yaml

from .exceptions import ConfigurationError, InvalidPayloadError

logger = logging.getLogger(__name__)

# arn:partition:service:region:...
ARN_REGION_INDEX = 3


def validate_arn(arn: str) -> bool:
    """
    Validate a function identity.

    Only the shape the sweep depends on is checked: at least four
    colon-separated fields with a non-empty region in the fourth.

    Args:
        arn: Function ARN string

    Returns:
        bool: True if the region can be read from the ARN
    """
    if not arn or not isinstance(arn, str):
        return False

    parts = arn.split(':')
    if len(parts) <= ARN_REGION_INDEX:
        return False

    return bool(parts[ARN_REGION_INDEX].strip())


def parse_region(arn: str) -> str:
    """
    Extract the deployment region from a function ARN.

    Args:
        arn: Function ARN string

    Returns:
        str: Region identifier

    Raises:
        ConfigurationError: If the ARN is malformed
    """
    if not validate_arn(arn):
        raise ConfigurationError(f"Invalid Lambda function ARN: {arn}")
    return arn.split(':')[ARN_REGION_INDEX].strip()


def encode_payload(payload: Union[str, bytes, dict, list, None]) -> Optional[str]:
    """
    Encode payload for Lambda invocation.

    Args:
        payload: Payload as JSON string, bytes, dict/list, or None

    Returns:
        str: JSON encoded payload, or None when there is no payload

    Raises:
        InvalidPayloadError: If a string payload is not valid JSON
    """
    if payload is None:
        return None
    if isinstance(payload, (dict, list)):
        return json.dumps(payload)
    if isinstance(payload, bytes):
        try:
            payload = payload.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidPayloadError(f"Payload is not UTF-8 text: {e}")
    if isinstance(payload, str):
        if not payload.strip():
            return None
        try:
            json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidPayloadError(f"Invalid JSON payload: {e}")
        return payload
    raise InvalidPayloadError("Payload must be a JSON string or a dictionary")


def parse_memory_sizes(value: str) -> List[int]:
    """
    Parse a comma separated list of memory sizes, e.g. ``"128,512,1024"``.

    Raises:
        ConfigurationError: If an entry is not a positive integer
    """
    sizes = []
    for item in value.split(','):
        item = item.strip()
        if not item:
            continue
        try:
            size = int(item)
        except ValueError:
            raise ConfigurationError(f"Invalid memory size: {item}")
        if size <= 0:
            raise ConfigurationError(f"Invalid memory size: {size}. Must be positive")
        sizes.append(size)
    return sizes


def format_duration(milliseconds: float) -> str:
    """
    Format duration in milliseconds to human-readable string.

    Args:
        milliseconds: Duration in milliseconds

    Returns:
        str: Formatted duration
    """
    if milliseconds < 1000:
        return f"{milliseconds:.2f}ms"
    elif milliseconds < 60000:
        return f"{milliseconds/1000:.2f}s"
    else:
        minutes = int(milliseconds / 60000)
        seconds = (milliseconds % 60000) / 1000
        return f"{minutes}m {seconds:.2f}s"


def format_cost(cost: float) -> str:
    """Format a per-invocation cost with enough precision to be readable."""
    return f"${cost:.10f}"


def load_json_file(filepath: str) -> Dict[str, Any]:
    """
    Load JSON file safely.

    Args:
        filepath: Path to JSON file

    Returns:
        dict: Parsed JSON content
    """
    try:
        with open(filepath, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {filepath}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {filepath}: {e}")


def load_config_file(filepath: str) -> Dict[str, Any]:
    """
    Load a JSON or YAML file depending on its extension.

    Args:
        filepath: Path to a .json, .yaml or .yml file

    Returns:
        dict: Parsed content
    """
    if str(filepath).endswith(('.yaml', '.yml')):
        try:
            with open(filepath, 'r') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {filepath}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {filepath}: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {filepath}")
        return data
    return load_json_file(filepath)


def save_json_file(data: Dict[str, Any], filepath: str, pretty: bool = True):
    """
    Save data to JSON file.

    Args:
        data: Data to save
        filepath: Output file path
        pretty: Whether to format JSON
    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w') as f:
        if pretty:
            json.dump(data, f, indent=2, default=str)
        else:
            json.dump(data, f, default=str)


def format_timestamp(timestamp: Optional[datetime] = None) -> str:
    """
    Format timestamp to ISO format.

    Args:
        timestamp: Datetime object (default: current time)

    Returns:
        str: ISO formatted timestamp
    """
    if timestamp is None:
        timestamp = datetime.now()
    return timestamp.isoformat()
