"""
Pytest configuration and fixtures for AWS Lambda Sweet Spot tests.
"""

import pytest

from aws_lambda_sweetspot import SweepConfig
from aws_lambda_sweetspot.locking import LeaseRegistry
from aws_lambda_sweetspot.models import SweepFailure, SweepResult, SweepSession
from aws_lambda_sweetspot.settling import FixedDelaySettler

from tests.utils.mock_aws import FakeLambdaClient, TEST_FUNCTION_ARN


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Keep boto3 away from real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def function_arn():
    return TEST_FUNCTION_ARN


@pytest.fixture
def fake_client():
    """Fake client answering 12.5 / 9.0 / 7.2 ms at 128 / 512 / 1024 MB."""
    return FakeLambdaClient(memory_size=256, durations={128: 12.5, 512: 9.0, 1024: 7.2})


@pytest.fixture
def no_wait():
    return FixedDelaySettler(0)


@pytest.fixture
def lease_registry():
    return LeaseRegistry()


@pytest.fixture
def sample_config():
    """Provide a sample configuration for testing."""
    return SweepConfig(
        function_arn=TEST_FUNCTION_ARN,
        payload='{"test": "data"}',
        memory_sizes=[128, 512, 1024],
        settle_delay=0,
    )


@pytest.fixture
def sample_results():
    """Results matching the default x86_64 prices."""
    return [
        SweepResult.measured(128, 12.5, 0.0000000021),
        SweepResult.measured(512, 9.0, 0.0000000083),
        SweepResult.measured(1024, 7.2, 0.0000000167),
    ]


@pytest.fixture
def sample_session(sample_results):
    return SweepSession(
        function_arn=TEST_FUNCTION_ARN,
        original_memory=256,
        architecture="x86_64",
        results=list(sample_results),
        restored=True,
        duration_seconds=42.0,
    )


@pytest.fixture
def degraded_session():
    """A session in which no duration could be read."""
    return SweepSession(
        function_arn=TEST_FUNCTION_ARN,
        original_memory=256,
        architecture="x86_64",
        results=[SweepResult.degraded(128, "", "No log result available")],
        failures=[SweepFailure(memory_size=128, stage="extract", message="No log result available")],
        restored=True,
    )
