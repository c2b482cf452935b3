"""Tests for the AWS Lambda client wrapper."""

import io
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, WaiterError
from moto import mock_aws

import boto3
from aws_lambda_sweetspot.exceptions import (
    AWSPermissionError,
    FunctionNotFoundError,
    RemoteError,
)
from aws_lambda_sweetspot.providers.aws import LambdaClient, create_lambda_client
from tests.utils.mock_aws import TEST_FUNCTION_ARN, create_moto_function, generate_log_result


def client_error(code: str, operation: str = "UpdateFunctionConfiguration") -> ClientError:
    return ClientError(error_response={"Error": {"Code": code, "Message": code}}, operation_name=operation)


@pytest.fixture
def moto_lambda():
    with mock_aws():
        yield


class TestLambdaClientWithMoto:
    """Configuration calls against moto's Lambda backend."""

    @pytest.mark.asyncio
    async def test_get_configuration(self, moto_lambda):
        arn = create_moto_function(memory_size=256)
        client = LambdaClient(region="us-east-1")

        config = await client.get_configuration(arn)

        assert config.memory_size == 256
        assert config.architecture == "x86_64"

    @pytest.mark.asyncio
    async def test_get_configuration_arm64(self, moto_lambda):
        arn = create_moto_function(memory_size=512, architectures=["arm64"])
        client = LambdaClient(region="us-east-1")

        config = await client.get_configuration(arn)

        assert config.architecture == "arm64"

    @pytest.mark.asyncio
    async def test_set_memory(self, moto_lambda):
        arn = create_moto_function(memory_size=256)
        client = LambdaClient(region="us-east-1")

        await client.set_memory(arn, 1024)

        response = boto3.client("lambda", region_name="us-east-1").get_function_configuration(
            FunctionName=arn
        )
        assert response["MemorySize"] == 1024

    @pytest.mark.asyncio
    async def test_missing_function(self, moto_lambda):
        create_moto_function()
        client = LambdaClient(region="us-east-1")

        with pytest.raises(RemoteError):
            await client.get_configuration(
                "arn:aws:lambda:us-east-1:123456789012:function:does-not-exist"
            )

    def test_create_lambda_client_uses_arn_region(self, moto_lambda):
        client = create_lambda_client("arn:aws:lambda:eu-west-1:123456789012:function:f")
        assert client.region == "eu-west-1"
        assert client.lambda_client.meta.region_name == "eu-west-1"


class TestLambdaClientCalls:
    """Request shapes and error translation with a mocked boto3 client."""

    @pytest.fixture
    def boto_client(self):
        return MagicMock()

    @pytest.fixture
    def client(self, boto_client):
        return LambdaClient(region="us-east-1", lambda_client=boto_client)

    @pytest.mark.asyncio
    async def test_invoke_request(self, client, boto_client):
        log_result = generate_log_result(12.5)
        boto_client.invoke.return_value = {
            "StatusCode": 200,
            "LogResult": log_result,
            "Payload": io.BytesIO(b'{"ok": true}'),
        }

        outcome = await client.invoke(TEST_FUNCTION_ARN, '{"key": "value"}')

        boto_client.invoke.assert_called_once_with(
            FunctionName=TEST_FUNCTION_ARN,
            InvocationType="RequestResponse",
            LogType="Tail",
            Payload=b'{"key": "value"}',
        )
        assert outcome.log_result == log_result
        assert outcome.payload == b'{"ok": true}'
        assert outcome.status_code == 200
        assert outcome.function_error is None

    @pytest.mark.asyncio
    async def test_invoke_without_payload(self, client, boto_client):
        boto_client.invoke.return_value = {"StatusCode": 200, "LogResult": "abc"}

        await client.invoke(TEST_FUNCTION_ARN)

        assert "Payload" not in boto_client.invoke.call_args.kwargs

    @pytest.mark.asyncio
    async def test_function_error_still_returns_log(self, client, boto_client):
        boto_client.invoke.return_value = {
            "StatusCode": 200,
            "FunctionError": "Unhandled",
            "LogResult": "abc",
            "Payload": io.BytesIO(b'{"errorMessage": "boom"}'),
        }

        outcome = await client.invoke(TEST_FUNCTION_ARN, "{}")

        assert outcome.function_error == "Unhandled"
        assert outcome.log_result == "abc"

    @pytest.mark.asyncio
    async def test_missing_log_result(self, client, boto_client):
        boto_client.invoke.return_value = {"StatusCode": 200, "LogResult": None}

        outcome = await client.invoke(TEST_FUNCTION_ARN)

        assert outcome.log_result == ""

    @pytest.mark.asyncio
    async def test_set_memory_request(self, client, boto_client):
        await client.set_memory(TEST_FUNCTION_ARN, 2048)

        boto_client.update_function_configuration.assert_called_once_with(
            FunctionName=TEST_FUNCTION_ARN, MemorySize=2048
        )

    @pytest.mark.asyncio
    async def test_missing_architectures(self, client, boto_client):
        boto_client.get_function_configuration.return_value = {"MemorySize": 128}

        config = await client.get_configuration(TEST_FUNCTION_ARN)

        assert config.architectures == ["x86_64"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("AccessDeniedException", AWSPermissionError),
            ("ResourceNotFoundException", FunctionNotFoundError),
            ("TooManyRequestsException", RemoteError),
        ],
    )
    async def test_error_translation(self, client, boto_client, code, expected):
        boto_client.update_function_configuration.side_effect = client_error(code)

        with pytest.raises(expected):
            await client.set_memory(TEST_FUNCTION_ARN, 512)

    @pytest.mark.asyncio
    async def test_invoke_error_translated(self, client, boto_client):
        boto_client.invoke.side_effect = client_error("ServiceException", "Invoke")

        with pytest.raises(RemoteError, match="invoke function"):
            await client.invoke(TEST_FUNCTION_ARN)

    @pytest.mark.asyncio
    async def test_wait_until_updated(self, client, boto_client):
        waiter = boto_client.get_waiter.return_value

        await client.wait_until_updated(TEST_FUNCTION_ARN, delay=1, max_attempts=5)

        boto_client.get_waiter.assert_called_once_with("function_updated_v2")
        waiter.wait.assert_called_once_with(
            FunctionName=TEST_FUNCTION_ARN, WaiterConfig={"Delay": 1, "MaxAttempts": 5}
        )

    @pytest.mark.asyncio
    async def test_wait_until_updated_failure(self, client, boto_client):
        boto_client.get_waiter.return_value.wait.side_effect = WaiterError(
            name="FunctionUpdatedV2", reason="Max attempts exceeded", last_response={}
        )

        with pytest.raises(RemoteError, match="did not complete"):
            await client.wait_until_updated(TEST_FUNCTION_ARN)

    def test_profile_passed_to_session(self):
        with patch("aws_lambda_sweetspot.providers.aws.boto3.Session") as session_cls:
            client = LambdaClient(region="eu-west-1", profile="dev")

        session_cls.assert_called_once_with(profile_name="dev")
        session_cls.return_value.client.assert_called_once_with("lambda", region_name="eu-west-1")
        assert client.lambda_client is session_cls.return_value.client.return_value
