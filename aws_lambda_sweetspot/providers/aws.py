"""AWS Lambda client used by the sweep."""

import asyncio
import logging
from functools import partial
from typing import Optional

import boto3
from botocore.exceptions import ClientError, BotoCoreError, WaiterError

from ..exceptions import RemoteError, AWSPermissionError, FunctionNotFoundError
from ..models import FunctionConfiguration, InvocationOutcome
from ..utils import parse_region

logger = logging.getLogger(__name__)


def _translate_client_error(action: str, error: Exception) -> RemoteError:
    """Map a botocore error onto the package's remote error types."""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        if code == "AccessDeniedException":
            return AWSPermissionError(f"Permission denied to {action}: {error}")
        if code == "ResourceNotFoundException":
            return FunctionNotFoundError(f"Function not found while trying to {action}: {error}")
    return RemoteError(f"Failed to {action}: {error}")


class LambdaClient:
    """Thin async wrapper around the boto3 Lambda client."""

    def __init__(self, region: str, profile: Optional[str] = None, lambda_client=None):
        """
        Initialize the client.

        Args:
            region: AWS region the function is deployed in
            profile: Optional named AWS profile
            lambda_client: Pre-built boto3 Lambda client, mostly for tests
        """
        self.region = region
        self.profile = profile
        self.lambda_client = lambda_client or self._create_lambda_client()

    def _create_lambda_client(self):
        """Create AWS Lambda client."""
        try:
            session_config = {}
            if self.profile:
                session_config["profile_name"] = self.profile

            session = boto3.Session(**session_config)
            return session.client("lambda", region_name=self.region)

        except BotoCoreError as e:
            logger.error(f"Failed to create Lambda client: {e}")
            raise RemoteError(f"Failed to create Lambda client: {e}")

    async def _call(self, action: str, func, **kwargs):
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, partial(func, **kwargs))
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"Lambda call failed ({action}): {e}")
            raise _translate_client_error(action, e)

    async def get_configuration(self, function_arn: str) -> FunctionConfiguration:
        """Get the current memory size and architectures of the function."""
        response = await self._call(
            "get function configuration",
            self.lambda_client.get_function_configuration,
            FunctionName=function_arn,
        )
        return FunctionConfiguration(
            memory_size=int(response["MemorySize"]),
            architectures=list(response.get("Architectures") or []),
        )

    async def set_memory(self, function_arn: str, memory_size: int) -> None:
        """
        Request a new memory size.

        The update propagates asynchronously; callers must settle before
        relying on the new size.
        """
        logger.debug(f"Updating {function_arn} memory to {memory_size}MB")
        await self._call(
            f"update function memory to {memory_size}MB",
            self.lambda_client.update_function_configuration,
            FunctionName=function_arn,
            MemorySize=memory_size,
        )

    async def invoke(self, function_arn: str, payload: Optional[str] = None) -> InvocationOutcome:
        """Invoke the function synchronously and capture its tail log."""
        params = {
            "FunctionName": function_arn,
            "InvocationType": "RequestResponse",
            "LogType": "Tail",
        }
        if payload is not None:
            params["Payload"] = payload.encode("utf-8")

        response = await self._call("invoke function", self.lambda_client.invoke, **params)

        body = response.get("Payload")
        if body is not None and hasattr(body, "read"):
            body = body.read()

        if response.get("FunctionError"):
            logger.warning(f"Function error: {response['FunctionError']}")

        return InvocationOutcome(
            log_result=response.get("LogResult", "") or "",
            payload=body or b"",
            status_code=response.get("StatusCode", 0),
            function_error=response.get("FunctionError"),
        )

    async def wait_until_updated(self, function_arn: str, delay: int = 2, max_attempts: int = 60):
        """Block until the last configuration update reports success."""
        waiter = self.lambda_client.get_waiter("function_updated_v2")
        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(
                    waiter.wait,
                    FunctionName=function_arn,
                    WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts},
                ),
            )
        except (WaiterError, ClientError, BotoCoreError) as e:
            raise RemoteError(f"Function update did not complete: {e}")


def create_lambda_client(function_arn: str, profile: Optional[str] = None) -> LambdaClient:
    """Build a client bound to the region in the function ARN."""
    region = parse_region(function_arn)
    logger.info(f"Using region: {region}")
    return LambdaClient(region=region, profile=profile)
