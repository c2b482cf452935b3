"""Remote execution providers."""

from .aws import LambdaClient, create_lambda_client

__all__ = ["LambdaClient", "create_lambda_client"]
