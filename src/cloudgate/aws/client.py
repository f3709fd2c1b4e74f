"""AWS client wrapper with error handling.

This module provides a wrapper around boto3 clients that runs the
synchronous boto3 calls off the event loop and converts botocore failures
into the exception hierarchy of :mod:`cloudgate.aws.exceptions`.
"""

import asyncio
import logging
from typing import Any, Final

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from cloudgate.aws.exceptions import (
    AWSError,
    CodePipelineError,
    ConfigurationError,
    InvalidApprovalTokenError,
    PermissionError,
    ResourceNotFoundError,
    ThrottlingError,
    TimeoutError,
    ValidationError,
)

logger: Final = logging.getLogger(__name__)

_STALE_TOKEN_CODES: Final[tuple[str, ...]] = (
    "InvalidApprovalTokenException",
    "ApprovalAlreadyCompletedException",
)


class AWSClientWrapper:
    """Wrapper for boto3 clients with error handling.

    Each wrapper owns its own boto3 session, so the profile and region it
    was created with are never shared with other wrappers.

    Example:
        >>> wrapper = AWSClientWrapper("codepipeline", region="eu-west-1", profile="prod")
        >>> result = await wrapper.call("list_pipelines")
    """

    def __init__(
        self,
        service_name: str,
        region: str | None = None,
        profile: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize AWS client wrapper.

        Args:
            service_name: AWS service name (e.g., 'codepipeline').
            region: AWS region name. If None, uses default from environment/config.
                Defaults to None.
            profile: Named profile from the shared AWS config files. If None,
                uses the default credential chain. Defaults to None.
            **kwargs: Additional arguments passed to ``Session.client()``.

        Raises:
            ConfigurationError: If the profile does not exist.
        """
        self.service_name = service_name
        self.region = region
        self.profile = profile
        try:
            session = boto3.session.Session(profile_name=profile, region_name=region)
            self._client: BaseClient = session.client(  # type: ignore[call-overload]
                service_name, **kwargs
            )
        except ProfileNotFound as e:
            raise ConfigurationError(
                f"AWS profile '{profile}' not found",
                service=service_name,
                error_code="ProfileNotFound",
            ) from e
        logger.info(
            f"Initialized AWS {service_name} client for profile {profile or 'default'} "
            f"in region {region or 'default'}"
        )

    async def call(self, operation: str, **kwargs: Any) -> Any:
        """Execute AWS operation with error handling.

        Args:
            operation: boto3 operation name (e.g., 'get_pipeline_state').
            **kwargs: Operation-specific parameters.

        Returns:
            The response from the AWS operation.

        Raises:
            ValidationError: For invalid parameters or input validation errors.
            ResourceNotFoundError: When requested resource doesn't exist.
            PermissionError: For IAM permission/authorization errors.
            ThrottlingError: When AWS rate limits are exceeded.
            TimeoutError: When the operation times out.
            InvalidApprovalTokenError: When an approval token is stale.
            CodePipelineError: For other CodePipeline errors.
            AWSError: For errors of other services.

        Example:
            >>> wrapper = AWSClientWrapper("codepipeline")
            >>> result = await wrapper.call("get_pipeline", name="payments")
            >>> stages = result["pipeline"]["stages"]
        """
        operation_name = f"{self.service_name}:{operation}"

        logger.debug(f"Calling {operation_name} with params: {list(kwargs.keys())}")

        try:
            # Execute boto3 call in thread pool (boto3 is synchronous)
            loop = asyncio.get_running_loop()
            client_method = getattr(self._client, operation)
            result = await loop.run_in_executor(None, lambda: client_method(**kwargs))

            logger.debug(f"Successfully completed {operation_name}")
            return result

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))

            logger.warning(f"{operation_name} failed with {error_code}: {error_message}")

            raise self._convert_client_error(e, operation, error_code, error_message) from e

        except BotoCoreError as e:
            # Network, credential and timeout failures below the API layer
            logger.error(f"{operation_name} failed with BotoCoreError: {e}")

            if "timed out" in str(e).lower() or "timeout" in str(e).lower():
                raise TimeoutError(
                    f"Operation {operation} timed out",
                    service=self.service_name,
                    operation=operation,
                ) from e

            error_class = self._get_service_error_class()
            raise error_class(
                f"AWS operation failed: {e}",
                service=self.service_name,
                operation=operation,
            ) from e

    def _convert_client_error(
        self, error: ClientError, operation: str, error_code: str, error_message: str
    ) -> AWSError:
        """Convert boto3 ClientError to appropriate custom exception.

        Args:
            error: The ClientError raised by boto3.
            operation: The AWS operation name.
            error_code: AWS error code from the response.
            error_message: AWS error message from the response.

        Returns:
            Custom exception instance matching the error type.
        """
        details = {
            "error_code": error_code,
            "http_status": error.response.get("ResponseMetadata", {}).get("HTTPStatusCode"),
            "request_id": error.response.get("ResponseMetadata", {}).get("RequestId"),
        }

        error_class: type[AWSError]
        if error_code in _STALE_TOKEN_CODES:
            error_class = InvalidApprovalTokenError
        elif error_code in ("Throttling", "ThrottlingException", "TooManyRequestsException"):
            error_class = ThrottlingError
        elif error_code in ("AccessDenied", "AccessDeniedException", "UnauthorizedOperation"):
            error_class = PermissionError
        # Must come before the generic Invalid* check
        elif error_code.endswith("NotFound") or error_code.endswith("NotFoundException"):
            error_class = ResourceNotFoundError
        elif error_code in ("ValidationError", "ValidationException") or error_code.startswith(
            "Invalid"
        ):
            error_class = ValidationError
        else:
            error_class = self._get_service_error_class()

        return error_class(
            error_message,
            service=self.service_name,
            operation=operation,
            error_code=error_code,
            details=details,
        )

    def _get_service_error_class(self) -> type[AWSError]:
        """Get the service-specific error class.

        Returns:
            CodePipelineError for CodePipeline, AWSError otherwise.
        """
        if self.service_name == "codepipeline":
            return CodePipelineError
        return AWSError


def create_aws_client(
    service_name: str, region: str | None = None, profile: str | None = None, **kwargs: Any
) -> AWSClientWrapper:
    """Factory function to create AWS client wrapper.

    Args:
        service_name: AWS service name (e.g., 'codepipeline').
        region: AWS region name. Defaults to None (uses default region).
        profile: Named AWS profile. Defaults to None (default credential chain).
        **kwargs: Additional arguments for ``Session.client()``.

    Returns:
        Configured AWSClientWrapper instance.

    Example:
        >>> client = create_aws_client("codepipeline", region="us-east-1", profile="dev")
        >>> result = await client.call("list_pipelines")
    """
    return AWSClientWrapper(service_name, region, profile, **kwargs)
