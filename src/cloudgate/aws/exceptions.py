"""Custom exceptions for AWS operations.

This module defines a hierarchy of exceptions for AWS service operations,
providing clear error categorization and context for error handling. Every
gateway failure surfaces to the user as one of these.
"""

from typing import Any


class AWSError(Exception):
    """Base exception for all AWS-related errors.

    Attributes:
        message: Human-readable error message.
        service: AWS service name (e.g., 'codepipeline').
        operation: AWS operation name (e.g., 'put_approval_result').
        error_code: AWS error code if available (e.g., 'PipelineNotFoundException').
        details: Additional error context as dictionary.
    """

    def __init__(
        self,
        message: str,
        service: str | None = None,
        operation: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AWS error with context.

        Args:
            message: Human-readable error message.
            service: AWS service name. Defaults to None.
            operation: AWS operation name. Defaults to None.
            error_code: AWS error code if available. Defaults to None.
            details: Additional error context. Defaults to None.
        """
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error string with context."""
        parts = [self.message]
        if self.service:
            parts.append(f"Service: {self.service}")
        if self.operation:
            parts.append(f"Operation: {self.operation}")
        if self.error_code:
            parts.append(f"Code: {self.error_code}")
        return " | ".join(parts)


class ConfigurationError(AWSError):
    """Exception raised when the AWS account context is unusable.

    Raised before any remote call when the profile or region is missing,
    or when the named profile does not exist in the shared AWS files.
    """


class CodePipelineError(AWSError):
    """Exception raised for CodePipeline service errors.

    Raised when CodePipeline operations fail and no more specific
    category applies.
    """


class InvalidApprovalTokenError(CodePipelineError):
    """Exception raised when an approval token is stale or already used.

    The approval was decided elsewhere or its stage moved on after the
    approvals list was fetched. Reloading the list yields a fresh token.
    """


class ThrottlingError(AWSError):
    """Exception raised when AWS API rate limits are exceeded."""


class ValidationError(AWSError):
    """Exception raised for input validation errors.

    Raised when the provided parameters fail validation on the AWS side,
    such as a malformed commit ID or an over-long approval summary.
    """


class ResourceNotFoundError(AWSError):
    """Exception raised when an AWS resource is not found.

    Raised when a pipeline, stage or action referenced by a request no
    longer exists or is not visible with the current credentials.
    """


class PermissionError(AWSError):
    """Exception raised for AWS permission/authorization errors.

    Raised when the current IAM credentials lack the necessary
    permissions to perform the requested operation.
    """


class TimeoutError(AWSError):
    """Exception raised when an AWS operation times out."""
