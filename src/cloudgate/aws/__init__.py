"""AWS integration modules for Cloudgate.

This package provides:
- Boto3 client wrappers with per-profile sessions
- Custom exception hierarchy for AWS errors
- Async/await support for all AWS operations
- The CodePipeline gateway used by the catalog operations
- Discovery of named AWS profiles

Example:
    >>> from cloudgate.aws import CodePipelineGateway
    >>>
    >>> gateway = CodePipelineGateway(profile="prod", region="us-east-1")
    >>> approvals = await gateway.list_pending_approvals()
    >>> await gateway.start_pipeline_execution("payments", revision_id="9f2c1e7")
"""

from cloudgate.aws.client import AWSClientWrapper, create_aws_client
from cloudgate.aws.codepipeline import CodePipelineGateway, PipelineGateway
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
from cloudgate.aws.profiles import list_available_profiles

__all__ = [
    "AWSClientWrapper",
    "AWSError",
    "CodePipelineError",
    "CodePipelineGateway",
    "ConfigurationError",
    "InvalidApprovalTokenError",
    "PermissionError",
    "PipelineGateway",
    "ResourceNotFoundError",
    "ThrottlingError",
    "TimeoutError",
    "ValidationError",
    "create_aws_client",
    "list_available_profiles",
]
