"""Gateway request models for Cloudgate.

Each operation kind has its own request variant. A request carries the
account context (profile and region) it must run against, so a request
built before the user changed context can never leak into a new one.
"""

from pydantic import BaseModel, ConfigDict, Field

from cloudgate.models.pipelines import ApprovalAction


class GatewayRequest(BaseModel):
    """Base class of every request handed to the dispatcher.

    Attributes:
        profile: AWS profile to use.
        region: AWS region to use.
    """

    model_config = ConfigDict(frozen=True)

    profile: str = Field(..., description="AWS profile name")
    region: str = Field(..., description="AWS region name")


class FetchApprovalsRequest(GatewayRequest):
    """Load every pending manual approval in the account and region."""


class SubmitApprovalRequest(GatewayRequest):
    """Approve or reject one pending approval.

    Attributes:
        action: The approval being decided, including its token.
        approved: True to approve, False to reject.
        comment: Reviewer summary sent with the decision.
    """

    action: ApprovalAction = Field(..., description="Approval being decided")
    approved: bool = Field(..., description="Decision")
    comment: str = Field(..., min_length=1, description="Reviewer summary")


class FetchPipelineStatusRequest(GatewayRequest):
    """Load a status snapshot of every pipeline in the account and region."""


class StartExecutionRequest(GatewayRequest):
    """Start a pipeline execution.

    Attributes:
        pipeline_name: Pipeline to start.
        revision_id: Commit ID override for the source action. Empty means
            the latest revision.
    """

    pipeline_name: str = Field(..., min_length=1, description="Pipeline name")
    revision_id: str = Field(default="", description="Commit ID override")
