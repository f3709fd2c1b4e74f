"""CodePipeline models for Cloudgate.

This module defines the immutable views of pipeline structure and run-state
used by the approval resolver and the pipeline status screens. They are
parsed from boto3 responses in :mod:`cloudgate.aws.codepipeline`.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ApprovalAction(BaseModel):
    """A manual approval action currently awaiting a decision.

    Attributes:
        pipeline_name: Pipeline owning the action.
        stage_name: Stage containing the action.
        action_name: Name of the approval action.
        token: Opaque approval token issued for the current execution.
    """

    model_config = ConfigDict(frozen=True)

    pipeline_name: str = Field(..., min_length=1, description="Pipeline name")
    stage_name: str = Field(..., min_length=1, description="Stage name")
    action_name: str = Field(..., min_length=1, description="Approval action name")
    token: str = Field(..., repr=False, description="Opaque approval token")

    @property
    def label(self) -> str:
        """Return the ``pipeline / stage / action`` label shown in lists."""
        return f"{self.pipeline_name} / {self.stage_name} / {self.action_name}"


class StageStatus(BaseModel):
    """Display status of one pipeline stage.

    Attributes:
        name: Stage name.
        status: Latest execution status, or ``Unknown``.
        last_updated: Most recent action status change, or ``N/A``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Stage name")
    status: str = Field(..., description="Latest stage execution status")
    last_updated: str = Field(..., description="Formatted time of the latest change")


class PipelineSnapshot(BaseModel):
    """Point-in-time view of a pipeline and its stages.

    Attributes:
        name: Pipeline name.
        stages: Stage statuses in run-state order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Pipeline name")
    stages: tuple[StageStatus, ...] = Field(default=(), description="Stage statuses")


class ActionDeclaration(BaseModel):
    """An action as declared in the pipeline structure."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Action name")
    category: str = Field(..., description="Action type category, e.g. Approval or Build")


class StageDeclaration(BaseModel):
    """A stage as declared in the pipeline structure."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Stage name")
    actions: tuple[ActionDeclaration, ...] = Field(default=(), description="Declared actions")


class ActionState(BaseModel):
    """Run-state of one action from the latest execution.

    Attributes:
        action_name: Action name.
        status: Latest execution status, None if the action never ran.
        token: Approval token, present only on pending approval actions.
        last_status_change: Time of the latest status change, if known.
    """

    model_config = ConfigDict(frozen=True)

    action_name: str = Field(..., description="Action name")
    status: str | None = Field(default=None, description="Latest execution status")
    token: str | None = Field(default=None, repr=False, description="Approval token")
    last_status_change: datetime | None = Field(
        default=None, description="Time of the latest status change"
    )


class StageState(BaseModel):
    """Run-state of one stage from the latest execution."""

    model_config = ConfigDict(frozen=True)

    stage_name: str = Field(..., description="Stage name")
    status: str | None = Field(default=None, description="Latest stage execution status")
    action_states: tuple[ActionState, ...] = Field(default=(), description="Action run-states")
