"""Data models for Cloudgate.

This package defines the Pydantic models exchanged between the gateway,
the approval resolver, the dispatcher and the navigation state machine.
"""

from cloudgate.models.messages import (
    ApprovalsLoaded,
    ApprovalSubmitted,
    ExecutionStarted,
    KeyEvent,
    OperationFailed,
    PipelineStatusLoaded,
    ResultMessage,
)
from cloudgate.models.pipelines import (
    ActionDeclaration,
    ActionState,
    ApprovalAction,
    PipelineSnapshot,
    StageDeclaration,
    StageState,
    StageStatus,
)
from cloudgate.models.requests import (
    FetchApprovalsRequest,
    FetchPipelineStatusRequest,
    GatewayRequest,
    StartExecutionRequest,
    SubmitApprovalRequest,
)

__all__ = [
    "ActionDeclaration",
    "ActionState",
    "ApprovalAction",
    "ApprovalSubmitted",
    "ApprovalsLoaded",
    "ExecutionStarted",
    "FetchApprovalsRequest",
    "FetchPipelineStatusRequest",
    "GatewayRequest",
    "KeyEvent",
    "OperationFailed",
    "PipelineSnapshot",
    "PipelineStatusLoaded",
    "ResultMessage",
    "StageDeclaration",
    "StageState",
    "StageStatus",
    "StartExecutionRequest",
    "SubmitApprovalRequest",
]
