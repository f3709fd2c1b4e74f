"""CodePipeline catalog operations.

Three operations are offered for CodePipeline: reviewing the status of every
pipeline, starting a pipeline execution and deciding manual approvals.
Operations that change pipeline state record an audit entry.
"""

from typing import TYPE_CHECKING

from cloudgate.aws.exceptions import AWSError
from cloudgate.catalog.base import BaseOperation, OperationKind
from cloudgate.constants import (
    OPERATION_PIPELINE_APPROVALS,
    OPERATION_PIPELINE_STATUS,
    OPERATION_START_PIPELINE,
)
from cloudgate.models.messages import (
    ApprovalsLoaded,
    ApprovalSubmitted,
    ExecutionStarted,
    PipelineStatusLoaded,
    ResultMessage,
)
from cloudgate.models.requests import (
    FetchApprovalsRequest,
    FetchPipelineStatusRequest,
    GatewayRequest,
    StartExecutionRequest,
    SubmitApprovalRequest,
)
from cloudgate.utils.audit_logger import AuditLogger, get_audit_logger

if TYPE_CHECKING:
    from cloudgate.aws.codepipeline import PipelineGateway


class PipelineStatusOperation(BaseOperation):
    """Show the stages of every pipeline with their latest status."""

    @property
    def name(self) -> str:
        return OPERATION_PIPELINE_STATUS

    @property
    def description(self) -> str:
        return "View Pipeline Status"

    @property
    def kind(self) -> OperationKind:
        return OperationKind.PIPELINE_STATUS

    async def execute(self, gateway: "PipelineGateway", request: GatewayRequest) -> ResultMessage:
        match request:
            case FetchPipelineStatusRequest():
                pipelines = await gateway.list_pipeline_statuses()
                return PipelineStatusLoaded(pipelines=tuple(pipelines))
            case _:
                raise self.unsupported(request)


class StartPipelineOperation(BaseOperation):
    """Start a pipeline at its latest source revision or at a chosen commit.

    The pipeline list is loaded with the same status snapshot as
    :class:`PipelineStatusOperation`.
    """

    def __init__(self, audit_logger: AuditLogger | None = None) -> None:
        """Initialize the operation.

        Args:
            audit_logger: Audit logger for started executions. If None, uses
                get_audit_logger() on first use.
        """
        super().__init__()
        self._audit_logger = audit_logger

    @property
    def name(self) -> str:
        return OPERATION_START_PIPELINE

    @property
    def description(self) -> str:
        return "Start Pipeline Execution"

    @property
    def kind(self) -> OperationKind:
        return OperationKind.START_PIPELINE

    async def execute(self, gateway: "PipelineGateway", request: GatewayRequest) -> ResultMessage:
        match request:
            case FetchPipelineStatusRequest():
                pipelines = await gateway.list_pipeline_statuses()
                return PipelineStatusLoaded(pipelines=tuple(pipelines))
            case StartExecutionRequest(pipeline_name=pipeline_name, revision_id=revision_id):
                audit = self._audit_logger or get_audit_logger()
                try:
                    execution_id = await gateway.start_pipeline_execution(
                        pipeline_name, revision_id
                    )
                except AWSError as e:
                    audit.log_pipeline_start(
                        pipeline_name,
                        revision_id,
                        request.profile,
                        request.region,
                        success=False,
                        error=str(e),
                    )
                    raise
                audit.log_pipeline_start(
                    pipeline_name,
                    revision_id,
                    request.profile,
                    request.region,
                    success=True,
                    execution_id=execution_id,
                )
                return ExecutionStarted(pipeline_name=pipeline_name, execution_id=execution_id)
            case _:
                raise self.unsupported(request)


class PipelineApprovalsOperation(BaseOperation):
    """List pending manual approvals and approve or reject one of them."""

    def __init__(
        self, audit_logger: AuditLogger | None = None, visible_to_users: bool = True
    ) -> None:
        """Initialize the operation.

        Args:
            audit_logger: Audit logger for decisions. If None, uses
                get_audit_logger() on first use.
            visible_to_users: Whether the operation is listed in menus.
                Defaults to True.
        """
        super().__init__()
        self._audit_logger = audit_logger
        self._visible = visible_to_users

    @property
    def name(self) -> str:
        return OPERATION_PIPELINE_APPROVALS

    @property
    def description(self) -> str:
        return "Manage Pipeline Approvals"

    @property
    def kind(self) -> OperationKind:
        return OperationKind.PIPELINE_APPROVALS

    @property
    def visible_to_users(self) -> bool:
        return self._visible

    async def execute(self, gateway: "PipelineGateway", request: GatewayRequest) -> ResultMessage:
        match request:
            case FetchApprovalsRequest():
                approvals = await gateway.list_pending_approvals()
                return ApprovalsLoaded(approvals=tuple(approvals))
            case SubmitApprovalRequest(action=action, approved=approved, comment=comment):
                audit = self._audit_logger or get_audit_logger()
                try:
                    await gateway.submit_approval_decision(action, approved, comment)
                except AWSError as e:
                    audit.log_approval_decision(
                        action.pipeline_name,
                        action.stage_name,
                        action.action_name,
                        approved,
                        comment,
                        request.profile,
                        request.region,
                        success=False,
                        error=str(e),
                    )
                    raise
                audit.log_approval_decision(
                    action.pipeline_name,
                    action.stage_name,
                    action.action_name,
                    approved,
                    comment,
                    request.profile,
                    request.region,
                    success=True,
                )
                self.logger.info(f"{'Approved' if approved else 'Rejected'} {action.label}")
                return ApprovalSubmitted(action=action, approved=approved)
            case _:
                raise self.unsupported(request)
