"""Exceptions raised by the workflow layer.

These signal problems in how requests are built, routed or matched
against the current pipeline state, as opposed to the AWS failures in
:mod:`cloudgate.aws.exceptions`.
"""

from cloudgate.constants import MSG_NO_PENDING_APPROVAL


class WorkflowError(Exception):
    """Base exception for workflow errors."""


class InternalStateError(WorkflowError):
    """Raised when an action is attempted against an absent selection.

    For example, submitting a decision while no approval is selected or
    starting an execution while no pipeline is selected.
    """


class UnsupportedRequestError(WorkflowError):
    """Raised when an operation receives a request variant it cannot run.

    Attributes:
        operation: Name of the operation that rejected the request.
        request_type: Class name of the rejected request.
    """

    def __init__(self, operation: str, request_type: str) -> None:
        super().__init__(f"Operation '{operation}' cannot handle {request_type}")
        self.operation = operation
        self.request_type = request_type


class ApprovalNotFoundError(WorkflowError):
    """Raised when no pending approval matches a pipeline, stage and action.

    Attributes:
        pipeline_name: Requested pipeline.
        stage_name: Requested stage.
        action_name: Requested action.
    """

    def __init__(self, pipeline_name: str, stage_name: str, action_name: str) -> None:
        super().__init__(
            MSG_NO_PENDING_APPROVAL.format(
                pipeline=pipeline_name, stage=stage_name, action=action_name
            )
        )
        self.pipeline_name = pipeline_name
        self.stage_name = stage_name
        self.action_name = action_name
