"""Messages consumed by the interaction loop.

Key presses and dispatcher results travel through the same queue. Every
dispatched request produces exactly one result message.
"""

from pydantic import BaseModel, ConfigDict, Field

from cloudgate.models.pipelines import ApprovalAction, PipelineSnapshot


class KeyEvent(BaseModel):
    """A normalized key press.

    Named keys are ``enter``, ``esc``, ``up``, ``down``, ``pgup``,
    ``pgdown``, ``home``, ``end``, ``tab``, ``backspace`` and ``ctrl+c``.
    Printable keys are their single character.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Normalized key name")

    @property
    def is_printable(self) -> bool:
        """Whether the key is a single printable character."""
        return len(self.key) == 1 and self.key.isprintable()


class ResultMessage(BaseModel):
    """Base class of dispatcher results."""

    model_config = ConfigDict(frozen=True)


class ApprovalsLoaded(ResultMessage):
    """Pending approvals fetched for the current account and region."""

    approvals: tuple[ApprovalAction, ...] = Field(default=(), description="Pending approvals")


class PipelineStatusLoaded(ResultMessage):
    """Pipeline snapshots fetched for the current account and region."""

    pipelines: tuple[PipelineSnapshot, ...] = Field(default=(), description="Pipeline snapshots")


class ApprovalSubmitted(ResultMessage):
    """An approval decision was accepted."""

    action: ApprovalAction = Field(..., description="Decided approval")
    approved: bool = Field(..., description="Decision")


class ExecutionStarted(ResultMessage):
    """A pipeline execution was started."""

    pipeline_name: str = Field(..., description="Started pipeline")
    execution_id: str | None = Field(default=None, description="Pipeline execution ID")


class OperationFailed(ResultMessage):
    """A dispatched request failed.

    Attributes:
        error: Human-readable error text.
        error_type: Class name of the underlying exception.
    """

    error: str = Field(..., description="Error text")
    error_type: str = Field(default="Exception", description="Exception class name")

    @classmethod
    def from_exception(cls, exc: BaseException) -> "OperationFailed":
        """Build a failure message from an exception."""
        return cls(error=str(exc) or type(exc).__name__, error_type=type(exc).__name__)
