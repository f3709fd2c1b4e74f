"""Navigation state for the terminal interface.

A :class:`NavigationState` is an immutable value. Every key event or result
message produces a new state through :mod:`cloudgate.ui.navigation`; the
interaction loop is the only place that holds the current one.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from cloudgate.catalog.base import BaseOperation, Catalog, Category, Provider, Service
from cloudgate.models.pipelines import ApprovalAction, PipelineSnapshot
from cloudgate.models.requests import GatewayRequest


class View(str, Enum):
    """Screens of the interface, in trail order."""

    PROVIDERS = "providers"
    PROVIDER_CONFIG = "provider_config"
    SELECT_SERVICE = "select_service"
    SELECT_CATEGORY = "select_category"
    SELECT_OPERATION = "select_operation"
    APPROVALS = "approvals"
    CONFIRMATION = "confirmation"
    SUMMARY = "summary"
    EXECUTING_ACTION = "executing_action"
    PIPELINE_STATUS = "pipeline_status"
    PIPELINE_STAGES = "pipeline_stages"


class InputMode(str, Enum):
    """How key presses are interpreted."""

    LIST_SELECT = "list_select"
    FREE_TEXT = "free_text"


class NavigationState(BaseModel):
    """Complete interface state for one step.

    The selection trail (``provider`` through ``pipeline``) records what the
    operator picked so far. Each view only ever sets or clears its own
    trail fields, which keeps every back transition exact.

    Attributes:
        view: Current screen.
        provider: Selected provider.
        profile: Selected AWS profile; empty until chosen.
        region: Selected AWS region; empty until chosen.
        service: Selected service.
        category: Selected category.
        operation: Selected operation.
        approval: Approval being decided.
        pipeline: Pipeline being inspected or started.
        approve: Decision chosen on the confirmation screen.
        approvals: Pending approvals from the latest fetch.
        pipelines: Pipeline snapshots from the latest fetch.
        input_mode: Whether keys navigate the list or edit the text buffer.
        text_buffer: Free-text input being typed.
        summary: Committed approval comment.
        revision_id: Commit ID override for the start flow; empty is latest.
        manual_revision: Whether the text buffer is editing ``revision_id``.
        error: Error text; blocks the list until acknowledged.
        error_is_advisory: Acknowledging an advisory error keeps the view.
        success: Banner shown after a completed action until the next key.
        is_loading: A request is in flight; only quit is accepted.
        loading_label: Label shown next to the spinner.
        cursor: Highlighted row index.
        columns: Column headers of ``rows``.
        rows: Rows listed for the current view.
        profiles: Profiles offered in the profile step.
        regions: Regions offered in the region step.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    view: View = View.PROVIDERS

    provider: Provider | None = None
    profile: str = ""
    region: str = ""
    service: Service | None = None
    category: Category | None = None
    operation: BaseOperation | None = None
    approval: ApprovalAction | None = None
    pipeline: PipelineSnapshot | None = None
    approve: bool | None = None

    approvals: tuple[ApprovalAction, ...] = ()
    pipelines: tuple[PipelineSnapshot, ...] = ()

    input_mode: InputMode = InputMode.LIST_SELECT
    text_buffer: str = ""
    summary: str = ""
    revision_id: str = ""
    manual_revision: bool = False

    error: str | None = None
    error_is_advisory: bool = False
    success: str | None = None
    is_loading: bool = False
    loading_label: str = ""

    cursor: int = 0
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()

    profiles: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()

    def evolve(self, **changes: object) -> "NavigationState":
        """Return a copy with ``changes`` applied."""
        return self.model_copy(update=changes)

    @property
    def is_profile_step(self) -> bool:
        """Whether the provider configuration view is asking for the profile."""
        return self.view is View.PROVIDER_CONFIG and not self.profile

    @property
    def trail(self) -> tuple[object, ...]:
        """The selection trail, for comparing states across transitions."""
        return (
            self.provider,
            self.profile,
            self.region,
            self.service,
            self.category,
            self.operation,
            self.approval,
            self.pipeline,
            self.approve,
        )


class Command(BaseModel):
    """A request to run, paired with the operation that runs it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    operation: BaseOperation
    request: GatewayRequest


class NavigationContext(BaseModel):
    """Read-only inputs of the state machine that never change during a run."""

    model_config = ConfigDict(frozen=True)

    catalog: Catalog
    page_size: int = Field(default=10, ge=1)


class Transition(BaseModel):
    """Outcome of one key event: the next state and at most one command."""

    model_config = ConfigDict(frozen=True)

    state: NavigationState
    command: Command | None = None
    quit: bool = False
