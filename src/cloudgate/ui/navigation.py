"""Navigation state machine.

Two pure entry points drive the interface:

* :func:`handle_key` interprets one key event for the current view and
  input mode and returns the next state plus at most one command to run.
* :func:`handle_message` folds a dispatcher result into the state.

The trail runs Providers -> ProviderConfig (profile, then region) ->
SelectService -> SelectCategory -> SelectOperation, then forks per
operation kind:

* approvals: Approvals -> Confirmation -> Summary -> ExecutingAction
* pipeline status: PipelineStatus -> PipelineStages
* start pipeline: PipelineStatus -> ExecutingAction

Every forward step sets trail fields and the matching back step clears
exactly those fields again.
"""

import logging
from collections.abc import Sequence
from typing import Final

from cloudgate.aws.exceptions import ConfigurationError
from cloudgate.catalog.base import BaseOperation, OperationKind
from cloudgate.constants import (
    DESC_APPROVE,
    DESC_CANCEL,
    DESC_MANUAL_REVISION,
    DESC_REJECT,
    DESC_START_LATEST,
    DESC_START_REVISION,
    MSG_APPROVED,
    MSG_EMPTY_COMMENT,
    MSG_EMPTY_COMMIT,
    MSG_EXECUTING_APPROVAL,
    MSG_LOADING_APPROVALS,
    MSG_LOADING_PIPELINES,
    MSG_NO_ACCOUNT_SELECTED,
    MSG_NO_APPROVAL_SELECTED,
    MSG_NO_OPERATION_SELECTED,
    MSG_NO_PIPELINE_SELECTED,
    MSG_REJECTED,
    MSG_STARTED,
    MSG_STARTING_PIPELINE,
    PLACEHOLDER_APPROVAL_COMMENT,
    PLACEHOLDER_COMMIT_ID,
    PLACEHOLDER_PROFILE,
    PLACEHOLDER_REGION,
    PLACEHOLDER_REJECTION_COMMENT,
    ROW_APPROVE,
    ROW_CANCEL,
    ROW_EXECUTE,
    ROW_MANUAL_ENTRY,
    ROW_MANUAL_REVISION,
    ROW_REJECT,
    TITLE_APPROVALS,
    TITLE_CATEGORY,
    TITLE_CONFIRMATION,
    TITLE_EXECUTING,
    TITLE_OPERATION,
    TITLE_PIPELINE_STAGES,
    TITLE_PIPELINE_STATUS,
    TITLE_PROFILE,
    TITLE_PROVIDERS,
    TITLE_REGION,
    TITLE_SERVICE,
    TITLE_SUMMARY,
)
from cloudgate.models.messages import (
    ApprovalsLoaded,
    ApprovalSubmitted,
    ExecutionStarted,
    KeyEvent,
    OperationFailed,
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
from cloudgate.ui.state import (
    Command,
    InputMode,
    NavigationContext,
    NavigationState,
    Transition,
    View,
)
from cloudgate.workflow.exceptions import InternalStateError

logger: Final = logging.getLogger(__name__)

KEY_ENTER: Final[str] = "enter"
KEY_ESC: Final[str] = "esc"
KEY_BACKSPACE: Final[str] = "backspace"
KEY_CTRL_C: Final[str] = "ctrl+c"
KEY_QUIT: Final[str] = "q"

_BACK_KEYS: Final[frozenset[str]] = frozenset({KEY_ESC, "-"})
_UP_KEYS: Final[frozenset[str]] = frozenset({"up", "k"})
_DOWN_KEYS: Final[frozenset[str]] = frozenset({"down", "j"})

# Row actions of the executing view
_EXECUTE: Final[str] = "execute"
_MANUAL_REVISION: Final[str] = "manual_revision"
_CANCEL: Final[str] = "cancel"

Rows = tuple[tuple[str, ...], ...]


def initial_state(
    ctx: NavigationContext, profiles: Sequence[str], regions: Sequence[str]
) -> NavigationState:
    """Build the start-up state listing the providers.

    Args:
        ctx: Navigation context holding the catalog.
        profiles: Profiles offered in the profile step.
        regions: Regions offered in the region step.

    Returns:
        The initial navigation state.
    """
    state = NavigationState(profiles=tuple(profiles), regions=tuple(regions))
    return refresh_rows(state, ctx)


def handle_key(state: NavigationState, event: KeyEvent, ctx: NavigationContext) -> Transition:
    """Interpret one key event.

    Precedence: ``ctrl+c`` always quits; while loading only quit is honoured;
    while an error is shown only Enter and Esc (acknowledge) are honoured;
    in free-text mode keys edit the buffer; otherwise keys navigate the list.

    Args:
        state: Current state.
        event: Normalized key event.
        ctx: Navigation context.

    Returns:
        The next state, an optional command to dispatch and the quit flag.
    """
    key = event.key

    if key == KEY_CTRL_C:
        return Transition(state=state, quit=True)

    if state.is_loading:
        if key == KEY_QUIT and state.input_mode is InputMode.LIST_SELECT:
            return Transition(state=state, quit=True)
        return Transition(state=state)

    if state.error is not None:
        if key not in (KEY_ENTER, KEY_ESC):
            return Transition(state=state)
        cleared = state.evolve(error=None, error_is_advisory=False)
        if state.error_is_advisory:
            return Transition(state=cleared)
        return Transition(state=_back(cleared, ctx))

    if state.input_mode is InputMode.FREE_TEXT:
        return Transition(state=_handle_text(state, event, ctx))

    if key == KEY_QUIT:
        return Transition(state=state, quit=True)

    if state.success is not None:
        state = state.evolve(success=None)

    if key == KEY_ENTER:
        return _select(state, ctx)
    if key in _BACK_KEYS:
        return Transition(state=_back(state, ctx))
    return Transition(state=_move_cursor(state, key, ctx.page_size))


def handle_message(
    state: NavigationState, message: ResultMessage, ctx: NavigationContext
) -> NavigationState:
    """Fold a dispatcher result into the state.

    Loading is always cleared first, whatever the outcome.

    Args:
        state: Current state.
        message: Result produced by the dispatcher.
        ctx: Navigation context.

    Returns:
        The next state.
    """
    state = state.evolve(is_loading=False, loading_label="")

    match message:
        case ApprovalsLoaded(approvals=approvals):
            logger.debug(f"Loaded {len(approvals)} pending approvals")
            return refresh_rows(state.evolve(approvals=approvals), ctx)
        case PipelineStatusLoaded(pipelines=pipelines):
            logger.debug(f"Loaded {len(pipelines)} pipelines")
            return refresh_rows(state.evolve(pipelines=pipelines), ctx)
        case ApprovalSubmitted(action=action, approved=approved):
            template = MSG_APPROVED if approved else MSG_REJECTED
            banner = template.format(
                pipeline=action.pipeline_name, stage=action.stage_name, action=action.action_name
            )
            return _return_to_operations(state, ctx, success=banner)
        case ExecutionStarted(pipeline_name=pipeline_name):
            banner = MSG_STARTED.format(pipeline=pipeline_name)
            return _return_to_operations(state, ctx, success=banner)
        case OperationFailed(error=error, error_type=error_type):
            logger.warning(f"Operation failed in {state.view.value} ({error_type}): {error}")
            return state.evolve(error=error, error_is_advisory=False)
        case _:
            logger.warning(f"Ignoring unexpected message {type(message).__name__}")
            return state


def refresh_rows(
    state: NavigationState, ctx: NavigationContext, cursor: int = 0
) -> NavigationState:
    """Regenerate the row list for the current view from the selection trail.

    Args:
        state: State whose rows are rebuilt.
        ctx: Navigation context.
        cursor: Row to highlight; clamped to the new row count. Defaults to 0.

    Returns:
        State with fresh ``columns``, ``rows`` and ``cursor``.
    """
    columns, rows = build_rows(state, ctx)
    return state.evolve(columns=columns, rows=rows, cursor=_clamp(cursor, len(rows)))


def build_rows(state: NavigationState, ctx: NavigationContext) -> tuple[tuple[str, ...], Rows]:
    """Build the column headers and rows listed by the current view."""
    match state.view:
        case View.PROVIDERS:
            return ("Provider", "Description"), tuple(
                (p.entry.label, p.entry.description) for p in ctx.catalog.providers
            )
        case View.PROVIDER_CONFIG:
            if state.is_profile_step:
                return ("Profile",), ((ROW_MANUAL_ENTRY,), *((p,) for p in state.profiles))
            return ("Region",), ((ROW_MANUAL_ENTRY,), *((r,) for r in state.regions))
        case View.SELECT_SERVICE:
            services = state.provider.services if state.provider else ()
            return ("Service", "Description"), tuple(
                (s.entry.label, s.entry.description) for s in services
            )
        case View.SELECT_CATEGORY:
            categories = state.service.visible_categories() if state.service else []
            return ("Category", "Description"), tuple(
                (c.entry.label, c.entry.description) for c in categories
            )
        case View.SELECT_OPERATION:
            operations = state.category.visible_operations() if state.category else []
            return ("Operation", "Description"), tuple(
                (op.name, op.description) for op in operations
            )
        case View.APPROVALS:
            return ("Pipeline", "Stage", "Action"), tuple(
                (a.pipeline_name, a.stage_name, a.action_name) for a in state.approvals
            )
        case View.CONFIRMATION:
            return ("Action", "Description"), (
                (ROW_APPROVE, DESC_APPROVE),
                (ROW_REJECT, DESC_REJECT),
            )
        case View.SUMMARY:
            return ("Type", "Value"), _summary_rows(state)
        case View.EXECUTING_ACTION:
            return ("Action", "Description"), tuple(
                (label, description) for _, label, description in _execution_rows(state)
            )
        case View.PIPELINE_STATUS:
            return ("Pipeline", "Stages"), tuple(
                (p.name, f"{len(p.stages)} stages") for p in state.pipelines
            )
        case View.PIPELINE_STAGES:
            stages = state.pipeline.stages if state.pipeline else ()
            return ("Stage", "Status", "Last Updated"), tuple(
                (s.name, s.status, s.last_updated) for s in stages
            )
    return (), ()


def view_title(state: NavigationState) -> str:
    """Title of the current view."""
    if state.view is View.PROVIDER_CONFIG:
        return TITLE_PROFILE if state.is_profile_step else TITLE_REGION
    return _TITLES[state.view]


def input_placeholder(state: NavigationState) -> str:
    """Placeholder shown while the text buffer is empty."""
    if state.view is View.PROVIDER_CONFIG:
        return PLACEHOLDER_PROFILE if state.is_profile_step else PLACEHOLDER_REGION
    if state.view is View.SUMMARY:
        if state.approve is False:
            return PLACEHOLDER_REJECTION_COMMENT
        return PLACEHOLDER_APPROVAL_COMMENT
    if state.view is View.EXECUTING_ACTION:
        return PLACEHOLDER_COMMIT_ID
    return ""


_TITLES: Final[dict[View, str]] = {
    View.PROVIDERS: TITLE_PROVIDERS,
    View.SELECT_SERVICE: TITLE_SERVICE,
    View.SELECT_CATEGORY: TITLE_CATEGORY,
    View.SELECT_OPERATION: TITLE_OPERATION,
    View.APPROVALS: TITLE_APPROVALS,
    View.CONFIRMATION: TITLE_CONFIRMATION,
    View.SUMMARY: TITLE_SUMMARY,
    View.EXECUTING_ACTION: TITLE_EXECUTING,
    View.PIPELINE_STATUS: TITLE_PIPELINE_STATUS,
    View.PIPELINE_STAGES: TITLE_PIPELINE_STAGES,
}


# =============================================================================
# Select (Enter in list mode)
# =============================================================================


def _select(state: NavigationState, ctx: NavigationContext) -> Transition:
    index = state.cursor

    match state.view:
        case View.PROVIDERS:
            providers = ctx.catalog.providers
            if not _in_range(index, providers) or not providers[index].entry.available:
                return Transition(state=state)
            return Transition(
                state=refresh_rows(
                    state.evolve(view=View.PROVIDER_CONFIG, provider=providers[index]), ctx
                )
            )

        case View.PROVIDER_CONFIG:
            if index == 0:
                text_mode = state.evolve(input_mode=InputMode.FREE_TEXT, text_buffer="")
                return Transition(state=text_mode)
            choices = state.profiles if state.is_profile_step else state.regions
            if not _in_range(index - 1, choices):
                return Transition(state=state)
            return Transition(state=_commit_account_value(state, choices[index - 1], ctx))

        case View.SELECT_SERVICE:
            services = state.provider.services if state.provider else ()
            if not _in_range(index, services) or not services[index].entry.available:
                return Transition(state=state)
            return Transition(
                state=refresh_rows(
                    state.evolve(view=View.SELECT_CATEGORY, service=services[index]), ctx
                )
            )

        case View.SELECT_CATEGORY:
            categories = state.service.visible_categories() if state.service else []
            if not _in_range(index, categories) or not categories[index].entry.available:
                return Transition(state=state)
            return Transition(
                state=refresh_rows(
                    state.evolve(view=View.SELECT_OPERATION, category=categories[index]), ctx
                )
            )

        case View.SELECT_OPERATION:
            operations = state.category.visible_operations() if state.category else []
            if not _in_range(index, operations):
                return Transition(state=state)
            return _start_fetch(state, operations[index], ctx)

        case View.APPROVALS:
            if not _in_range(index, state.approvals):
                return Transition(state=state)
            return Transition(
                state=refresh_rows(
                    state.evolve(view=View.CONFIRMATION, approval=state.approvals[index]), ctx
                )
            )

        case View.CONFIRMATION:
            if index not in (0, 1):
                return Transition(state=state)
            return Transition(
                state=refresh_rows(
                    state.evolve(
                        view=View.SUMMARY,
                        approve=index == 0,
                        input_mode=InputMode.FREE_TEXT,
                        text_buffer="",
                    ),
                    ctx,
                )
            )

        case View.SUMMARY:
            return Transition(state=state.evolve(input_mode=InputMode.FREE_TEXT))

        case View.EXECUTING_ACTION:
            return _select_execution_row(state, ctx)

        case View.PIPELINE_STATUS:
            if not _in_range(index, state.pipelines):
                return Transition(state=state)
            pipeline = state.pipelines[index]
            if _is_start_flow(state):
                next_state = state.evolve(
                    view=View.EXECUTING_ACTION,
                    pipeline=pipeline,
                    revision_id="",
                    manual_revision=False,
                )
            else:
                next_state = state.evolve(view=View.PIPELINE_STAGES, pipeline=pipeline)
            return Transition(state=refresh_rows(next_state, ctx))

    # Read-only views
    return Transition(state=state)


def _start_fetch(
    state: NavigationState, operation: BaseOperation, ctx: NavigationContext
) -> Transition:
    if not state.profile or not state.region:
        error = ConfigurationError(MSG_NO_ACCOUNT_SELECTED)
        return Transition(state=state.evolve(error=str(error), error_is_advisory=True))

    request: GatewayRequest
    if operation.kind is OperationKind.PIPELINE_APPROVALS:
        request = FetchApprovalsRequest(profile=state.profile, region=state.region)
        view, label = View.APPROVALS, MSG_LOADING_APPROVALS
    else:
        request = FetchPipelineStatusRequest(profile=state.profile, region=state.region)
        view, label = View.PIPELINE_STATUS, MSG_LOADING_PIPELINES

    next_state = state.evolve(
        view=view,
        operation=operation,
        approvals=(),
        pipelines=(),
        is_loading=True,
        loading_label=label,
    )
    logger.info(f"Dispatching {type(request).__name__} for {operation.name}")
    return Transition(
        state=refresh_rows(next_state, ctx),
        command=Command(operation=operation, request=request),
    )


def _select_execution_row(state: NavigationState, ctx: NavigationContext) -> Transition:
    rows = _execution_rows(state)
    if not _in_range(state.cursor, rows):
        return Transition(state=state)

    action = rows[state.cursor][0]
    if action == _CANCEL:
        return Transition(state=_return_to_operations(state, ctx))
    if action == _MANUAL_REVISION:
        return Transition(
            state=state.evolve(
                input_mode=InputMode.FREE_TEXT,
                manual_revision=True,
                text_buffer=state.revision_id,
            )
        )

    if state.operation is None:
        return Transition(state=_internal_error(state, MSG_NO_OPERATION_SELECTED))

    request: GatewayRequest
    if _is_start_flow(state):
        if state.pipeline is None:
            return Transition(state=_internal_error(state, MSG_NO_PIPELINE_SELECTED))
        request = StartExecutionRequest(
            profile=state.profile,
            region=state.region,
            pipeline_name=state.pipeline.name,
            revision_id=state.revision_id,
        )
        label = MSG_STARTING_PIPELINE
    else:
        if state.approval is None or state.approve is None:
            return Transition(state=_internal_error(state, MSG_NO_APPROVAL_SELECTED))
        if not state.summary:
            advisory = state.evolve(error=MSG_EMPTY_COMMENT, error_is_advisory=True)
            return Transition(state=advisory)
        request = SubmitApprovalRequest(
            profile=state.profile,
            region=state.region,
            action=state.approval,
            approved=state.approve,
            comment=state.summary,
        )
        label = MSG_EXECUTING_APPROVAL

    logger.info(f"Dispatching {type(request).__name__} for {state.operation.name}")
    return Transition(
        state=state.evolve(is_loading=True, loading_label=label),
        command=Command(operation=state.operation, request=request),
    )


def _execution_rows(state: NavigationState) -> list[tuple[str, str, str]]:
    if _is_start_flow(state):
        execute_description = (
            DESC_START_REVISION.format(revision=state.revision_id)
            if state.revision_id
            else DESC_START_LATEST
        )
        return [
            (_EXECUTE, ROW_EXECUTE, execute_description),
            (_MANUAL_REVISION, ROW_MANUAL_REVISION, DESC_MANUAL_REVISION),
            (_CANCEL, ROW_CANCEL, DESC_CANCEL),
        ]
    decision = "approve" if state.approve is not False else "reject"
    return [
        (_EXECUTE, ROW_EXECUTE, f"Execute {decision} action"),
        (_CANCEL, ROW_CANCEL, DESC_CANCEL),
    ]


def _summary_rows(state: NavigationState) -> Rows:
    if state.approval is None:
        return ()
    decision = ROW_REJECT if state.approve is False else ROW_APPROVE
    return (
        ("Pipeline", state.approval.pipeline_name),
        ("Stage", state.approval.stage_name),
        ("Action", state.approval.action_name),
        ("Decision", decision),
    )


# =============================================================================
# Free-text input
# =============================================================================


def _handle_text(
    state: NavigationState, event: KeyEvent, ctx: NavigationContext
) -> NavigationState:
    key = event.key
    if key == KEY_ESC:
        return _cancel_text(state, ctx)
    if key == KEY_ENTER:
        return _commit_text(state, ctx)
    if key == KEY_BACKSPACE:
        return state.evolve(text_buffer=state.text_buffer[:-1])
    if event.is_printable:
        return state.evolve(text_buffer=state.text_buffer + key)
    # Named keys such as arrows do not edit the buffer
    return state


def _cancel_text(state: NavigationState, ctx: NavigationContext) -> NavigationState:
    if state.view is View.SUMMARY:
        return _back(state, ctx)
    return state.evolve(input_mode=InputMode.LIST_SELECT, text_buffer="", manual_revision=False)


def _commit_text(state: NavigationState, ctx: NavigationContext) -> NavigationState:
    value = state.text_buffer.strip()

    match state.view:
        case View.PROVIDER_CONFIG:
            if not value:
                return state.evolve(input_mode=InputMode.LIST_SELECT, text_buffer="")
            return _commit_account_value(state, value, ctx)

        case View.SUMMARY:
            if not value:
                return state.evolve(error=MSG_EMPTY_COMMENT, error_is_advisory=True)
            return refresh_rows(
                state.evolve(
                    view=View.EXECUTING_ACTION,
                    summary=value,
                    text_buffer="",
                    input_mode=InputMode.LIST_SELECT,
                ),
                ctx,
            )

        case View.EXECUTING_ACTION:
            if not value:
                return state.evolve(error=MSG_EMPTY_COMMIT, error_is_advisory=True)
            return refresh_rows(
                state.evolve(
                    revision_id=value,
                    manual_revision=False,
                    text_buffer="",
                    input_mode=InputMode.LIST_SELECT,
                ),
                ctx,
            )

    return state.evolve(input_mode=InputMode.LIST_SELECT, text_buffer="")


def _commit_account_value(
    state: NavigationState, value: str, ctx: NavigationContext
) -> NavigationState:
    reset = {"input_mode": InputMode.LIST_SELECT, "text_buffer": ""}
    if state.is_profile_step:
        return refresh_rows(state.evolve(profile=value, **reset), ctx)
    return refresh_rows(state.evolve(view=View.SELECT_SERVICE, region=value, **reset), ctx)


# =============================================================================
# Back (Esc or "-" in list mode)
# =============================================================================


def _back(state: NavigationState, ctx: NavigationContext) -> NavigationState:
    list_mode = {"input_mode": InputMode.LIST_SELECT, "text_buffer": ""}

    match state.view:
        case View.PROVIDERS:
            return state

        case View.PROVIDER_CONFIG:
            if state.profile:
                cursor = _index_of(state.profiles, state.profile, offset=1)
                return refresh_rows(state.evolve(profile="", region="", **list_mode), ctx, cursor)
            cursor = _index_of(ctx.catalog.providers, state.provider)
            return refresh_rows(
                state.evolve(view=View.PROVIDERS, provider=None, region="", **list_mode),
                ctx,
                cursor,
            )

        case View.SELECT_SERVICE:
            cursor = _index_of(state.regions, state.region, offset=1)
            return refresh_rows(
                state.evolve(view=View.PROVIDER_CONFIG, region="", service=None), ctx, cursor
            )

        case View.SELECT_CATEGORY:
            services = state.provider.services if state.provider else ()
            cursor = _index_of(services, state.service)
            return refresh_rows(
                state.evolve(view=View.SELECT_SERVICE, service=None, category=None), ctx, cursor
            )

        case View.SELECT_OPERATION:
            categories = state.service.visible_categories() if state.service else []
            cursor = _index_of(categories, state.category)
            return refresh_rows(
                state.evolve(view=View.SELECT_CATEGORY, category=None, operation=None),
                ctx,
                cursor,
            )

        case View.APPROVALS | View.PIPELINE_STATUS:
            return _return_to_operations(state, ctx)

        case View.CONFIRMATION:
            cursor = _index_of(state.approvals, state.approval)
            return refresh_rows(
                state.evolve(view=View.APPROVALS, approval=None, approve=None), ctx, cursor
            )

        case View.SUMMARY:
            cursor = 1 if state.approve is False else 0
            return refresh_rows(
                state.evolve(view=View.CONFIRMATION, approve=None, summary="", **list_mode),
                ctx,
                cursor,
            )

        case View.PIPELINE_STAGES:
            cursor = _index_of(state.pipelines, state.pipeline)
            return refresh_rows(
                state.evolve(view=View.PIPELINE_STATUS, pipeline=None), ctx, cursor
            )

        case View.EXECUTING_ACTION:
            if _is_start_flow(state):
                cursor = _index_of(state.pipelines, state.pipeline)
                return refresh_rows(
                    state.evolve(
                        view=View.PIPELINE_STATUS,
                        pipeline=None,
                        revision_id="",
                        manual_revision=False,
                        **list_mode,
                    ),
                    ctx,
                    cursor,
                )
            # Approval flow: reopen the comment with the previous text
            return refresh_rows(
                state.evolve(
                    view=View.SUMMARY,
                    summary="",
                    text_buffer=state.summary,
                    input_mode=InputMode.FREE_TEXT,
                ),
                ctx,
            )

    return state


def _return_to_operations(
    state: NavigationState, ctx: NavigationContext, success: str | None = None
) -> NavigationState:
    operations = state.category.visible_operations() if state.category else []
    cursor = _index_of(operations, state.operation)
    return refresh_rows(
        state.evolve(
            view=View.SELECT_OPERATION,
            operation=None,
            approval=None,
            pipeline=None,
            approve=None,
            approvals=(),
            pipelines=(),
            summary="",
            revision_id="",
            manual_revision=False,
            input_mode=InputMode.LIST_SELECT,
            text_buffer="",
            success=success,
        ),
        ctx,
        cursor,
    )


# =============================================================================
# Helpers
# =============================================================================


def _move_cursor(state: NavigationState, key: str, page_size: int) -> NavigationState:
    count = len(state.rows)
    cursor = state.cursor
    if key in _UP_KEYS:
        cursor -= 1
    elif key in _DOWN_KEYS:
        cursor += 1
    elif key == "pgup":
        cursor -= page_size
    elif key == "pgdown":
        cursor += page_size
    elif key == "home":
        cursor = 0
    elif key == "end":
        cursor = count - 1
    else:
        return state
    return state.evolve(cursor=_clamp(cursor, count))


def _internal_error(state: NavigationState, message: str) -> NavigationState:
    error = InternalStateError(message)
    logger.error(f"Internal state error in {state.view.value}: {error}")
    return state.evolve(error=str(error), error_is_advisory=False)


def _is_start_flow(state: NavigationState) -> bool:
    return state.operation is not None and state.operation.kind is OperationKind.START_PIPELINE


def _in_range(index: int, items: Sequence[object]) -> bool:
    return 0 <= index < len(items)


def _index_of(items: Sequence[object], item: object, offset: int = 0) -> int:
    for index, candidate in enumerate(items):
        if candidate == item:
            return index + offset
    return 0


def _clamp(cursor: int, count: int) -> int:
    if count == 0:
        return 0
    return max(0, min(cursor, count - 1))
