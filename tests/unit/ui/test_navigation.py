"""Tests for the navigation state machine."""

import pytest

from cloudgate.aws.exceptions import InvalidApprovalTokenError
from cloudgate.catalog.base import OperationKind
from cloudgate.models.messages import (
    ApprovalsLoaded,
    ApprovalSubmitted,
    ExecutionStarted,
    KeyEvent,
    OperationFailed,
    PipelineStatusLoaded,
)
from cloudgate.models.pipelines import ApprovalAction, PipelineSnapshot
from cloudgate.models.requests import (
    FetchApprovalsRequest,
    FetchPipelineStatusRequest,
    StartExecutionRequest,
    SubmitApprovalRequest,
)
from cloudgate.ui.navigation import (
    handle_key,
    handle_message,
    initial_state,
    input_placeholder,
    view_title,
)
from cloudgate.ui.state import InputMode, NavigationContext, NavigationState, Transition, View

PROFILES = ("dev", "prod")
REGIONS = ("us-east-1", "eu-west-1")


def press(state: NavigationState, ctx: NavigationContext, *keys: str) -> NavigationState:
    """Apply keys that must neither quit nor dispatch."""
    for name in keys:
        transition = handle_key(state, KeyEvent(key=name), ctx)
        assert transition.command is None, f"unexpected command on {name!r}"
        assert not transition.quit, f"unexpected quit on {name!r}"
        state = transition.state
    return state


def press_for_command(state: NavigationState, ctx: NavigationContext, name: str) -> Transition:
    """Apply a key that must dispatch a command."""
    transition = handle_key(state, KeyEvent(key=name), ctx)
    assert transition.command is not None
    return transition


def type_text(state: NavigationState, ctx: NavigationContext, text: str) -> NavigationState:
    return press(state, ctx, *text)


@pytest.fixture
def start(ctx: NavigationContext) -> NavigationState:
    """Initial state listing the providers."""
    return initial_state(ctx, PROFILES, REGIONS)


@pytest.fixture
def operations(start: NavigationState, ctx: NavigationContext) -> NavigationState:
    """State on the operation menu for profile prod in us-east-1."""
    state = press(start, ctx, "enter", "down", "down", "enter", "down", "enter", "enter", "enter")
    assert state.view is View.SELECT_OPERATION
    return state


@pytest.fixture
def approvals(
    operations: NavigationState,
    ctx: NavigationContext,
    sample_approvals: tuple[ApprovalAction, ...],
) -> NavigationState:
    """State on the loaded approvals list."""
    state = press(operations, ctx, "down", "down")
    transition = press_for_command(state, ctx, "enter")
    return handle_message(transition.state, ApprovalsLoaded(approvals=sample_approvals), ctx)


@pytest.fixture
def executing_approval(approvals: NavigationState, ctx: NavigationContext) -> NavigationState:
    """State on the execute screen after approving with comment ``ok``."""
    state = press(approvals, ctx, "enter", "enter")
    state = type_text(state, ctx, "ok")
    return press(state, ctx, "enter")


@pytest.fixture
def pipeline_list(
    operations: NavigationState,
    ctx: NavigationContext,
    sample_pipelines: tuple[PipelineSnapshot, ...],
) -> NavigationState:
    """State on the loaded pipeline list of the start flow."""
    state = press(operations, ctx, "down")
    transition = press_for_command(state, ctx, "enter")
    return handle_message(transition.state, PipelineStatusLoaded(pipelines=sample_pipelines), ctx)


class TestProviderSelection:
    """Tests for the provider and account steps."""

    def test_initial_state(self, start: NavigationState) -> None:
        """Test the providers are listed first."""
        assert start.view is View.PROVIDERS
        assert start.rows[0] == ("Amazon Web Services", "AWS Cloud Services")
        assert start.rows[1][0] == "Microsoft Azure (Coming Soon)"
        assert view_title(start) == "Select Cloud Provider"

    def test_unavailable_provider_ignored(
        self, start: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test Enter on a coming-soon provider does nothing."""
        state = press(start, ctx, "down")
        assert press(state, ctx, "enter") == state

    def test_profile_then_region(self, start: NavigationState, ctx: NavigationContext) -> None:
        """Test the first Enter captures the profile and the second the region."""
        state = press(start, ctx, "enter")
        assert state.is_profile_step
        assert state.rows == (("Manual Entry",), ("dev",), ("prod",))
        assert view_title(state) == "Select AWS Profile"

        state = press(state, ctx, "down", "enter")
        assert state.view is View.PROVIDER_CONFIG
        assert state.profile == "dev"
        assert state.rows == (("Manual Entry",), ("us-east-1",), ("eu-west-1",))
        assert view_title(state) == "Select AWS Region"

        state = press(state, ctx, "end", "enter")
        assert state.view is View.SELECT_SERVICE
        assert state.region == "eu-west-1"
        assert state.rows == (("CodePipeline", "Continuous Delivery Service"),)

    def test_manual_profile_entry(self, start: NavigationState, ctx: NavigationContext) -> None:
        """Test a profile can be typed on the Manual Entry row."""
        state = press(start, ctx, "enter", "enter")
        assert state.input_mode is InputMode.FREE_TEXT
        assert input_placeholder(state) == "Enter AWS profile name..."

        state = type_text(state, ctx, "staging")
        state = press(state, ctx, "enter")

        assert state.profile == "staging"
        assert state.input_mode is InputMode.LIST_SELECT
        assert state.text_buffer == ""

    def test_empty_manual_entry_leaves_text_mode(
        self, start: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test committing an empty buffer only leaves free-text mode."""
        state = press(start, ctx, "enter", "enter", " ", "enter")

        assert state.input_mode is InputMode.LIST_SELECT
        assert state.profile == ""
        assert state.error is None

    def test_categories_exclude_internal(
        self, operations: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test the internal category is never offered."""
        category = press(operations, ctx, "esc")

        assert category.rows == (
            ("Workflows", "CodePipeline Workflows"),
            ("Operations (Coming Soon)", "CodePipeline Operations"),
        )
        assert [row[0] for row in operations.rows] == [
            "Pipeline Status",
            "Start Pipeline",
            "Pipeline Approvals",
        ]

    def test_unavailable_category_ignored(
        self, operations: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test Enter on the coming-soon category does nothing."""
        state = press(operations, ctx, "esc", "down")
        assert state.view is View.SELECT_CATEGORY
        assert state.cursor == 1

        assert press(state, ctx, "enter") == state


class TestFreeText:
    """Tests for free-text input handling."""

    def test_navigation_keys_are_literal(
        self, start: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test q, j, k and - are typed instead of interpreted."""
        state = press(start, ctx, "enter", "enter")

        state = type_text(state, ctx, "qjk-")

        assert state.text_buffer == "qjk-"
        assert state.view is View.PROVIDER_CONFIG

    def test_backspace_and_named_keys(
        self, start: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test backspace deletes and arrows do not edit the buffer."""
        state = press(
            start, ctx, "enter", "enter", "a", "b", "backspace", "up", "down", "tab", "pgdown"
        )

        assert state.text_buffer == "a"

    def test_escape_cancels(self, start: NavigationState, ctx: NavigationContext) -> None:
        """Test Esc discards the buffer and returns to the list."""
        state = press(start, ctx, "enter", "enter", "x", "esc")

        assert state.input_mode is InputMode.LIST_SELECT
        assert state.text_buffer == ""
        assert state.view is View.PROVIDER_CONFIG

    def test_ctrl_c_quits_while_typing(
        self, start: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test ctrl+c quits even in free-text mode."""
        state = press(start, ctx, "enter", "enter")

        assert handle_key(state, KeyEvent(key="ctrl+c"), ctx).quit is True


class TestApprovalFlow:
    """Tests for the approvals flow."""

    def test_fetch_sets_loading_and_dispatches(
        self, operations: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test selecting the approvals operation dispatches a fetch."""
        state = press(operations, ctx, "down", "down")

        transition = press_for_command(state, ctx, "enter")

        assert transition.state.view is View.APPROVALS
        assert transition.state.is_loading is True
        assert transition.state.loading_label == "Loading approvals..."
        assert transition.command is not None
        assert transition.command.operation.kind is OperationKind.PIPELINE_APPROVALS
        assert transition.command.request == FetchApprovalsRequest(
            profile="prod", region="us-east-1"
        )

    def test_loaded_approvals_listed(self, approvals: NavigationState) -> None:
        """Test loaded approvals become rows."""
        assert approvals.is_loading is False
        assert approvals.columns == ("Pipeline", "Stage", "Action")
        assert approvals.rows == (
            ("payments", "Prod", "ManualGate"),
            ("billing", "Staging", "QAGate"),
        )

    def test_confirmation_and_summary(
        self,
        approvals: NavigationState,
        ctx: NavigationContext,
        sample_approvals: tuple[ApprovalAction, ...],
    ) -> None:
        """Test choosing an approval and the reject decision."""
        state = press(approvals, ctx, "down", "enter")
        assert state.view is View.CONFIRMATION
        assert state.approval == sample_approvals[1]

        state = press(state, ctx, "down", "enter")
        assert state.view is View.SUMMARY
        assert state.approve is False
        assert state.input_mode is InputMode.FREE_TEXT
        assert input_placeholder(state) == "Enter rejection comment..."
        assert ("Decision", "Reject") in state.rows

    def test_empty_comment_is_advisory(
        self, approvals: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test an empty comment shows an error without leaving the view."""
        state = press(approvals, ctx, "enter", "enter", "enter")

        assert state.view is View.SUMMARY
        assert state.error == "Comment cannot be empty"

        state = press(state, ctx, "enter")
        assert state.error is None
        assert state.view is View.SUMMARY
        assert state.input_mode is InputMode.FREE_TEXT

    def test_execute_submits_decision(
        self,
        executing_approval: NavigationState,
        ctx: NavigationContext,
        sample_approval: ApprovalAction,
    ) -> None:
        """Test Execute dispatches the decision with the comment."""
        assert executing_approval.view is View.EXECUTING_ACTION
        assert executing_approval.rows == (
            ("Execute", "Execute approve action"),
            ("Cancel", "Cancel and return to main menu"),
        )

        transition = press_for_command(executing_approval, ctx, "enter")

        assert transition.state.is_loading is True
        assert transition.state.loading_label == "Executing approval action..."
        assert transition.command is not None
        assert transition.command.request == SubmitApprovalRequest(
            profile="prod",
            region="us-east-1",
            action=sample_approval,
            approved=True,
            comment="ok",
        )

    def test_success_returns_to_operations(
        self,
        executing_approval: NavigationState,
        ctx: NavigationContext,
        sample_approval: ApprovalAction,
    ) -> None:
        """Test a submitted decision shows a banner on the operation menu."""
        loading = press_for_command(executing_approval, ctx, "enter").state

        state = handle_message(
            loading, ApprovalSubmitted(action=sample_approval, approved=True), ctx
        )

        assert state.view is View.SELECT_OPERATION
        assert state.success == (
            "Successfully approved pipeline: payments, stage: Prod, action: ManualGate"
        )
        assert state.approvals == ()
        assert state.approval is None
        assert state.operation is None
        assert state.cursor == 2
        assert state.is_loading is False

        assert press(state, ctx, "up").success is None

    def test_cancel_returns_to_operations(
        self, executing_approval: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test the Cancel row abandons the decision."""
        state = press(executing_approval, ctx, "down", "enter")

        assert state.view is View.SELECT_OPERATION
        assert state.approval is None
        assert state.summary == ""

    def test_missing_selection_is_internal_error(
        self, executing_approval: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test executing without an approval reports an internal error."""
        broken = executing_approval.evolve(approval=None)

        state = press(broken, ctx, "enter")

        assert state.error == "No approval selected"
        assert state.error_is_advisory is False
        assert state.is_loading is False


class TestStartFlow:
    """Tests for the start pipeline flow."""

    def test_pipeline_goes_straight_to_execute(
        self,
        pipeline_list: NavigationState,
        ctx: NavigationContext,
        sample_pipelines: tuple[PipelineSnapshot, ...],
    ) -> None:
        """Test selecting a pipeline skips confirmation and summary."""
        state = press(pipeline_list, ctx, "enter")

        assert state.view is View.EXECUTING_ACTION
        assert state.pipeline == sample_pipelines[0]
        assert [row[0] for row in state.rows] == ["Execute", "Manual Revision", "Cancel"]
        assert state.rows[0][1] == "Start pipeline with latest commit"

    def test_manual_revision(self, pipeline_list: NavigationState, ctx: NavigationContext) -> None:
        """Test a typed commit ID is shown and sent with the start request."""
        state = press(pipeline_list, ctx, "enter", "down", "enter")
        assert state.input_mode is InputMode.FREE_TEXT
        assert input_placeholder(state) == "Enter commit ID..."

        state = type_text(state, ctx, "9f2c1e7")
        state = press(state, ctx, "enter")
        assert state.revision_id == "9f2c1e7"
        assert state.rows[0][1] == "Start pipeline with commit 9f2c1e7"

        transition = press_for_command(press(state, ctx, "home"), ctx, "enter")
        assert transition.state.loading_label == "Starting pipeline..."
        assert transition.command is not None
        assert transition.command.request == StartExecutionRequest(
            profile="prod", region="us-east-1", pipeline_name="payments", revision_id="9f2c1e7"
        )

    def test_empty_commit_is_advisory(
        self, pipeline_list: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test an empty commit ID is refused without leaving the view."""
        state = press(pipeline_list, ctx, "enter", "down", "enter", "enter")

        assert state.error == "Commit ID cannot be empty"
        assert state.error_is_advisory is True
        assert state.view is View.EXECUTING_ACTION

    def test_started_banner(self, pipeline_list: NavigationState, ctx: NavigationContext) -> None:
        """Test a started execution returns to the operation menu."""
        loading = press_for_command(press(pipeline_list, ctx, "enter"), ctx, "enter").state

        state = handle_message(
            loading, ExecutionStarted(pipeline_name="payments", execution_id="e-1"), ctx
        )

        assert state.view is View.SELECT_OPERATION
        assert state.success == "Successfully started pipeline: payments"
        assert state.pipelines == ()
        assert state.cursor == 1


class TestPipelineStatusFlow:
    """Tests for the read-only pipeline status flow."""

    def test_stages_listed(
        self,
        operations: NavigationState,
        ctx: NavigationContext,
        sample_pipelines: tuple[PipelineSnapshot, ...],
    ) -> None:
        """Test a pipeline's stages are shown read-only."""
        transition = press_for_command(operations, ctx, "enter")
        assert transition.command is not None
        assert transition.command.request == FetchPipelineStatusRequest(
            profile="prod", region="us-east-1"
        )
        state = handle_message(
            transition.state, PipelineStatusLoaded(pipelines=sample_pipelines), ctx
        )
        assert state.rows == (("payments", "2 stages"), ("billing", "1 stages"))

        state = press(state, ctx, "enter")

        assert state.view is View.PIPELINE_STAGES
        assert view_title(state) == "Pipeline Stages"
        assert state.rows == (
            ("Source", "Succeeded", "Jan 02 10:00:00 UTC"),
            ("Prod", "InProgress", "Jan 02 10:05:00 UTC"),
        )
        assert press(state, ctx, "enter") == state


class TestBackNavigation:
    """Tests for navigation reversibility."""

    def test_each_back_step_restores_previous_trail(
        self,
        start: NavigationState,
        ctx: NavigationContext,
        sample_approvals: tuple[ApprovalAction, ...],
    ) -> None:
        """Test Esc undoes every forward step of the approval flow."""
        steps = [start]
        for keys in (["enter"], ["down", "enter"], ["down", "enter"], ["enter"], ["enter"]):
            steps.append(press(steps[-1], ctx, *keys))
        fetching = press_for_command(press(steps[-1], ctx, "end"), ctx, "enter").state
        steps.append(handle_message(fetching, ApprovalsLoaded(approvals=sample_approvals), ctx))
        steps.append(press(steps[-1], ctx, "enter"))
        steps.append(press(steps[-1], ctx, "enter"))
        steps.append(press(type_text(steps[-1], ctx, "lgtm"), ctx, "enter"))

        assert steps[-1].view is View.EXECUTING_ACTION
        for before, after in zip(steps, steps[1:], strict=False):
            restored = press(after, ctx, "esc")
            assert restored.view is before.view
            assert restored.trail == before.trail

    def test_back_from_execute_restores_comment(
        self, executing_approval: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test the previous comment is reopened for editing."""
        state = press(executing_approval, ctx, "esc")

        assert state.view is View.SUMMARY
        assert state.input_mode is InputMode.FREE_TEXT
        assert state.text_buffer == "ok"
        assert state.summary == ""

    def test_back_from_start_execute(
        self, pipeline_list: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test the start flow returns to the pipeline list."""
        executing = press(pipeline_list, ctx, "down", "enter")
        executing = press(executing, ctx, "down", "enter", "a", "b", "c", "enter")
        assert executing.revision_id == "abc"

        state = press(executing, ctx, "-")

        assert state.view is View.PIPELINE_STATUS
        assert state.pipeline is None
        assert state.revision_id == ""
        assert state.cursor == 1
        assert state.trail == pipeline_list.trail

    def test_back_keeps_cursor_on_previous_choice(
        self, operations: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test going back highlights the row that was chosen."""
        state = press(operations, ctx, "esc", "esc", "esc")

        assert state.is_profile_step is False
        assert state.profile == "prod"
        assert state.region == ""
        assert state.cursor == 1

    def test_back_on_providers_is_noop(
        self, start: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test there is nothing before the provider list."""
        assert press(start, ctx, "esc") == start


class TestLoadingAndErrors:
    """Tests for loading exclusivity and error handling."""

    @pytest.fixture
    def loading(self, operations: NavigationState, ctx: NavigationContext) -> NavigationState:
        """State waiting for the approvals fetch."""
        return press_for_command(press(operations, ctx, "end"), ctx, "enter").state

    @pytest.mark.parametrize(
        "key", ["up", "down", "enter", "esc", "-", "j", "k", "x", "backspace", "pgdown", "home"]
    )
    def test_keys_ignored_while_loading(
        self, loading: NavigationState, ctx: NavigationContext, key: str
    ) -> None:
        """Test no key except quit has an effect while loading."""
        transition = handle_key(loading, KeyEvent(key=key), ctx)

        assert transition.state == loading
        assert transition.command is None
        assert transition.quit is False

    @pytest.mark.parametrize("key", ["q", "ctrl+c"])
    def test_quit_while_loading(
        self, loading: NavigationState, ctx: NavigationContext, key: str
    ) -> None:
        """Test quit is honoured while loading."""
        assert handle_key(loading, KeyEvent(key=key), ctx).quit is True

    def test_double_enter_dispatches_once(
        self, operations: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test a fast double Enter dispatches a single command."""
        first = handle_key(operations, KeyEvent(key="enter"), ctx)
        second = handle_key(first.state, KeyEvent(key="enter"), ctx)

        assert first.command is not None
        assert second.command is None
        assert second.state == first.state

    def test_failure_clears_loading(self, loading: NavigationState, ctx: NavigationContext) -> None:
        """Test a failure message ends loading and shows the error."""
        error = InvalidApprovalTokenError("token is stale")

        state = handle_message(loading, OperationFailed.from_exception(error), ctx)

        assert state.is_loading is False
        assert state.error == "token is stale"
        assert state.error_is_advisory is False
        assert state.view is View.APPROVALS

    def test_error_blocks_list_until_acknowledged(
        self, loading: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test navigation keys are ignored while an error is shown."""
        failed = handle_message(loading, OperationFailed(error="boom"), ctx)

        assert press(failed, ctx, "down", "q", "-") == failed

    @pytest.mark.parametrize("ack", ["enter", "esc"])
    def test_acknowledging_error_goes_back_one_step(
        self,
        loading: NavigationState,
        operations: NavigationState,
        ctx: NavigationContext,
        ack: str,
    ) -> None:
        """Test acknowledging lands where a back transition would."""
        failed = handle_message(loading, OperationFailed(error="boom"), ctx)
        expected = press(loading.evolve(is_loading=False, loading_label=""), ctx, "esc")

        state = press(failed, ctx, ack)

        assert state == expected
        assert state.view is View.SELECT_OPERATION
        assert state.trail == operations.evolve(operation=None).trail

    def test_submit_failure_returns_to_summary(
        self, executing_approval: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test a stale token error leads back to the comment step."""
        loading = press_for_command(executing_approval, ctx, "enter").state
        failed = handle_message(loading, OperationFailed(error="stale"), ctx)

        state = press(failed, ctx, "enter")

        assert state.view is View.SUMMARY
        assert state.approval == executing_approval.approval

    def test_fetch_without_account_is_advisory(
        self, operations: NavigationState, ctx: NavigationContext
    ) -> None:
        """Test no command is dispatched without profile and region."""
        state = press(operations.evolve(region=""), ctx, "enter")

        assert state.error == "AWS profile and region must be selected"
        assert state.error_is_advisory is True
        assert state.view is View.SELECT_OPERATION


class TestCursor:
    """Tests for cursor movement."""

    def test_moves_and_clamps(self, operations: NavigationState, ctx: NavigationContext) -> None:
        """Test the cursor stays within the rows."""
        assert press(operations, ctx, "up").cursor == 0
        assert press(operations, ctx, "j", "j", "j", "j").cursor == 2
        assert press(operations, ctx, "end", "k").cursor == 1
        assert press(operations, ctx, "end", "home").cursor == 0

    def test_paging(self, start: NavigationState, ctx: NavigationContext) -> None:
        """Test page keys move by the configured page size."""
        state = press(start, ctx, "pgdown")
        assert state.cursor == 2
        assert press(state, ctx, "pgup").cursor == 0

    def test_unknown_key_ignored(self, start: NavigationState, ctx: NavigationContext) -> None:
        """Test unmapped keys leave the state unchanged."""
        assert press(start, ctx, "x", "tab") == start

    def test_q_quits_in_list_mode(self, start: NavigationState, ctx: NavigationContext) -> None:
        """Test q quits outside free-text mode."""
        assert handle_key(start, KeyEvent(key="q"), ctx).quit is True
