"""Pending approval resolution.

CodePipeline reports a pipeline's structure (``get_pipeline``) and its
run-state (``get_pipeline_state``) through separate calls. The two are only
correlated by stage and action names and may disagree, e.g. while a stage
has not started yet or after the pipeline definition was edited between
the two calls. This module reconciles them into the list of approval
actions a human has to decide right now.

Everything here is pure: no I/O, deterministic output, and mismatches are
skipped rather than reported.
"""

from collections.abc import Iterable, Sequence

from cloudgate.constants import APPROVAL_CATEGORY, IN_PROGRESS_STATUS
from cloudgate.models.pipelines import (
    ActionState,
    ApprovalAction,
    StageDeclaration,
    StageState,
)


def resolve_pending_approvals(
    pipeline_name: str,
    declarations: Sequence[StageDeclaration],
    states: Sequence[StageState],
) -> list[ApprovalAction]:
    """Resolve the approval actions of one pipeline that await a decision.

    An action is pending when its declared category is ``Approval``, its
    latest execution status is ``InProgress`` and its state carries a token.
    Output follows declared stage order, then declared action order.

    Args:
        pipeline_name: Name stamped on every resolved action.
        declarations: Declared stages from the pipeline structure.
        states: Stage run-states from the latest execution.

    Returns:
        Pending approval actions; empty when nothing is pending.

    Example:
        >>> declarations = [
        ...     StageDeclaration(
        ...         name="Prod", actions=(ActionDeclaration(name="Gate", category="Approval"),)
        ...     )
        ... ]
        >>> states = [
        ...     StageState(
        ...         stage_name="Prod",
        ...         action_states=(
        ...             ActionState(action_name="Gate", status="InProgress", token="t-1"),
        ...         ),
        ...     )
        ... ]
        >>> [a.action_name for a in resolve_pending_approvals("web", declarations, states)]
        ['Gate']
    """
    categories: dict[str, str] = {}
    for stage in declarations:
        for action in stage.actions:
            categories[action.name] = action.category

    # First state wins when the run-state repeats a stage name
    states_by_stage: dict[str, StageState] = {}
    for state in states:
        states_by_stage.setdefault(state.stage_name, state)

    pending: list[ApprovalAction] = []
    for stage in declarations:
        stage_state = states_by_stage.get(stage.name)
        if stage_state is None:
            continue

        action_states = _index_action_states(stage_state.action_states)
        for action in stage.actions:
            action_state = action_states.get(action.name)
            if action_state is None:
                continue
            if categories.get(action.name) != APPROVAL_CATEGORY:
                continue
            if action_state.status != IN_PROGRESS_STATUS or not action_state.token:
                continue
            pending.append(
                ApprovalAction(
                    pipeline_name=pipeline_name,
                    stage_name=stage.name,
                    action_name=action.name,
                    token=action_state.token,
                )
            )

    return pending


def resolve_for_pipelines(
    pipelines: Iterable[tuple[str, Sequence[StageDeclaration], Sequence[StageState]]],
) -> list[ApprovalAction]:
    """Resolve pending approvals across several pipelines.

    Args:
        pipelines: ``(name, declarations, states)`` triples in listing order.

    Returns:
        Concatenated pending approvals, grouped per pipeline in input order.
    """
    pending: list[ApprovalAction] = []
    for name, declarations, states in pipelines:
        pending.extend(resolve_pending_approvals(name, declarations, states))
    return pending


def _index_action_states(action_states: Iterable[ActionState]) -> dict[str, ActionState]:
    indexed: dict[str, ActionState] = {}
    for action_state in action_states:
        indexed.setdefault(action_state.action_name, action_state)
    return indexed
