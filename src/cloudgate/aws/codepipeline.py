"""CodePipeline gateway.

This module provides the four remote operations the interface needs:
listing pending approvals, submitting an approval decision, listing
pipeline statuses and starting an execution. Every call builds a fresh
boto3 client from the gateway's profile and region.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Final, Protocol

from cloudgate.aws.client import AWSClientWrapper, create_aws_client
from cloudgate.aws.exceptions import ConfigurationError
from cloudgate.constants import (
    APPROVED_STATUS,
    CODEPIPELINE_SERVICE,
    COMMIT_ID_REVISION_TYPE,
    DEFAULT_SOURCE_ACTION,
    LAST_UPDATED_FORMAT,
    NOT_AVAILABLE,
    REJECTED_STATUS,
    UNKNOWN_STATUS,
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
from cloudgate.workflow.approvals import resolve_for_pipelines

logger: Final = logging.getLogger(__name__)

ClientFactory = Callable[..., AWSClientWrapper]


class PipelineGateway(Protocol):
    """Remote operations consumed by the catalog operations."""

    async def list_pending_approvals(self) -> list[ApprovalAction]: ...

    async def submit_approval_decision(
        self, action: ApprovalAction, approved: bool, comment: str
    ) -> None: ...

    async def list_pipeline_statuses(self) -> list[PipelineSnapshot]: ...

    async def start_pipeline_execution(
        self, pipeline_name: str, revision_id: str = ""
    ) -> str | None: ...


class CodePipelineGateway:
    """CodePipeline operations bound to one profile and region.

    Example:
        >>> gateway = CodePipelineGateway(profile="prod", region="eu-west-1")
        >>> approvals = await gateway.list_pending_approvals()
        >>> await gateway.submit_approval_decision(approvals[0], True, "looks good")
    """

    def __init__(
        self,
        profile: str,
        region: str,
        source_action: str = DEFAULT_SOURCE_ACTION,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            profile: AWS profile name.
            region: AWS region name.
            source_action: Name of the source action targeted by commit ID
                overrides. Defaults to ``Source``.
            client_factory: Factory used to build a client per call. Defaults
                to :func:`create_aws_client`.

        Raises:
            ConfigurationError: If profile or region is empty.
        """
        if not profile:
            raise ConfigurationError("AWS profile is not selected", service=CODEPIPELINE_SERVICE)
        if not region:
            raise ConfigurationError("AWS region is not selected", service=CODEPIPELINE_SERVICE)
        self.profile = profile
        self.region = region
        self.source_action = source_action
        self._client_factory = client_factory or create_aws_client

    async def _client(self) -> AWSClientWrapper:
        # Session setup reads the AWS config files, so it stays off the event loop thread
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: self._client_factory(
                CODEPIPELINE_SERVICE, region=self.region, profile=self.profile
            ),
        )

    async def list_pipeline_names(self, client: AWSClientWrapper | None = None) -> list[str]:
        """List the names of every pipeline in the region.

        Args:
            client: Client to reuse within one gateway operation. Defaults to a
                fresh client.

        Returns:
            Pipeline names in the order CodePipeline lists them.
        """
        client = client or await self._client()
        names: list[str] = []
        kwargs: dict[str, Any] = {}
        while True:
            response = await client.call("list_pipelines", **kwargs)
            names.extend(p["name"] for p in response.get("pipelines", []) if p.get("name"))
            next_token = response.get("nextToken")
            if not next_token:
                break
            kwargs["nextToken"] = next_token
        logger.debug(f"Found {len(names)} pipelines in {self.region}")
        return names

    async def list_pending_approvals(self) -> list[ApprovalAction]:
        """List every manual approval currently awaiting a decision.

        Returns:
            Pending approvals grouped per pipeline in listing order.

        Raises:
            AWSError: If any CodePipeline call fails.
        """
        client = await self._client()
        triples: list[tuple[str, list[StageDeclaration], list[StageState]]] = []
        for name in await self.list_pipeline_names(client):
            pipeline = await client.call("get_pipeline", name=name)
            state = await client.call("get_pipeline_state", name=name)
            triples.append(
                (
                    name,
                    parse_stage_declarations(pipeline.get("pipeline", {})),
                    parse_stage_states(state),
                )
            )

        approvals = resolve_for_pipelines(triples)
        logger.info(f"Resolved {len(approvals)} pending approvals across {len(triples)} pipelines")
        return approvals

    async def submit_approval_decision(
        self, action: ApprovalAction, approved: bool, comment: str
    ) -> None:
        """Approve or reject a pending approval.

        Args:
            action: The approval to decide, carrying its token.
            approved: True to approve, False to reject.
            comment: Summary recorded with the decision.

        Raises:
            InvalidApprovalTokenError: If the token is stale.
            AWSError: If the call fails for another reason.
        """
        status = APPROVED_STATUS if approved else REJECTED_STATUS
        client = await self._client()
        await client.call(
            "put_approval_result",
            pipelineName=action.pipeline_name,
            stageName=action.stage_name,
            actionName=action.action_name,
            result={"summary": comment, "status": status},
            token=action.token,
        )
        logger.info(
            f"Submitted {status} for {action.pipeline_name}/{action.stage_name}/"
            f"{action.action_name}"
        )

    async def list_pipeline_statuses(self) -> list[PipelineSnapshot]:
        """Build a status snapshot of every pipeline.

        Returns:
            One snapshot per pipeline in listing order.

        Raises:
            AWSError: If any CodePipeline call fails.
        """
        client = await self._client()
        snapshots: list[PipelineSnapshot] = []
        for name in await self.list_pipeline_names(client):
            state = await client.call("get_pipeline_state", name=name)
            snapshots.append(build_pipeline_snapshot(name, state))
        return snapshots

    async def start_pipeline_execution(
        self, pipeline_name: str, revision_id: str = ""
    ) -> str | None:
        """Start a pipeline execution.

        Args:
            pipeline_name: Pipeline to start.
            revision_id: Commit ID to build instead of the latest source
                revision. Empty means latest. Defaults to "".

        Returns:
            The pipeline execution ID reported by CodePipeline.

        Raises:
            AWSError: If the call fails.
        """
        kwargs: dict[str, Any] = {"name": pipeline_name}
        revision_id = revision_id.strip()
        if revision_id:
            kwargs["sourceRevisions"] = [
                {
                    "actionName": self.source_action,
                    "revisionType": COMMIT_ID_REVISION_TYPE,
                    "revisionValue": revision_id,
                }
            ]

        client = await self._client()
        response = await client.call("start_pipeline_execution", **kwargs)
        execution_id = response.get("pipelineExecutionId")
        logger.info(
            f"Started {pipeline_name} at {revision_id or 'latest revision'}: {execution_id}"
        )
        return execution_id


def parse_stage_declarations(pipeline: dict[str, Any]) -> list[StageDeclaration]:
    """Parse the ``pipeline`` member of a ``get_pipeline`` response.

    Stages or actions without a name are skipped.
    """
    stages: list[StageDeclaration] = []
    for stage in pipeline.get("stages", []):
        if not stage.get("name"):
            continue
        actions = tuple(
            ActionDeclaration(
                name=action["name"],
                category=action.get("actionTypeId", {}).get("category", ""),
            )
            for action in stage.get("actions", [])
            if action.get("name")
        )
        stages.append(StageDeclaration(name=stage["name"], actions=actions))
    return stages


def parse_stage_states(response: dict[str, Any]) -> list[StageState]:
    """Parse a ``get_pipeline_state`` response.

    Stages or actions without a name are skipped.
    """
    states: list[StageState] = []
    for stage in response.get("stageStates", []):
        if not stage.get("stageName"):
            continue
        action_states = []
        for action in stage.get("actionStates", []):
            if not action.get("actionName"):
                continue
            latest = action.get("latestExecution") or {}
            action_states.append(
                ActionState(
                    action_name=action["actionName"],
                    status=latest.get("status"),
                    token=latest.get("token"),
                    last_status_change=latest.get("lastStatusChange"),
                )
            )
        states.append(
            StageState(
                stage_name=stage["stageName"],
                status=(stage.get("latestExecution") or {}).get("status"),
                action_states=tuple(action_states),
            )
        )
    return states


def build_pipeline_snapshot(name: str, state: dict[str, Any]) -> PipelineSnapshot:
    """Build a display snapshot from a ``get_pipeline_state`` response.

    Args:
        name: Pipeline name.
        state: Raw ``get_pipeline_state`` response.

    Returns:
        Snapshot with one StageStatus per stage in run-state order.
    """
    stages = tuple(
        StageStatus(
            name=stage.stage_name,
            status=stage.status or UNKNOWN_STATUS,
            last_updated=format_last_updated(stage.action_states),
        )
        for stage in parse_stage_states(state)
    )
    return PipelineSnapshot(name=name, stages=stages)


def format_last_updated(action_states: tuple[ActionState, ...]) -> str:
    """Format the most recent action status change of a stage in UTC.

    Returns:
        e.g. ``"Mar 04 17:02:11 UTC"``, or ``N/A`` when no action has run.
    """
    changes = [s.last_status_change for s in action_states if s.last_status_change is not None]
    if not changes:
        return NOT_AVAILABLE
    latest = max(_as_utc(change) for change in changes)
    return latest.strftime(LAST_UPDATED_FORMAT)


def _as_utc(value: datetime) -> datetime:
    # boto3 returns aware datetimes; naive values are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
