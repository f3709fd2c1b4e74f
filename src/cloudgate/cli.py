"""Command-line interface.

``cloudgate`` with no sub-command (or ``cloudgate ui``) opens the terminal
interface. The other sub-commands run a single CodePipeline operation
through the same catalog operations the interface uses and print the result.
"""

import argparse
import asyncio
import logging
from collections.abc import Sequence
from typing import Final, TypeVar

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cloudgate.aws.codepipeline import CodePipelineGateway
from cloudgate.aws.exceptions import AWSError, ConfigurationError
from cloudgate.catalog.base import BaseOperation, OperationKind, Service
from cloudgate.catalog.registry import build_catalog
from cloudgate.config.settings import Settings, get_settings
from cloudgate.constants import (
    MSG_APPROVED,
    MSG_EMPTY_COMMENT,
    MSG_ERROR_PREFIX,
    MSG_NO_ACCOUNT_SELECTED,
    MSG_REJECTED,
    MSG_STARTED,
)
from cloudgate.models.messages import (
    ApprovalsLoaded,
    ExecutionStarted,
    PipelineStatusLoaded,
    ResultMessage,
)
from cloudgate.models.pipelines import ApprovalAction
from cloudgate.models.requests import (
    FetchApprovalsRequest,
    FetchPipelineStatusRequest,
    StartExecutionRequest,
    SubmitApprovalRequest,
)
from cloudgate.ui.app import run_tui
from cloudgate.utils.audit_logger import get_audit_logger
from cloudgate.utils.logging import setup_logging
from cloudgate.version import __version__
from cloudgate.workflow.exceptions import (
    ApprovalNotFoundError,
    InternalStateError,
    WorkflowError,
)

logger: Final = logging.getLogger(__name__)

EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1

INTERNAL_CATEGORY_ID: Final[str] = "internal"

M = TypeVar("M", bound=ResultMessage)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every sub-command."""
    parser = argparse.ArgumentParser(
        prog="cloudgate",
        description="Browse cloud services and act on AWS CodePipeline approvals",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Open the terminal interface (default)")

    account = argparse.ArgumentParser(add_help=False)
    account.add_argument("-p", "--profile", help="AWS profile to use")
    account.add_argument("-r", "--region", help="AWS region to use")

    subparsers.add_parser("list", parents=[account], help="List pending manual approvals")

    for name, verb in (("approve", "Approve"), ("reject", "Reject")):
        decide = subparsers.add_parser(
            name, parents=[account], help=f"{verb} a manual approval action"
        )
        decide.add_argument("pipeline", help="Pipeline name")
        decide.add_argument("stage", help="Stage name")
        decide.add_argument("action", help="Approval action name")
        decide.add_argument(
            "-s", "--summary", required=True, type=_comment, help="Decision comment"
        )

    subparsers.add_parser("status", parents=[account], help="Show the stages of every pipeline")

    start = subparsers.add_parser("start", parents=[account], help="Start a pipeline execution")
    start.add_argument("pipeline", help="Pipeline name")
    start.add_argument("--revision", default="", help="Commit ID to build (default: latest)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the selected sub-command.

    Args:
        argv: Arguments without the program name. Defaults to ``sys.argv``.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    log_file = setup_logging(settings)
    command = args.command or "ui"
    logger.info(f"cloudgate {__version__} running '{command}' (log file: {log_file})")

    if command == "ui":
        return run_tui(settings)

    console = Console()
    try:
        return asyncio.run(run_command(args, settings, console))
    except (AWSError, WorkflowError) as e:
        logger.warning(f"'{command}' failed: {e}")
        console.print(Text(f"{MSG_ERROR_PREFIX}{e}", style="bold red"))
        return EXIT_FAILURE


async def run_command(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """Run one non-interactive sub-command.

    Args:
        args: Parsed arguments.
        settings: Application settings supplying profile and region defaults.
        console: Console receiving the output.

    Returns:
        Process exit code.

    Raises:
        AWSError: If the account context is incomplete or a CodePipeline
            call fails.
        WorkflowError: If the requested approval is not pending.
    """
    profile = args.profile or settings.aws_profile or ""
    region = args.region or settings.aws_region or ""
    if not profile or not region:
        raise ConfigurationError(MSG_NO_ACCOUNT_SELECTED)

    service = _codepipeline_service()
    gateway = CodePipelineGateway(profile, region, settings.default_source_action)

    match args.command:
        case "list":
            operation = _operation(service, OperationKind.PIPELINE_APPROVALS)
            result = await operation.execute(
                gateway, FetchApprovalsRequest(profile=profile, region=region)
            )
            print_approvals(console, _expect(result, ApprovalsLoaded).approvals)

        case "approve" | "reject":
            approved = args.command == "approve"
            operation = _operation(service, OperationKind.PIPELINE_APPROVALS)
            loaded = await operation.execute(
                gateway, FetchApprovalsRequest(profile=profile, region=region)
            )
            action = find_pending_approval(
                _expect(loaded, ApprovalsLoaded).approvals, args.pipeline, args.stage, args.action
            )
            await operation.execute(
                gateway,
                SubmitApprovalRequest(
                    profile=profile,
                    region=region,
                    action=action,
                    approved=approved,
                    comment=args.summary,
                ),
            )
            template = MSG_APPROVED if approved else MSG_REJECTED
            console.print(
                Text(
                    template.format(
                        pipeline=action.pipeline_name,
                        stage=action.stage_name,
                        action=action.action_name,
                    ),
                    style="green",
                )
            )

        case "status":
            operation = _operation(service, OperationKind.PIPELINE_STATUS)
            result = await operation.execute(
                gateway, FetchPipelineStatusRequest(profile=profile, region=region)
            )
            print_pipeline_statuses(console, _expect(result, PipelineStatusLoaded))

        case "start":
            operation = _operation(service, OperationKind.START_PIPELINE)
            result = await operation.execute(
                gateway,
                StartExecutionRequest(
                    profile=profile,
                    region=region,
                    pipeline_name=args.pipeline,
                    revision_id=args.revision,
                ),
            )
            started = _expect(result, ExecutionStarted)
            console.print(
                Text(MSG_STARTED.format(pipeline=started.pipeline_name), style="green")
            )
            if started.execution_id:
                console.print(Text(f"Execution ID: {started.execution_id}"))

    return EXIT_OK


def find_pending_approval(
    approvals: Sequence[ApprovalAction], pipeline_name: str, stage_name: str, action_name: str
) -> ApprovalAction:
    """Find the pending approval for a pipeline, stage and action.

    Raises:
        ApprovalNotFoundError: If none of ``approvals`` matches.
    """
    for approval in approvals:
        if (approval.pipeline_name, approval.stage_name, approval.action_name) == (
            pipeline_name,
            stage_name,
            action_name,
        ):
            return approval
    raise ApprovalNotFoundError(pipeline_name, stage_name, action_name)


def print_approvals(console: Console, approvals: Sequence[ApprovalAction]) -> None:
    """Print pending approvals as a table."""
    if not approvals:
        console.print("No pending approvals found")
        return

    table = Table(title="Pending Approvals", title_justify="left")
    table.add_column("Pipeline")
    table.add_column("Stage")
    table.add_column("Action")
    for approval in approvals:
        table.add_row(
            Text(approval.pipeline_name), Text(approval.stage_name), Text(approval.action_name)
        )
    console.print(table)


def print_pipeline_statuses(console: Console, loaded: PipelineStatusLoaded) -> None:
    """Print one stage table per pipeline."""
    if not loaded.pipelines:
        console.print("No pipelines found")
        return

    for pipeline in loaded.pipelines:
        table = Table(title=Text(pipeline.name), title_justify="left")
        table.add_column("Stage")
        table.add_column("Status")
        table.add_column("Last Updated")
        for stage in pipeline.stages:
            table.add_row(Text(stage.name), Text(stage.status), Text(stage.last_updated))
        console.print(table)


def _comment(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError(MSG_EMPTY_COMMENT)
    return value.strip()


def _codepipeline_service() -> Service:
    service = build_catalog(get_audit_logger()).find_service("aws", "codepipeline")
    if service is None:
        raise InternalStateError("CodePipeline is not registered in the catalog")
    return service


def _operation(service: Service, kind: OperationKind) -> BaseOperation:
    # Approvals go through the internal category, which is never listed in the interface
    if kind is OperationKind.PIPELINE_APPROVALS:
        operation = service.find_operation(
            kind, include_hidden=True, category_id=INTERNAL_CATEGORY_ID
        )
    else:
        operation = service.find_operation(kind)
    if operation is None:
        raise InternalStateError(f"No {kind.value} operation registered")
    return operation


def _expect(result: ResultMessage, message_type: type[M]) -> M:
    if not isinstance(result, message_type):
        raise InternalStateError(
            f"Expected {message_type.__name__}, got {type(result).__name__}"
        )
    return result
