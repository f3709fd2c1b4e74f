"""Async command dispatcher.

Runs one command per dispatch as an asyncio task and posts exactly one
result message back to the interaction loop: the operation's result on
success, an :class:`OperationFailed` otherwise. No retries and no timeouts
are applied here.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Final

from cloudgate.aws.codepipeline import CodePipelineGateway, PipelineGateway
from cloudgate.aws.exceptions import AWSError
from cloudgate.constants import DEFAULT_SOURCE_ACTION
from cloudgate.models.messages import OperationFailed, ResultMessage
from cloudgate.ui.state import Command
from cloudgate.workflow.exceptions import InternalStateError, WorkflowError

logger: Final = logging.getLogger(__name__)

GatewayFactory = Callable[[str, str], PipelineGateway]
PostMessage = Callable[[ResultMessage], None]


class CommandDispatcher:
    """Dispatch commands off the interaction loop.

    Example:
        >>> queue: asyncio.Queue = asyncio.Queue()
        >>> dispatcher = CommandDispatcher(queue.put_nowait)
        >>> dispatcher.dispatch(transition.command)
        >>> message = await queue.get()
    """

    def __init__(
        self,
        post: PostMessage,
        gateway_factory: GatewayFactory | None = None,
        source_action: str = DEFAULT_SOURCE_ACTION,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            post: Callback receiving every result message.
            gateway_factory: Builds a gateway for a ``(profile, region)`` pair.
                Defaults to :class:`CodePipelineGateway`.
            source_action: Source action name for commit ID overrides, used
                by the default gateway factory. Defaults to ``Source``.
        """
        self._post = post
        self._gateway_factory = gateway_factory or (
            lambda profile, region: CodePipelineGateway(profile, region, source_action)
        )
        # Strong references keep running tasks from being garbage collected
        self._tasks: set[asyncio.Task[ResultMessage]] = set()

    @property
    def in_flight(self) -> int:
        """Number of commands still running."""
        return len(self._tasks)

    def dispatch(self, command: Command | None) -> asyncio.Task[ResultMessage]:
        """Schedule a command on the running loop.

        Args:
            command: Command to run. None reports an internal error.

        Returns:
            The scheduled task; its result is the posted message.
        """
        task = asyncio.create_task(self.run(command))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel_all(self) -> None:
        """Cancel every running command; their results are never posted."""
        for task in list(self._tasks):
            task.cancel()

    async def run(self, command: Command | None) -> ResultMessage:
        """Execute a command and post its result message.

        Args:
            command: Command to run.

        Returns:
            The message that was posted.
        """
        message = await self.execute(command)
        self._post(message)
        return message

    async def execute(self, command: Command | None) -> ResultMessage:
        """Execute a command and convert its outcome into a result message.

        Never raises: every failure becomes an :class:`OperationFailed`.

        Args:
            command: Command to run.

        Returns:
            The operation's result message or an OperationFailed.
        """
        if command is None:
            error = InternalStateError("No command to dispatch")
            logger.error(str(error))
            return OperationFailed.from_exception(error)

        request = command.request
        request_name = type(request).__name__
        logger.info(
            f"Executing {request_name} via {command.operation.name} "
            f"(profile={request.profile}, region={request.region})"
        )

        try:
            gateway = self._gateway_factory(request.profile, request.region)
            message = await command.operation.execute(gateway, request)
        except (AWSError, WorkflowError) as e:
            logger.warning(f"{request_name} failed: {e}")
            return OperationFailed.from_exception(e)
        except Exception as e:
            logger.exception(f"Unexpected error while executing {request_name}")
            return OperationFailed.from_exception(e)

        logger.debug(f"{request_name} completed with {type(message).__name__}")
        return message
