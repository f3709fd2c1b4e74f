"""Terminal interaction loop.

A single :class:`asyncio.Queue` carries both key events from the terminal
and result messages from the dispatcher, so the navigation state is only
ever touched by one consumer. Terminal input comes from prompt_toolkit in
raw mode and the screen is drawn with a rich ``Live`` display.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Final

from prompt_toolkit.input import Input, create_input
from rich.console import Console
from rich.live import Live

from cloudgate.aws.exceptions import ConfigurationError
from cloudgate.aws.profiles import list_available_profiles
from cloudgate.catalog.registry import build_catalog
from cloudgate.config.settings import Settings
from cloudgate.constants import DEFAULT_SOURCE_ACTION
from cloudgate.models.messages import KeyEvent, ResultMessage
from cloudgate.ui.dispatcher import CommandDispatcher, GatewayFactory
from cloudgate.ui.keys import to_key_events
from cloudgate.ui.navigation import handle_key, handle_message, initial_state
from cloudgate.ui.render import render
from cloudgate.ui.state import NavigationContext, NavigationState
from cloudgate.utils.audit_logger import get_audit_logger

logger: Final = logging.getLogger(__name__)

# Delay before a lone Escape byte is reported as the Esc key
ESCAPE_FLUSH_TIMEOUT: Final[float] = 0.05

RENDER_REFRESH_PER_SECOND: Final[int] = 12

QueueItem = KeyEvent | ResultMessage


class InteractionLoop:
    """Owns the current state and applies queued events to it in order.

    Attributes:
        ctx: Navigation context.
        state: Current navigation state.
        dispatcher: Dispatcher running the commands emitted by key handling.
    """

    def __init__(
        self,
        ctx: NavigationContext,
        state: NavigationState,
        gateway_factory: GatewayFactory | None = None,
        source_action: str = DEFAULT_SOURCE_ACTION,
        on_render: Callable[[NavigationState], None] | None = None,
    ) -> None:
        """Initialize the loop.

        Args:
            ctx: Navigation context.
            state: Initial state.
            gateway_factory: Gateway factory passed to the dispatcher.
            source_action: Source action name for commit ID overrides.
            on_render: Called with every new state. Defaults to None.
        """
        self.ctx = ctx
        self.state = state
        self.on_render = on_render
        self.queue: asyncio.Queue[QueueItem] = asyncio.Queue()
        self.dispatcher = CommandDispatcher(self.post, gateway_factory, source_action)

    def post(self, item: QueueItem) -> None:
        """Enqueue a key event or result message."""
        self.queue.put_nowait(item)

    def step(self, item: QueueItem) -> bool:
        """Apply one queued item to the state.

        Must be called with a running event loop since key events may
        dispatch a command.

        Args:
            item: Key event or result message.

        Returns:
            True when the operator asked to quit.
        """
        if isinstance(item, KeyEvent):
            transition = handle_key(self.state, item, self.ctx)
            self.state = transition.state
            if transition.quit:
                return True
            if transition.command is not None:
                self.dispatcher.dispatch(transition.command)
            return False

        self.state = handle_message(self.state, item, self.ctx)
        return False

    async def run(self) -> NavigationState:
        """Process queued items until quit.

        Returns:
            The final state.
        """
        self._render()
        try:
            while True:
                item = await self.queue.get()
                if self.step(item):
                    break
                self._render()
        finally:
            self.dispatcher.cancel_all()
        logger.info("Interaction loop finished")
        return self.state

    def _render(self) -> None:
        if self.on_render is not None:
            self.on_render(self.state)


def build_initial_state(
    settings: Settings, profiles: list[str] | None = None
) -> tuple[NavigationContext, NavigationState]:
    """Build the navigation context and the start-up state.

    Args:
        settings: Application settings.
        profiles: Profiles to offer. Defaults to the profiles found in the
            shared AWS configuration files.

    Returns:
        Tuple of the navigation context and the initial state.
    """
    if profiles is None:
        try:
            profiles = list_available_profiles()
        except ConfigurationError as e:
            logger.warning(f"Could not list AWS profiles: {e}")
            profiles = []

    catalog = build_catalog(get_audit_logger())
    ctx = NavigationContext(catalog=catalog, page_size=settings.page_size)
    return ctx, initial_state(ctx, profiles, settings.regions)


async def run_interactive(settings: Settings, console: Console | None = None) -> NavigationState:
    """Run the interface on the current terminal until the operator quits.

    Args:
        settings: Application settings.
        console: Console to draw on. Defaults to a new console.

    Returns:
        The final navigation state.
    """
    console = console or Console()
    ctx, state = build_initial_state(settings)
    loop = asyncio.get_running_loop()
    terminal_input: Input = create_input()

    with Live(
        render(state),
        console=console,
        screen=True,
        refresh_per_second=RENDER_REFRESH_PER_SECOND,
    ) as live:
        interaction = InteractionLoop(
            ctx,
            state,
            source_action=settings.default_source_action,
            on_render=lambda s: live.update(render(s)),
        )
        flush_handle: asyncio.TimerHandle | None = None

        def post_keys(key_presses: list) -> None:
            for key_press in key_presses:
                for event in to_key_events(key_press):
                    interaction.post(event)

        def flush_keys() -> None:
            post_keys(terminal_input.flush_keys())

        def keys_ready() -> None:
            nonlocal flush_handle
            post_keys(terminal_input.read_keys())
            if flush_handle is not None:
                flush_handle.cancel()
            flush_handle = loop.call_later(ESCAPE_FLUSH_TIMEOUT, flush_keys)

        with terminal_input.raw_mode(), terminal_input.attach(keys_ready):
            final_state = await interaction.run()

        if flush_handle is not None:
            flush_handle.cancel()

    return final_state


def run_tui(settings: Settings) -> int:
    """Run the interface and return the process exit code."""
    logger.info("Starting interactive session")
    asyncio.run(run_interactive(settings))
    return 0
