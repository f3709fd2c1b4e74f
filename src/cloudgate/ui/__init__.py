"""Terminal interface for Cloudgate.

This package provides:
- The immutable navigation state and the pure key/message state machine
- The async command dispatcher that runs catalog operations off the loop
- Key normalization for prompt_toolkit input and rich rendering
- The interaction loop tying them together
"""

from cloudgate.ui.app import InteractionLoop, run_tui
from cloudgate.ui.dispatcher import CommandDispatcher
from cloudgate.ui.keys import to_key_events
from cloudgate.ui.navigation import handle_key, handle_message, initial_state
from cloudgate.ui.render import render
from cloudgate.ui.state import (
    Command,
    InputMode,
    NavigationContext,
    NavigationState,
    Transition,
    View,
)

__all__ = [
    "Command",
    "CommandDispatcher",
    "InputMode",
    "InteractionLoop",
    "NavigationContext",
    "NavigationState",
    "Transition",
    "View",
    "handle_key",
    "handle_message",
    "initial_state",
    "render",
    "run_tui",
    "to_key_events",
]
