"""Rendering of the navigation state with rich.

The renderer is a pure function of the state: it never changes it and
holds no state of its own.
"""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from cloudgate.constants import (
    HELP_ERROR,
    HELP_LIST,
    HELP_LOADING,
    HELP_TEXT,
    MSG_ERROR_PREFIX,
)
from cloudgate.ui.navigation import input_placeholder, view_title
from cloudgate.ui.state import InputMode, NavigationState

ACCENT = "green"
CURSOR_STYLE = "bold black on green"


def render(state: NavigationState) -> RenderableType:
    """Render the whole screen for a state."""
    parts: list[RenderableType] = [breadcrumb(state), Text()]

    if state.rows:
        parts.append(rows_table(state))

    if state.input_mode is InputMode.FREE_TEXT:
        parts.extend([Text(), text_input(state)])

    if state.is_loading:
        parts.extend([Text(), Spinner("dots", text=Text(state.loading_label, style=ACCENT))])

    if state.error is not None:
        parts.extend([Text(), Text(f"{MSG_ERROR_PREFIX}{state.error}", style="bold red")])
    elif state.success is not None:
        parts.extend([Text(), Text(state.success, style="bold green")])

    parts.extend([Text(), Text(help_line(state), style="dim")])

    return Panel(
        Group(*parts),
        title=Text(view_title(state), style="bold"),
        title_align="left",
        border_style=ACCENT,
    )


def breadcrumb(state: NavigationState) -> Text:
    """Selection trail as ``AWS > profile > region > ...``."""
    steps = [
        state.provider.entry.name if state.provider else "",
        state.profile,
        state.region,
        state.service.entry.name if state.service else "",
        state.category.entry.name if state.category else "",
        state.operation.name if state.operation else "",
    ]
    trail = " > ".join(step for step in steps if step)
    return Text(trail or "cloudgate", style="bold cyan")


def rows_table(state: NavigationState) -> Table:
    """Rows of the current view with the cursor row highlighted."""
    table = Table(show_edge=False, header_style=f"bold {ACCENT}", expand=True)
    for column in state.columns:
        table.add_column(column)

    # The cursor is hidden while typing so the focus is on the input line
    show_cursor = state.input_mode is InputMode.LIST_SELECT and state.error is None
    for index, row in enumerate(state.rows):
        style = CURSOR_STYLE if show_cursor and index == state.cursor else None
        table.add_row(*(Text(cell) for cell in row), style=style)
    return table


def text_input(state: NavigationState) -> Text:
    """Free-text input line, with the placeholder while empty."""
    line = Text("> ", style=f"bold {ACCENT}")
    if state.text_buffer:
        line.append(state.text_buffer)
        line.append("█", style=ACCENT)
    else:
        line.append("█", style=ACCENT)
        line.append(input_placeholder(state), style="dim italic")
    return line


def help_line(state: NavigationState) -> str:
    """Key help for the current mode."""
    if state.is_loading:
        return HELP_LOADING
    if state.error is not None:
        return HELP_ERROR
    if state.input_mode is InputMode.FREE_TEXT:
        return HELP_TEXT
    return HELP_LIST
