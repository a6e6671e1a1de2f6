#!/usr/bin/env python3
"""
Linux Toolbox - categorized script launcher
Features: Categories, Search, Favorites, Themes, System info, Update check
"""

import argparse
import logging
import logging.handlers
import sys
from functools import partial
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Static

from linux_toolbox import __version__
from linux_toolbox.activity import ActivityLog
from linux_toolbox.catalog import Catalog, CatalogError, load_catalog
from linux_toolbox.navigation import (
    LIST_SCREENS,
    ChangeTheme,
    Command,
    NavigationState,
    Quit,
    RunScript,
    Screen,
)
from linux_toolbox.preferences import (
    DEBUG_LOG_FILENAME,
    LOG_FILENAME,
    THEME_FILENAME,
    PreferenceStore,
    get_state_dir,
)
from linux_toolbox.progress import PROGRESS_INTERVAL, ProgressIndicator
from linux_toolbox.quotes import random_quote
from linux_toolbox.runner import ScriptRunner
from linux_toolbox.sysinfo import get_system_info
from linux_toolbox.themes import get_theme, theme_display_name
from linux_toolbox.updates import UpdateCheckError, check_for_updates

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config.toml"
STATUS_LIFETIME = 4.0

HELP_LINES = [
    "Linux Toolbox Help",
    "",
    "Navigation:",
    "↑↓ or Mouse Wheel: Move selection",
    "Mouse Click or Enter: Select/Run program",
    "Esc/Backspace: Go back",
    "",
    "Shortcuts:",
    "/: Search",
    "Tab: Change color scheme",
    "h: Toggle help screen",
    "q: Quit",
    "1-9: Quick select category",
    "Home: Back to top",
    "f: Toggle favorite",
    "i: View system information",
]

SCREEN_HINTS = {
    Screen.CATEGORIES: "Mouse/↑↓: Move | Enter/Click: Select | /: Search | Tab: Theme | h: Help | i: Info | q: Quit | 1-9: Quick Select",
    Screen.PROGRAMS: "Mouse/↑↓: Move | Enter/Click: Run | Esc: Back | f: Favorite | /: Search | h: Help | i: Info | q: Quit",
    Screen.SEARCH: "Type to search | ↑↓: Move | Enter/Click: Run | Esc: Cancel | Tab: Theme",
    Screen.HELP: "Press 'h' or Esc to return",
    Screen.SYSTEM_INFO: "Press 'i' or Esc to return",
}


class EntryRow(Static):
    """One clickable line of a list panel."""

    def __init__(self, text: str, panel: str, index: int):
        super().__init__(text, markup=False, classes="entry-row")
        self.panel = panel
        self.index = index

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.app.handle_entry_click(self.panel, self.index)


class ListPanel(VerticalScroll):
    """Bordered list that reports wheel movement to the app instead of scrolling."""

    can_focus = False

    def __init__(self, title: str, panel_id: str):
        super().__init__(id=panel_id, classes="list-panel")
        self.border_title = title

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.prevent_default()
        event.stop()
        self.app.handle_scroll(1)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.prevent_default()
        event.stop()
        self.app.handle_scroll(-1)


class LinuxToolbox(App):
    """Linux Toolbox - run categorized scripts from one menu."""

    CSS = """
    Screen {
        background: #101010;
    }

    .bar {
        height: 3;
        border: round #00b4d8;
        background: #1c1c1c;
        color: #ffffff;
        content-align: center middle;
        text-align: center;
        padding: 0 1;
    }

    #search {
        text-align: left;
        content-align: left middle;
    }

    #main-panels {
        height: 1fr;
        min-height: 10;
    }

    .list-panel {
        border: round #00b4d8;
        background: #1c1c1c;
        color: #ffffff;
        padding: 0 1;
    }

    #categories {
        width: 2fr;
    }

    #programs {
        width: 3fr;
    }

    .entry-row {
        height: 1;
        padding: 0 1;
    }

    .entry-row.-selected {
        background: #00ffff;
        color: #101010;
        text-style: bold;
    }

    .overlay-panel {
        height: 1fr;
        border: round #00ffff;
        background: #1c1c1c;
        color: #ffffff;
        padding: 1 2;
        display: none;
    }

    #loading-panel {
        content-align: center middle;
        text-align: center;
    }

    #quote {
        text-style: italic;
    }
    """

    TITLE = "Linux Toolbox"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("tab", "cycle_theme", "Theme", show=False, priority=True),
        Binding("escape", "navigate('escape')", "Back", show=False, priority=True),
    ]

    def __init__(
        self,
        catalog: Catalog,
        preferences: Optional[PreferenceStore] = None,
        activity: Optional[ActivityLog] = None,
        runner: Optional[ScriptRunner] = None,
        system_info: Optional[str] = None,
        update_checker: Callable[[str], Optional[str]] = check_for_updates,
        check_updates: bool = True,
        progress_interval: float = PROGRESS_INTERVAL,
    ):
        super().__init__()
        state_dir = get_state_dir()
        self.preferences = preferences or PreferenceStore(state_dir / THEME_FILENAME)
        self.activity = activity or ActivityLog(state_dir / LOG_FILENAME)
        self.runner = runner or ScriptRunner(suspend=self.suspend)
        self.system_info = system_info if system_info is not None else get_system_info()
        self.update_checker = update_checker
        self.check_updates = check_updates
        self.progress_interval = progress_interval
        self.update_available: Optional[str] = None
        self.current_quote = random_quote()
        self.progress: Optional[ProgressIndicator] = None
        self._status_timer = None
        self._exit_recorded = False
        self._rows: Dict[str, List[EntryRow]] = {"categories": [], "programs": []}
        self.state = NavigationState(catalog, theme=self.preferences.load_theme())

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        yield Static("", id="title", classes="bar", markup=False)
        search = Static("", id="search", classes="bar", markup=False)
        search.border_title = "Search"
        yield search
        with Horizontal(id="main-panels"):
            yield ListPanel("Categories", "categories")
            yield ListPanel("Programs", "programs")
        help_panel = Static("\n".join(HELP_LINES), id="help-panel", classes="overlay-panel", markup=False)
        help_panel.border_title = "Help"
        yield help_panel
        info_panel = Static("", id="sysinfo-panel", classes="overlay-panel", markup=False)
        info_panel.border_title = "System Info"
        yield info_panel
        yield Static("", id="loading-panel", classes="overlay-panel", markup=False)
        os_line = Static("", id="os-info", classes="bar", markup=False)
        os_line.border_title = "OS"
        yield os_line
        yield Static("", id="status", classes="bar", markup=False)
        yield Static("", id="quote", classes="bar", markup=False)

    def on_mount(self) -> None:
        """Record the session and start the update check."""
        self.activity.record("Program started")
        if self.check_updates:
            self._start_progress()
            self.run_worker(self._update_worker, thread=True, exclusive=True, exit_on_error=False)
        self.apply_theme()

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------

    def _start_progress(self) -> None:
        self.state.loading = True
        self.progress = ProgressIndicator(interval=self.progress_interval, on_step=self._on_progress_step)

    def _update_worker(self) -> None:
        latest: Optional[str] = None
        error: Optional[UpdateCheckError] = None
        try:
            with self.progress:
                latest = self.update_checker(__version__)
        except UpdateCheckError as e:
            error = e
        finally:
            self.call_from_thread(self._finish_update_check, latest, error)

    def _on_progress_step(self, step: int) -> None:
        self.call_from_thread(self.refresh_view)

    def _finish_update_check(self, latest: Optional[str], error: Optional[UpdateCheckError] = None) -> None:
        self.update_available = latest
        if error is not None:
            self.activity.record(f"Error checking for updates: {error}")
        elif latest:
            logger.info("Update available: %s", latest)
        self.state.loading = False
        self.progress = None
        self.refresh_view()

    def _script_worker(self, command: RunScript) -> None:
        try:
            self.progress.start()
            self.progress.join()
        finally:
            self.call_from_thread(self._launch_script, command)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key(self, event: events.Key) -> None:
        """Feed every key press to the navigation state."""
        event.stop()
        self._dispatch(lambda: self.state.handle_key(event.key, event.character))

    def action_navigate(self, key: str) -> None:
        """Send a named key that other bindings could otherwise claim."""
        self._dispatch(lambda: self.state.handle_key(key))

    def action_cycle_theme(self) -> None:
        """Advance to the next colour theme."""
        self._dispatch(lambda: self.state.handle_key("tab"))

    def action_quit(self) -> None:
        """Route the built-in quit key through the confirmation prompt."""
        self._dispatch(self.state.request_quit)

    def handle_entry_click(self, panel: str, index: int) -> None:
        if panel == "categories":
            self._dispatch(lambda: self.state.click_category(index))
        else:
            self._dispatch(lambda: self.state.click_program(index))

    def handle_scroll(self, delta: int) -> None:
        self._dispatch(lambda: self.state.scroll(delta))

    def _dispatch(self, event_handler: Callable[[], Optional[Command]]) -> None:
        previous_screen = self.state.screen
        previous_status = self.state.status_message
        command = event_handler()
        if command is not None:
            self.execute_command(command)
        if self.state.screen is not previous_screen:
            self.current_quote = random_quote()
        if self.state.status_message != previous_status and self.state.status_message:
            self._schedule_status_expiry()
        self.refresh_view()

    def execute_command(self, command: Command) -> None:
        """Carry out a command returned by the navigation state."""
        if isinstance(command, Quit):
            self.record_exit()
            self.exit()
        elif isinstance(command, ChangeTheme):
            if not self.preferences.save_theme(command.theme):
                self.state.status_message = "Could not save theme preference"
                self.activity.record(f"Failed to save color scheme: {command.theme} ({self.preferences.path})")
            self.apply_theme()
        elif isinstance(command, RunScript):
            self.run_script(command)

    def record_exit(self) -> None:
        """Write the end-of-session entry once, however the app stops."""
        if not self._exit_recorded:
            self._exit_recorded = True
            self.activity.record("Program exited")

    def run_script(self, command: RunScript) -> None:
        """Animate the loading view, then hand the terminal to the script."""
        self._start_progress()
        self.run_worker(
            partial(self._script_worker, command),
            group="script",
            thread=True,
            exit_on_error=False,
        )

    def _launch_script(self, command: RunScript) -> None:
        try:
            outcome = self.runner.run(command.script)
        finally:
            self.state.loading = False
            self.progress = None
        if outcome.succeeded:
            self.activity.record(f"Script executed: {command.script} (exit status {outcome.exit_code})")
        else:
            self.activity.record(f"Error running script: {command.script} - {outcome.message}")
        self.state.status_message = outcome.message
        self._schedule_status_expiry()
        self.refresh_view()
        self.refresh(layout=True)

    def _schedule_status_expiry(self) -> None:
        if self._status_timer is not None:
            self._status_timer.stop()
        message = self.state.status_message

        def expire() -> None:
            if self.state.status_message == message:
                self.state.status_message = None
                self.refresh_view()

        self._status_timer = self.set_timer(STATUS_LIFETIME, expire)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def title_text(self) -> str:
        title = f"Linux Toolbox v{__version__} by Tech Logicals | {date.today():%Y-%m-%d} | Theme: {theme_display_name(self.state.theme)}"
        if self.update_available:
            title += f" | Update v{self.update_available} available"
        return title

    def loading_text(self) -> str:
        step = self.progress.step if self.progress else 0
        return "Loading " + "." * step

    def refresh_view(self) -> None:
        """Bring every widget in line with the navigation state."""
        state = self.state
        self.query_one("#title", Static).update(self.title_text())
        self.query_one("#search", Static).update(state.query)

        showing_lists = state.screen in LIST_SCREENS and not state.loading
        self.query_one("#main-panels").display = showing_lists
        self.query_one("#help-panel").display = state.screen is Screen.HELP and not state.loading
        self.query_one("#sysinfo-panel").display = state.screen is Screen.SYSTEM_INFO and not state.loading
        loading_panel = self.query_one("#loading-panel", Static)
        loading_panel.display = state.loading
        if state.loading:
            loading_panel.update(self.loading_text())

        self.query_one("#sysinfo-panel", Static).update(self.system_info)
        self.query_one("#os-info", Static).update(self.system_info.splitlines()[0] if self.system_info else "Unknown OS")
        self.query_one("#status", Static).update(state.status_line or SCREEN_HINTS[state.screen])
        self.query_one("#quote", Static).update(self.current_quote)

        if showing_lists:
            self._fill_panel(
                "categories",
                [f"• {category.name}" for category in state.catalog.categories],
                state.selected_category,
            )
            if state.screen is Screen.SEARCH:
                lines = [f"▶ {name}  ({category})" for category, name, _ in state.matches]
                selected = state.selected_match
            else:
                lines = [
                    f"{'★' if program.is_favorite else '▶'} {program.name}"
                    for program in state.current_programs
                ]
                selected = state.selected_program if state.screen is Screen.PROGRAMS else None
            self._fill_panel("programs", lines, selected)

    def _fill_panel(self, panel_id: str, lines: List[str], selected: Optional[int]) -> None:
        panel = self.query_one(f"#{panel_id}", ListPanel)
        rows = self._rows[panel_id]
        if len(rows) != len(lines):
            panel.remove_children()
            rows = [EntryRow(text, panel_id, index) for index, text in enumerate(lines)]
            self._rows[panel_id] = rows
            if rows:
                panel.mount(*rows)
        else:
            for row, text in zip(rows, lines):
                row.update(text)
        for index, row in enumerate(rows):
            row.set_class(index == selected, "-selected")
            self.apply_row_colors(row, index == selected)
        if selected is not None and 0 <= selected < len(rows):
            rows[selected].scroll_visible(animate=False)

    def apply_row_colors(self, row: EntryRow, selected: bool) -> None:
        """Apply either highlight or plain theme colours to a row."""
        theme = get_theme(self.state.theme)
        if selected:
            row.styles.background = theme["accent"]
            row.styles.color = theme["bg"]
        else:
            row.styles.background = None
            row.styles.color = None

    def apply_theme(self) -> None:
        """Apply the active theme colours to the whole application."""
        theme = get_theme(self.state.theme)
        self.screen.styles.background = theme["bg"]
        for widget in self.query(".bar, .list-panel, .overlay-panel"):
            widget.styles.background = theme["surface"]
            widget.styles.color = theme["text"]
            widget.styles.border = ("round", theme["primary"])
        for widget in self.query(".overlay-panel"):
            widget.styles.border = ("round", theme["accent"])
        self.refresh_view()


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="linux-toolbox",
        description="Browse and run categorized scripts from a terminal menu.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG),
        help=f"catalog file (default: ./{DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--no-update-check",
        action="store_true",
        help="do not query GitHub for a newer release at startup",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="write diagnostic logging to debug.log in the state directory",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def configure_logging(debug: bool, state_dir: Path) -> None:
    """Configure diagnostic logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # The TUI owns the terminal; keep stray records off stderr
        logging.root.setLevel(logging.CRITICAL + 1)
        return

    state_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        state_dir / DEBUG_LOG_FILENAME,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = _parse_args(argv)
    state_dir = get_state_dir()
    configure_logging(args.debug, state_dir)

    try:
        catalog = load_catalog(args.config)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    activity = ActivityLog(state_dir / LOG_FILENAME)
    app = LinuxToolbox(
        catalog,
        preferences=PreferenceStore(state_dir / THEME_FILENAME),
        activity=activity,
        check_updates=not args.no_update_check,
    )
    try:
        app.run()
    finally:
        app.record_exit()
        activity.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
