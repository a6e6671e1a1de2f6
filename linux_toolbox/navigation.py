"""Navigation state machine for the launcher.

Every key, click and scroll event is fed to a :class:`NavigationState`,
which updates its own fields and may hand back a command for the caller
to carry out (run a script, persist a theme, quit). Nothing here touches
the terminal, so the whole protocol can be driven from tests.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from linux_toolbox.catalog import Catalog, Program, SearchMatch
from linux_toolbox.themes import DEFAULT_THEME, next_theme

logger = logging.getLogger(__name__)

QUIT_PROMPT = "Press 'y' to confirm quit, any other key to cancel"
QUIT_CANCELLED = "Quit cancelled"


class Screen(Enum):
    CATEGORIES = "categories"
    PROGRAMS = "programs"
    SEARCH = "search"
    HELP = "help"
    SYSTEM_INFO = "system_info"


LIST_SCREENS = (Screen.CATEGORIES, Screen.PROGRAMS, Screen.SEARCH)
QUICK_SELECT_KEYS = tuple("123456789")


@dataclass(frozen=True)
class RunScript:
    script: Path
    name: str


@dataclass(frozen=True)
class ChangeTheme:
    theme: str


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[RunScript, ChangeTheme, Quit]


def _clamp(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(length - 1, index))


@dataclass
class NavigationState:
    """Everything the UI shows, plus the rules for changing it."""

    catalog: Catalog
    theme: str = DEFAULT_THEME
    screen: Screen = Screen.CATEGORIES
    selected_category: int = 0
    selected_program: int = 0
    query: str = ""
    matches: List[SearchMatch] = field(default_factory=list)
    selected_match: int = 0
    status_message: Optional[str] = None
    pending_quit: bool = False
    loading: bool = False

    def __post_init__(self) -> None:
        self._screen_handlers: Dict[Screen, Callable[[str, Optional[str]], Optional[Command]]] = {
            Screen.CATEGORIES: self._categories_key,
            Screen.PROGRAMS: self._programs_key,
            Screen.HELP: self._overlay_key,
            Screen.SYSTEM_INFO: self._overlay_key,
        }

    @property
    def status_line(self) -> Optional[str]:
        """Text for the status bar; the quit prompt while a quit is pending."""
        if self.pending_quit:
            return QUIT_PROMPT
        return self.status_message

    @property
    def current_programs(self) -> List[Program]:
        return self.catalog.programs_of(self.selected_category)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, key: str, character: Optional[str] = None) -> Optional[Command]:
        """Apply one key press.

        ``key`` is the key name ("up", "enter", "escape", ...) and
        ``character`` the printable character it produced, if any.
        """
        if self.loading:
            return None
        if self._consume_pending_quit():
            return Quit() if character == "y" else None

        if key == "tab":
            self.theme = next_theme(self.theme)
            return ChangeTheme(self.theme)
        if self.screen is Screen.SEARCH:
            return self._search_key(key, character)
        if character == "q":
            return self.request_quit()
        if character == "h" and self.screen is not Screen.HELP:
            self._set_screen(Screen.HELP)
            return None
        if character == "i" and self.screen is not Screen.SYSTEM_INFO:
            self._set_screen(Screen.SYSTEM_INFO)
            return None

        return self._screen_handlers[self.screen](key, character)

    def request_quit(self) -> Optional[Command]:
        """Arm the quit confirmation; the next key decides."""
        if self.loading or self._consume_pending_quit():
            return None
        self.pending_quit = True
        return None

    def _categories_key(self, key: str, character: Optional[str]) -> Optional[Command]:
        if key in ("up", "down"):
            self._move(-1 if key == "up" else 1)
        elif key == "home":
            self.selected_category = 0
        elif key == "enter":
            self._open_category()
        elif character == "/":
            self._enter_search()
        elif character in QUICK_SELECT_KEYS:
            index = int(character) - 1
            if index < len(self.catalog):
                self.selected_category = index
        return None

    def _programs_key(self, key: str, character: Optional[str]) -> Optional[Command]:
        if key in ("up", "down"):
            self._move(-1 if key == "up" else 1)
        elif key == "home":
            self.selected_program = 0
        elif key == "enter":
            return self._program_run_request()
        elif key in ("escape", "backspace"):
            self._set_screen(Screen.CATEGORIES)
            self.selected_program = 0
        elif character == "/":
            self._enter_search()
        elif character == "f":
            self._toggle_favorite()
        return None

    def _search_key(self, key: str, character: Optional[str]) -> Optional[Command]:
        if key == "enter":
            return self._match_run_request()
        if key == "escape":
            self._set_screen(Screen.CATEGORIES)
        elif key == "backspace":
            self._set_query(self.query[:-1])
        elif key in ("up", "down"):
            self._move(-1 if key == "up" else 1)
        elif key == "home":
            self.selected_match = 0
        elif character is not None and len(character) == 1 and character.isprintable():
            self._set_query(self.query + character)
        return None

    def _overlay_key(self, key: str, character: Optional[str]) -> Optional[Command]:
        closing = "h" if self.screen is Screen.HELP else "i"
        if key == "escape" or character == closing:
            self._set_screen(Screen.CATEGORIES)
        return None

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def click_category(self, index: int) -> Optional[Command]:
        """Select a category; from the Categories screen also open it."""
        if self.loading or self._consume_pending_quit():
            return None
        if self.screen not in LIST_SCREENS or not 0 <= index < len(self.catalog):
            return None
        if index != self.selected_category:
            self.selected_category = index
            self.selected_program = 0
        if self.screen is Screen.CATEGORIES:
            self._open_category()
        return None

    def click_program(self, index: int) -> Optional[Command]:
        """Select an entry of the programs/matches panel and run it."""
        if self.loading or self._consume_pending_quit():
            return None
        if self.screen is Screen.PROGRAMS and 0 <= index < len(self.current_programs):
            self.selected_program = index
            return self._program_run_request()
        if self.screen is Screen.SEARCH and 0 <= index < len(self.matches):
            self.selected_match = index
            return self._match_run_request()
        return None

    def scroll(self, delta: int) -> None:
        """Mouse wheel: same as Up (negative) or Down (positive)."""
        if self.loading or self._consume_pending_quit():
            return
        if self.screen in LIST_SCREENS and delta:
            self._move(-1 if delta < 0 else 1)

    # ------------------------------------------------------------------
    # Transitions and helpers
    # ------------------------------------------------------------------

    def _consume_pending_quit(self) -> bool:
        if not self.pending_quit:
            return False
        self.pending_quit = False
        self.status_message = QUIT_CANCELLED
        return True

    def _set_screen(self, screen: Screen) -> None:
        if self.screen is Screen.SEARCH and screen is not Screen.SEARCH:
            self.query = ""
            self.matches = []
            self.selected_match = 0
        logger.debug("Screen %s -> %s", self.screen.value, screen.value)
        self.screen = screen

    def _move(self, delta: int) -> None:
        if self.screen is Screen.CATEGORIES:
            self.selected_category = _clamp(self.selected_category + delta, len(self.catalog))
        elif self.screen is Screen.PROGRAMS:
            self.selected_program = _clamp(self.selected_program + delta, len(self.current_programs))
        elif self.screen is Screen.SEARCH:
            self.selected_match = _clamp(self.selected_match + delta, len(self.matches))

    def _open_category(self) -> None:
        category = self.catalog.categories[self.selected_category]
        if not category.programs:
            self.status_message = f"{category.name} has no programs"
            return
        self._set_screen(Screen.PROGRAMS)
        self.selected_program = 0

    def _enter_search(self) -> None:
        self._set_screen(Screen.SEARCH)
        self._set_query("")

    def _set_query(self, query: str) -> None:
        self.query = query
        self.matches = self.catalog.search(query)
        self.selected_match = 0

    def _toggle_favorite(self) -> None:
        if not self.current_programs:
            return
        program = self.catalog.toggle_favorite(self.selected_category, self.selected_program)
        if program.is_favorite:
            self.status_message = f"Added {program.name} to favorites"
        else:
            self.status_message = f"Removed {program.name} from favorites"

    def _program_run_request(self) -> Optional[RunScript]:
        programs = self.current_programs
        if not 0 <= self.selected_program < len(programs):
            return None
        program = programs[self.selected_program]
        return RunScript(program.script, program.name)

    def _match_run_request(self) -> Optional[RunScript]:
        if not 0 <= self.selected_match < len(self.matches):
            return None
        _, name, script = self.matches[self.selected_match]
        return RunScript(script, name)
