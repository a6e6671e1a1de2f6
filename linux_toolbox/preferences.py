"""Where Linux Toolbox keeps its state, and the persisted theme preference."""

import json
import logging
import os
from pathlib import Path
from typing import Union

from linux_toolbox.themes import DEFAULT_THEME, THEMES, get_theme

logger = logging.getLogger(__name__)

STATE_DIR_ENV = "LINUX_TOOLBOX_HOME"
THEME_FILENAME = "theme.json"
LOG_FILENAME = "linuxtoolbox.log"
DEBUG_LOG_FILENAME = "debug.log"


def get_state_dir() -> Path:
    """Return the state directory (~/.local/linux-toolbox unless overridden)."""
    override = os.environ.get(STATE_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".local" / "linux-toolbox"


class PreferenceStore:
    """Persists the active theme identifier in an MC-style skin file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_theme(self) -> str:
        """Return the saved theme, or the default when absent or unreadable."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return DEFAULT_THEME
        except (OSError, ValueError) as e:
            logger.warning("Could not read theme preference %s: %s", self.path, e)
            return DEFAULT_THEME

        skin = data.get("skin") if isinstance(data, dict) else None
        if skin not in THEMES:
            logger.warning("Ignoring unknown theme %r in %s", skin, self.path)
            return DEFAULT_THEME
        return skin

    def save_theme(self, theme_id: str) -> bool:
        """Write the theme preference; returns False instead of raising on I/O errors."""
        theme_def = get_theme(theme_id)
        theme_data = {
            "skin": theme_id,
            "description": f"Linux Toolbox theme: {theme_def['name']}",
            "colors": {
                "primary": theme_def["primary"],
                "accent": theme_def["accent"],
                "background": theme_def["bg"],
                "surface": theme_def["surface"],
                "text": theme_def["text"],
            },
            "metadata": {
                "created_by": "Linux Toolbox",
                "version": "1.0",
                "compatible_with": "textual",
            },
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(theme_data, f, indent=2)
        except OSError as e:
            logger.warning("Could not save theme preference %s: %s", self.path, e)
            return False
        return True
