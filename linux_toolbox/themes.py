"""Colour themes, cycled with Tab and persisted between runs."""

from typing import Dict, List

DEFAULT_THEME = "default"

THEMES: Dict[str, Dict[str, str]] = {
    "default": {
        "name": "Default",
        "primary": "#00b4d8",
        "accent": "#00ffff",
        "bg": "#101010",
        "surface": "#1c1c1c",
        "text": "#ffffff",
    },
    "dark": {
        "name": "Dark",
        "primary": "#808000",
        "accent": "#ffff00",
        "bg": "#000000",
        "surface": "#121212",
        "text": "#ffffff",
    },
    "light": {
        "name": "Light",
        "primary": "#4169e1",
        "accent": "#0000ff",
        "bg": "#ffffff",
        "surface": "#f0f0f0",
        "text": "#000000",
    },
    "ocean": {
        "name": "Ocean",
        "primary": "#0096c7",
        "accent": "#00ffff",
        "bg": "#006994",
        "surface": "#005577",
        "text": "#ffffff",
    },
    "forest": {
        "name": "Forest",
        "primary": "#2e8b57",
        "accent": "#ffd700",
        "bg": "#228b22",
        "surface": "#1b6e1b",
        "text": "#ffffff",
    },
    "sunset": {
        "name": "Sunset",
        "primary": "#ff7f50",
        "accent": "#ffd700",
        "bg": "#ff6347",
        "surface": "#d9503a",
        "text": "#ffffff",
    },
    "neon": {
        "name": "Neon",
        "primary": "#ff00ff",
        "accent": "#00ff00",
        "bg": "#000000",
        "surface": "#0d0d0d",
        "text": "#ff00ff",
    },
    "matrix": {
        "name": "Matrix",
        "primary": "#00c800",
        "accent": "#00ff00",
        "bg": "#000000",
        "surface": "#001100",
        "text": "#00ff00",
    },
    "nordic": {
        "name": "Nordic",
        "primary": "#5e81ac",
        "accent": "#88c0d0",
        "bg": "#2e3440",
        "surface": "#3b4252",
        "text": "#d8dee9",
    },
    "dracula": {
        "name": "Dracula",
        "primary": "#bd93f9",
        "accent": "#ff79c6",
        "bg": "#282a36",
        "surface": "#44475a",
        "text": "#f8f8f2",
    },
    "solarized": {
        "name": "Solarized",
        "primary": "#268bd2",
        "accent": "#b58900",
        "bg": "#002b36",
        "surface": "#073642",
        "text": "#839496",
    },
    "monokai": {
        "name": "Monokai",
        "primary": "#a6e22e",
        "accent": "#f92672",
        "bg": "#272822",
        "surface": "#383830",
        "text": "#f8f8f2",
    },
    "gruvbox": {
        "name": "Gruvbox",
        "primary": "#d79921",
        "accent": "#fb4934",
        "bg": "#282828",
        "surface": "#3c3836",
        "text": "#ebdbb2",
    },
    "tokyo": {
        "name": "Tokyo Night",
        "primary": "#7aa2f7",
        "accent": "#bb9af7",
        "bg": "#1a1b26",
        "surface": "#24283b",
        "text": "#a9b1d6",
    },
    "synthwave": {
        "name": "Synthwave",
        "primary": "#f97e72",
        "accent": "#ff52c5",
        "bg": "#271740",
        "surface": "#34294f",
        "text": "#ffecff",
    },
    "coffee": {
        "name": "Coffee",
        "primary": "#a0522d",
        "accent": "#bf8040",
        "bg": "#3b2314",
        "surface": "#4a2e1c",
        "text": "#edddb9",
    },
}

THEME_ORDER: List[str] = list(THEMES.keys())


def get_theme(theme_id: str) -> Dict[str, str]:
    """Return the colours of a theme, falling back to the default theme."""
    return THEMES.get(theme_id, THEMES[DEFAULT_THEME])


def next_theme(theme_id: str) -> str:
    """Return the theme after theme_id, wrapping at the end of THEME_ORDER."""
    if theme_id not in THEMES:
        return DEFAULT_THEME
    index = THEME_ORDER.index(theme_id)
    return THEME_ORDER[(index + 1) % len(THEME_ORDER)]


def theme_display_name(theme_id: str) -> str:
    return get_theme(theme_id)["name"]
