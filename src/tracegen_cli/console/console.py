"""Rich console of the tracegen commands.

Everything is printed on stderr, stdout only ever carries generated Go
source. Colors come from the Flexoki palette, https://stephango.com/flexoki
"""

import os
from contextlib import contextmanager
from typing import Optional

from rich.console import Console as RichConsole
from rich.text import Text
from rich.theme import Theme

from tracegen_core.models.config import TracegenConfig

PALETTES = {
    # 400 series
    'dark': {
        'text': '#E6E4D9',
        'muted': '#B7B5AC',
        'green': '#879A39',
        'cyan': '#3AA99F',
        'orange': '#DA702C',
        'red': '#D14D41',
        'yellow': '#D0A215',
    },
    # 600 series
    'light': {
        'text': '#100F0F',
        'muted': '#6F6E69',
        'green': '#66800B',
        'cyan': '#24837B',
        'orange': '#BC5215',
        'red': '#AF3029',
        'yellow': '#AD8301',
    },
}

ICONS = {
    'success': '✓',
    'warning': '⚠',
    'error': '✗',
}


def detect_theme(config: Optional[TracegenConfig] = None) -> str:
    """Pick the palette matching the terminal background.

    The configured theme wins, then the background color advertised in
    `COLORFGBG` ("foreground;background", 7 and 15 are light). Defaults to dark.
    """
    if config is not None and config.theme is not None:
        return config.theme

    background = os.environ.get('COLORFGBG', '').split(';')[-1]
    if background.isdigit() and int(background) in (7, 15):
        return 'light'

    return 'dark'


class Console:
    """Themed stderr console."""

    def __init__(
        self, theme_mode: Optional[str] = None, config: Optional[TracegenConfig] = None
    ):
        if theme_mode is None:
            theme_mode = detect_theme(config or TracegenConfig())

        self.theme_mode = theme_mode
        self.palette = PALETTES[theme_mode]

        self.theme = Theme(
            {
                'muted': self.palette['muted'],
                'success': f'bold {self.palette["green"]}',
                'info': self.palette['cyan'],
                'warning': f'bold {self.palette["orange"]}',
                'error': f'bold {self.palette["red"]}',
                'highlight': f'bold {self.palette["yellow"]}',
                'status.spinner': self.palette['muted'],
            }
        )

        self.console = RichConsole(theme=self.theme, stderr=True, highlight=False)

    def print(self, *objects, style: Optional[str] = None, **kwargs):
        self.console.print(*objects, style=style, **kwargs)

    def message(self, kind: str, message: str):
        """Print the message preceded by the icon of its kind."""
        self.print(Text.assemble((ICONS[kind], kind), ' ', message))

    def success(self, message: str):
        self.message('success', message)

    def warning(self, message: str):
        self.message('warning', message)

    def error(self, message: str):
        self.message('error', message)

    def muted(self, message: str):
        self.print(message, style='muted')

    def highlight(self, message: str):
        self.print(message, style='highlight')

    @contextmanager
    def spinner(self, message: str):
        with self.console.status(Text(message, style='info'), spinner='dots'):
            yield
