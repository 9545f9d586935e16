"""
Paletas de colores y gestión del tema activo.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.theme import Theme


class ThemeName(Enum):
    """Temas disponibles."""
    DEFAULT = "default"
    MINIMAL = "minimal"


@dataclass
class ColorPalette:
    """Paleta de colores para un tema."""
    primary: str      # Títulos
    secondary: str    # Subtítulos y encabezados de tabla
    accent: str       # Identificadores

    success: str      # Estado OK
    warning: str      # Advertencias
    error: str        # Errores y Not OK
    info: str
    muted: str        # Texto secundario

    number: str       # Valores numéricos
    unit: str         # Unidades
    label: str        # Etiquetas
    border: str       # Bordes y separadores


THEME_DEFAULT = ColorPalette(
    primary="#5f87af",
    secondary="#87afaf",
    accent="#af87af",
    success="#87af87",
    warning="#d7af5f",
    error="#d75f5f",
    info="#5f87af",
    muted="#808080",
    number="#d7af5f",
    unit="#87af87",
    label="#afafaf",
    border="#5f5f5f",
)

# Sin colores fuertes, para terminales claras o capturas
THEME_MINIMAL = ColorPalette(
    primary="#5fafff",
    secondary="#b0b0b0",
    accent="#5fafff",
    success="#87d787",
    warning="#ffd787",
    error="#ff8787",
    info="#5fafff",
    muted="#606060",
    number="#ffffff",
    unit="#909090",
    label="#909090",
    border="#404040",
)

THEMES = {
    ThemeName.DEFAULT: THEME_DEFAULT,
    ThemeName.MINIMAL: THEME_MINIMAL,
}


class CLITheme:
    """Gestor de tema para la CLI."""

    _palette: ColorPalette = THEME_DEFAULT
    _console: Optional[Console] = None

    @classmethod
    def set_theme(cls, theme: ThemeName) -> None:
        """Establece el tema activo."""
        cls._palette = THEMES.get(theme, THEME_DEFAULT)
        cls._console = None

    @classmethod
    def get_palette(cls) -> ColorPalette:
        return cls._palette

    @classmethod
    def get_console(cls) -> Console:
        """Consola Rich con el tema aplicado (se crea una sola vez)."""
        if cls._console is None:
            p = cls._palette
            cls._console = Console(theme=Theme({
                "title": f"bold {p.primary}",
                "success": p.success,
                "warning": p.warning,
                "error": p.error,
                "muted": p.muted,
                "value": f"bold {p.number}",
            }))
        return cls._console


def get_console() -> Console:
    """Obtiene la consola Rich con tema aplicado."""
    return CLITheme.get_console()


def get_palette() -> ColorPalette:
    """Obtiene la paleta de colores actual."""
    return CLITheme.get_palette()
