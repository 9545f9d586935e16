"""
Funciones que imprimen directamente a la consola.
"""

from canalpluvial.cli.theme.palette import get_console, get_palette
from canalpluvial.cli.theme.styled import (
    create_summary_panel,
    styled_error,
    styled_header,
    styled_label,
    styled_note,
    styled_success,
    styled_warning,
)


def print_separator(char: str = "-", width: int = 50) -> None:
    get_console().print(char * width, style=get_palette().border)


def print_header(text: str, subtitle: str = None) -> None:
    get_console().print(styled_header(text, subtitle))


def print_field(label: str, value, unit: str = None, indent: int = 2) -> None:
    """Imprime un campo con valor."""
    get_console().print(" " * indent, styled_label(label, value, unit))


def print_success(text: str) -> None:
    get_console().print(styled_success(text))


def print_warning(text: str) -> None:
    get_console().print(styled_warning(text))


def print_error(text: str) -> None:
    get_console().print(styled_error(text))


def print_note(text: str) -> None:
    get_console().print(styled_note(text))


def print_summary_box(title: str, items: list[tuple[str, str, str]]) -> None:
    """
    Imprime un cuadro de resumen.

    Args:
        title: Título del cuadro
        items: Lista de tuplas (label, value, unit)
    """
    lines = [styled_label(label, value, unit or None) for label, value, unit in items]
    get_console().print(create_summary_panel(title, lines))
