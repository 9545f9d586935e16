"""
Sistema de temas para la interfaz CLI de CanalPluvial.

El paquete esta organizado en modulos:
- palette: Paletas y gestion del tema (CLITheme, ColorPalette)
- styled: Funciones que retornan objetos Rich estilizados
- printing: Funciones que imprimen directamente a consola
- tables: Funciones para crear e imprimir tablas Rich
"""

from canalpluvial.cli.theme.palette import (
    ThemeName,
    ColorPalette,
    THEME_DEFAULT,
    THEME_MINIMAL,
    THEMES,
    CLITheme,
    get_console,
    get_palette,
)

from canalpluvial.cli.theme.styled import (
    styled_header,
    styled_label,
    styled_success,
    styled_warning,
    styled_error,
    styled_note,
    styled_status,
    create_summary_panel,
)

from canalpluvial.cli.theme.printing import (
    print_separator,
    print_header,
    print_field,
    print_success,
    print_warning,
    print_error,
    print_note,
    print_summary_box,
)

from canalpluvial.cli.theme.tables import (
    create_results_table,
    print_batch_results_table,
    print_reference_tables,
    print_idf_matrix,
)

__all__ = [
    # palette
    "ThemeName",
    "ColorPalette",
    "THEME_DEFAULT",
    "THEME_MINIMAL",
    "THEMES",
    "CLITheme",
    "get_console",
    "get_palette",
    # styled
    "styled_header",
    "styled_label",
    "styled_success",
    "styled_warning",
    "styled_error",
    "styled_note",
    "styled_status",
    "create_summary_panel",
    # printing
    "print_separator",
    "print_header",
    "print_field",
    "print_success",
    "print_warning",
    "print_error",
    "print_note",
    "print_summary_box",
    # tables
    "create_results_table",
    "print_batch_results_table",
    "print_reference_tables",
    "print_idf_matrix",
]
