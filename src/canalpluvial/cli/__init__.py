"""
CLI de CanalPluvial - Dimensionamiento de canales pluviales.

Este módulo organiza los comandos CLI en sub-aplicaciones temáticas:
- tc: Tiempo de concentración
- idf: Curvas IDF
- runoff: Método racional y C ponderado
- channel: Capacidad, tirante normal y dimensionamiento
- batch: Cálculo por lote desde YAML
- tables: Tablas de referencia
"""

import logging
from typing import Annotated

import typer

from canalpluvial.cli.theme import CLITheme, ThemeName

# Crear aplicación principal
app = typer.Typer(
    name="canalpluvial",
    help="Dimensionamiento de canales de drenaje pluvial (método racional + Manning).",
    no_args_is_help=True,
)


def _register_subapps():
    """Registra sub-aplicaciones de forma diferida."""
    from canalpluvial.cli.batch import batch_app
    from canalpluvial.cli.channel import channel_app
    from canalpluvial.cli.idf import idf_app
    from canalpluvial.cli.runoff import runoff_app
    from canalpluvial.cli.tc import tc_app

    app.add_typer(tc_app, name="tc")
    app.add_typer(idf_app, name="idf")
    app.add_typer(runoff_app, name="runoff")
    app.add_typer(channel_app, name="channel")
    app.add_typer(batch_app, name="batch")


def _configure_logging() -> None:
    from rich.logging import RichHandler

    from canalpluvial.cli.theme import get_console

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=get_console(), show_path=False)],
        force=True,
    )


@app.command()
def tables():
    """Muestra las tablas de referencia (superficies, materiales, canales en U, IDF)."""
    from canalpluvial.cli.theme import print_reference_tables
    from canalpluvial.data import load_reference_data

    print_reference_tables(load_reference_data())


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Mostrar mensajes de log")] = False,
    theme: Annotated[ThemeName, typer.Option("--theme", help="Tema de colores")] = ThemeName.DEFAULT,
):
    """
    CanalPluvial - Cálculo de caudales y dimensionamiento de canales.

    Tc por DSD, intensidad por curvas IDF con ajuste climático,
    caudal por método racional y tamaño por ecuación de Manning.
    """
    CLITheme.set_theme(theme)
    if verbose:
        _configure_logging()


_register_subapps()

# Exportar para uso externo
__all__ = [
    "app",
]
