"""
Comandos CLI para curvas IDF.
"""

import json
from typing import Annotated, Optional

import typer

from canalpluvial.core import generate_idf_table, idf_intensity
from canalpluvial.data import load_reference_data
from canalpluvial.cli.theme import (
    print_error, print_field, print_header, print_idf_matrix, print_note, print_separator,
)
from canalpluvial.cli.validators import validate_positive, validate_return_period

# Crear sub-aplicación
idf_app = typer.Typer(help="Curvas IDF (i = a / (t + b)^c)")

DEFAULT_DURATIONS = "5,10,15,30,60,120,240"


def _parse_list(text: str, cast=float) -> list:
    try:
        return [cast(item.strip()) for item in text.split(",") if item.strip()]
    except ValueError:
        print_error(f"Lista inválida: '{text}' (use valores separados por coma)")
        raise typer.Exit(1)


@idf_app.command("intensity")
def idf_intensity_cmd(
    duration: Annotated[float, typer.Argument(help="Duración en minutos (normalmente Tc)")],
    return_period: Annotated[int, typer.Option("--tr", "-t", help="Período de retorno")] = 10,
    temporary: Annotated[bool, typer.Option("--temporary", help="Diseño temporal (sin ajuste climático)")] = False,
):
    """
    Calcula la intensidad de diseño para un período y una duración.

    Ejemplo:
        canalpluvial idf intensity 60 --tr 10
        canalpluvial idf intensity 15 --tr 50 --temporary
    """
    reference = load_reference_data()
    validate_positive(duration, "La duración")
    validate_return_period(return_period, reference)

    result = idf_intensity(
        return_period, duration, reference.idf_table, temporary_design=temporary,
    )

    print_header("INTENSIDAD IDF", reference.idf_source)
    print_field("Periodo retorno", str(return_period), "años")
    print_field("Duracion", f"{duration:g}", "min")
    print_field("Formula", result.formula)
    print_separator()
    print_field("Intensidad base", f"{result.raw_intensity_mmhr:.2f}", "mm/hr")
    if result.climate_change_applied:
        print_field("Ajuste climatico", f"x{result.intensity_mmhr / result.raw_intensity_mmhr:.3f}")
    print_field("INTENSIDAD", f"{result.intensity_mmhr:.2f}", "mm/hr")


@idf_app.command("table")
def idf_table_cmd(
    durations: Annotated[str, typer.Option("--durations", "-d", help="Duraciones en min, separadas por coma")] = DEFAULT_DURATIONS,
    periods: Annotated[Optional[str], typer.Option("--tr", "-t", help="Períodos de retorno, separados por coma")] = None,
    temporary: Annotated[bool, typer.Option("--temporary", help="Diseño temporal (sin ajuste climático)")] = False,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Archivo JSON")] = None,
):
    """
    Genera la tabla IDF (intensidades en mm/hr).

    Ejemplo:
        canalpluvial idf table
        canalpluvial idf table --tr 10,50,200 -d 5,15,60
        canalpluvial idf table -o tabla_idf.json
    """
    reference = load_reference_data()
    duration_list = _parse_list(durations, float)
    period_list = _parse_list(periods, int) if periods else reference.return_periods

    for d in duration_list:
        validate_positive(d, "La duración")
    for rp in period_list:
        validate_return_period(rp, reference)

    result = generate_idf_table(
        duration_list, period_list, reference.idf_table, temporary_design=temporary,
    )

    if output:
        data = {
            "source": reference.idf_source,
            "temporary_design": temporary,
            "durations_min": result["durations"].tolist(),
            "return_periods_yr": result["return_periods"].tolist(),
            "intensities_mmhr": result["intensities"].tolist(),
        }
        with open(output, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        typer.echo(f"Tabla guardada en {output}")
        return

    print_idf_matrix(duration_list, period_list, result["intensities"])
    if not temporary:
        print_note("Incluye ajuste por cambio climático (+28.1%)")
