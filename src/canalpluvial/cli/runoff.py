"""
Comandos CLI para cálculo de escorrentía (método racional).
"""

from typing import Annotated

import typer

from canalpluvial.config import SubArea
from canalpluvial.core import m3s_to_ls, rational_peak_flow, weighted_c_from_subareas
from canalpluvial.data import load_reference_data
from canalpluvial.cli.theme import (
    create_results_table, get_console, get_palette, print_error, print_field,
)
from canalpluvial.cli.validators import (
    validate_c_coefficient, validate_non_negative, validate_positive, validate_surface,
)

# Crear sub-aplicación
runoff_app = typer.Typer(help="Cálculo de escorrentía")


@runoff_app.command("rational")
def runoff_rational(
    c: Annotated[float, typer.Argument(help="Coeficiente de escorrentía (0-1)")],
    intensity: Annotated[float, typer.Argument(help="Intensidad en mm/hr")],
    area: Annotated[float, typer.Argument(help="Área en m²")],
):
    """
    Calcula caudal pico usando método racional (Q = C·i·A).

    Ejemplo:
        canalpluvial runoff rational 0.9 100 1000
    """
    validate_c_coefficient(c)
    validate_non_negative(intensity, "La intensidad")
    validate_positive(area, "El área")

    q = rational_peak_flow(c, intensity, area)

    typer.echo(f"\nMétodo Racional")
    typer.echo(f"C = {c:.2f}")
    typer.echo(f"i = {intensity:.2f} mm/hr")
    typer.echo(f"A = {area:.1f} m²")
    typer.echo(f"Q = {q:.4f} m3/s ({m3s_to_ls(q):.1f} L/s)")


def _parse_pair(text: str) -> SubArea:
    surface, sep, value = text.partition(":")
    if not sep:
        print_error(f"Formato inválido '{text}'. Use tipo:area (p.ej. asphalt:1200)")
        raise typer.Exit(1)
    try:
        area = float(value)
    except ValueError:
        print_error(f"Área inválida en '{text}'")
        raise typer.Exit(1)
    validate_positive(area, f"El área de '{surface}'")
    return SubArea(surface_type=surface.strip(), area_m2=area)


@runoff_app.command("weighted-c")
def runoff_weighted_c(
    pairs: Annotated[list[str], typer.Argument(help="Sub-áreas como tipo:area_m2")],
):
    """
    Calcula coeficiente C ponderado por área.

    Ejemplo:
        canalpluvial runoff weighted-c asphalt:1200 lawn:800 roof:300
    """
    reference = load_reference_data()
    sub_areas = [_parse_pair(pair) for pair in pairs]
    for sub in sub_areas:
        validate_surface(sub.surface_type, reference)

    coefficients = reference.coefficients_by_surface
    c = weighted_c_from_subareas(sub_areas, coefficients)
    total = sum(sub.area_m2 for sub in sub_areas)

    p = get_palette()
    table = create_results_table("C PONDERADO")
    table.add_column("Superficie", style=p.accent)
    table.add_column("Área (m²)", justify="right", style=p.number)
    table.add_column("%", justify="right", style=p.number)
    table.add_column("C", justify="right", style=p.number)
    for sub in sub_areas:
        table.add_row(
            sub.surface_type,
            f"{sub.area_m2:,.1f}",
            f"{sub.area_m2 / total:.1%}",
            f"{coefficients[sub.surface_type]:.2f}",
        )
    get_console().print(table)

    print_field("Área total", f"{total:,.1f}", "m²")
    print_field("C ponderado", f"{c:.3f}")
