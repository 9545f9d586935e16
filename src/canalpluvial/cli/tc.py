"""
Comandos CLI para cálculo de tiempo de concentración.
"""

from typing import Annotated

import typer

from canalpluvial.core import catchment_tc, channel_tc
from canalpluvial.cli.theme import print_field, print_header, print_separator
from canalpluvial.cli.validators import validate_gradient, validate_non_negative, validate_positive

# Crear sub-aplicación
tc_app = typer.Typer(help="Cálculo de tiempo de concentración")


@tc_app.command("catchment")
def tc_catchment(
    area: Annotated[float, typer.Argument(help="Área de la cuenca en m²")],
    slope: Annotated[float, typer.Argument(help="Pendiente media (m cada 100 m)")],
    length: Annotated[float, typer.Argument(help="Longitud del recorrido de flujo en m")],
    minimum: Annotated[float, typer.Option("--min", help="Tc mínimo en minutos")] = 5.0,
):
    """
    Calcula Tc de la cuenca (DSD Stormwater Drainage Manual).

    Ejemplo:
        canalpluvial tc catchment 5000 2.5 80
        canalpluvial tc catchment 12000 1.2 150 --min 3
    """
    validate_positive(area, "El área")
    validate_positive(slope, "La pendiente")
    validate_positive(length, "La longitud")
    validate_non_negative(minimum, "El Tc mínimo")

    tc = catchment_tc(area, slope, length, minimum_min=minimum)

    print_header("TIEMPO DE CONCENTRACION - CUENCA")
    print_field("Area", f"{area:,.0f}", "m²")
    print_field("Pendiente", f"{slope:.2f}", "m/100m")
    print_field("Longitud", f"{length:.1f}", "m")
    print_separator()
    print_field("Tc", f"{tc:.2f}", "min")
    if tc == minimum:
        print_field("Nota", "se aplicó el Tc mínimo")


@tc_app.command("channel")
def tc_channel(
    length: Annotated[float, typer.Argument(help="Longitud del canal en m")],
    gradient: Annotated[float, typer.Argument(help="Pendiente del canal (m/m)")],
):
    """
    Calcula Tc simplificado de un canal aguas arriba.

    Ejemplo:
        canalpluvial tc channel 100 0.01
    """
    validate_positive(length, "La longitud")
    validate_gradient(gradient)

    tc = channel_tc(length, gradient)
    typer.echo(f"Longitud: {length} m")
    typer.echo(f"Pendiente: {gradient:.4f} m/m ({gradient*100:.2f}%)")
    typer.echo(f"Tc = {tc:.2f} minutos")
