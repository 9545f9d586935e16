"""
Comandos CLI para hidráulica de canales (Manning y dimensionamiento).
"""

import warnings
from typing import Annotated, Optional

import typer

from canalpluvial.config import ChannelShape, DesignCriteria
from canalpluvial.core import (
    channel_capacity,
    make_section,
    size_channel,
    solve_normal_depth,
)
from canalpluvial.data import load_reference_data
from canalpluvial.cli.theme import (
    print_error, print_field, print_header, print_separator, print_success, print_warning,
)
from canalpluvial.cli.validators import (
    validate_gradient, validate_material, validate_non_negative, validate_positive,
)

# Crear sub-aplicación
channel_app = typer.Typer(help="Capacidad, tirante normal y dimensionamiento de canales")

ShapeOption = Annotated[ChannelShape, typer.Option("--shape", "-s", help="Forma de la sección")]
SlopeOption = Annotated[float, typer.Option("--slope", "-S", help="Pendiente longitudinal (m/m)")]
MaterialOption = Annotated[str, typer.Option("--material", "-m", help="Material de revestimiento")]
ManningOption = Annotated[Optional[float], typer.Option("--n", help="n de Manning (reemplaza al material)")]
WidthOption = Annotated[Optional[float], typer.Option("--width", "-w", help="Ancho W del canal en U (m)")]
BottomOption = Annotated[Optional[float], typer.Option("--bottom-width", "-b", help="Ancho de fondo b (m)")]
SideSlopeOption = Annotated[Optional[float], typer.Option("--side-slope", "-z", help="Talud z (H:V)")]


def _manning_n(material: str, n: Optional[float]) -> float:
    if n is not None:
        validate_positive(n, "El n de Manning")
        return n
    reference = load_reference_data()
    validate_material(material, reference)
    return reference.manning_n(material)


def _section(
    shape: ChannelShape,
    width: Optional[float],
    bottom_width: Optional[float],
    side_slope: Optional[float],
):
    criteria = DesignCriteria()
    if shape == ChannelShape.TRAPEZOIDAL:
        bottom_width = criteria.trapezoid_bottom_width_m if bottom_width is None else bottom_width
        side_slope = criteria.trapezoid_side_slope if side_slope is None else side_slope
        validate_non_negative(bottom_width, "El ancho de fondo")
        validate_non_negative(side_slope, "El talud")
        return make_section(shape, bottom_width_m=bottom_width, side_slope=side_slope)

    if width is None:
        print_error("Canal en U requiere --width")
        raise typer.Exit(1)
    validate_positive(width, "El ancho")
    return make_section(shape, width_m=width)


def _describe_section(section) -> None:
    if section.shape == ChannelShape.TRAPEZOIDAL.value:
        print_field("Seccion", f"trapecial b={section.bottom_width_m:g} m, z={section.side_slope:g}")
    else:
        print_field("Seccion", f"canal en U W={section.width_m:g} m")


@channel_app.command("capacity")
def channel_capacity_cmd(
    depth: Annotated[float, typer.Argument(help="Tirante de diseño (m)")],
    slope: SlopeOption,
    shape: ShapeOption = ChannelShape.TRAPEZOIDAL,
    width: WidthOption = None,
    bottom_width: BottomOption = None,
    side_slope: SideSlopeOption = None,
    material: MaterialOption = "concrete",
    n: ManningOption = None,
):
    """
    Capacidad de Manning de una sección a un tirante dado.

    Ejemplo:
        canalpluvial channel capacity 0.5 --slope 0.01
        canalpluvial channel capacity 0.3 -s u-channel -w 0.3 -S 0.02
    """
    validate_non_negative(depth, "El tirante")
    validate_gradient(slope)
    manning_n = _manning_n(material, n)
    section = _section(shape, width, bottom_width, side_slope)

    result = channel_capacity(section, depth, slope, manning_n)

    print_header("CAPACIDAD DE MANNING")
    _describe_section(section)
    print_field("Tirante", f"{depth:.3f}", "m")
    print_field("Pendiente", f"{slope:.4f}", "m/m")
    print_field("n Manning", f"{manning_n:.3f}")
    print_separator()
    print_field("Area mojada", f"{result.area:.4f}", "m²")
    print_field("Perimetro mojado", f"{result.perimeter:.4f}", "m")
    print_field("Radio hidraulico", f"{result.hydraulic_radius:.4f}", "m")
    print_field("CAUDAL", f"{result.flow:.4f}", "m³/s")
    print_field("Velocidad", f"{result.velocity:.2f}", "m/s")


@channel_app.command("normal-depth")
def channel_normal_depth_cmd(
    flow: Annotated[float, typer.Argument(help="Caudal (m³/s)")],
    slope: SlopeOption,
    shape: ShapeOption = ChannelShape.TRAPEZOIDAL,
    width: WidthOption = None,
    bottom_width: BottomOption = None,
    side_slope: SideSlopeOption = None,
    material: MaterialOption = "concrete",
    n: ManningOption = None,
):
    """
    Tirante normal para un caudal (bisección sobre Manning).

    Ejemplo:
        canalpluvial channel normal-depth 0.5 --slope 0.01
    """
    validate_non_negative(flow, "El caudal")
    validate_gradient(slope)
    manning_n = _manning_n(material, n)
    section = _section(shape, width, bottom_width, side_slope)

    result = solve_normal_depth(flow, section, slope, manning_n)

    print_header("TIRANTE NORMAL")
    _describe_section(section)
    print_field("Caudal", f"{flow:.4f}", "m³/s")
    print_field("Pendiente", f"{slope:.4f}", "m/m")
    print_field("n Manning", f"{manning_n:.3f}")
    print_separator()
    print_field("TIRANTE", f"{result.normal_depth:.4f}", "m")
    print_field("Area mojada", f"{result.area:.4f}", "m²")
    print_field("Velocidad", f"{result.velocity:.2f}", "m/s")
    print_field("Iteraciones", str(result.iterations))
    if not result.converged:
        print_warning("La bisección no convergió; el tirante es aproximado")


@channel_app.command("size")
def channel_size_cmd(
    flow: Annotated[float, typer.Argument(help="Caudal de diseño (m³/s)")],
    slope: SlopeOption = 0.01,
    shape: ShapeOption = ChannelShape.TRAPEZOIDAL,
    material: MaterialOption = "concrete",
    n: ManningOption = None,
):
    """
    Dimensiona el canal más chico que conduce el caudal.

    Ejemplo:
        canalpluvial channel size 0.8
        canalpluvial channel size 0.05 -s u-channel -S 0.02
    """
    validate_non_negative(flow, "El caudal")
    validate_gradient(slope)
    manning_n = _manning_n(material, n)
    reference = load_reference_data()

    with warnings.catch_warnings():
        # El desborde se informa abajo con formato
        warnings.simplefilter("ignore", UserWarning)
        result = size_channel(
            flow, shape, slope, manning_n, standard_sizes=reference.u_channel_sizes,
        )

    print_header("DIMENSIONAMIENTO DE CANAL")
    print_field("Forma", shape.value)
    print_field("Caudal", f"{flow:.4f}", "m³/s")
    print_field("Pendiente", f"{slope:.4f}", "m/m")
    print_field("n Manning", f"{manning_n:.3f}")
    print_separator()
    print_field("Ancho teorico", f"{result.required_width_m:.3f}", "m")
    print_field("TAMAÑO", result.selected_size)
    print_field("Tirante de diseño", f"{result.design_depth_m:.3f}", "m")
    if result.overflow:
        print_warning("Ningún tamaño comercial alcanza el caudal; se adopta el mayor")
    elif not result.converged:
        print_warning("La búsqueda del ancho teórico no convergió")
    else:
        print_success("Tamaño seleccionado con capacidad suficiente")
