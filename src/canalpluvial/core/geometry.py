"""
Geometría de secciones de canal.

Dos formas, sin jerarquía de clases:
- Trapecial: ancho de fondo b, talud z (H:V)
- Canal en U: fondo semicircular de radio r = W/2 y paredes verticales

Para ambas: R = A / P (radio hidráulico).
"""

import math
from dataclasses import dataclass

from canalpluvial.config import (
    ChannelSection,
    ChannelShape,
    TrapezoidalSection,
    UChannelSection,
)


@dataclass(frozen=True)
class ChannelGeometry:
    """Propiedades geométricas de la sección mojada."""
    depth: float            # Tirante y (m)
    area: float             # Área mojada A (m²)
    perimeter: float        # Perímetro mojado P (m)
    hydraulic_radius: float # Radio hidráulico R (m)
    top_width: float        # Ancho superficial T (m)


def _check_non_negative(**values: float) -> None:
    labels = {
        "depth": "Tirante",
        "bottom_width": "Ancho de fondo",
        "side_slope": "Talud",
        "width": "Ancho",
    }
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{labels.get(name, name)} debe ser >= 0 (recibido: {value})")


# ============================================================================
# Trapecial
# ============================================================================

def trapezoid_top_width(depth: float, bottom_width: float, side_slope: float) -> float:
    """
    Ancho superficial de sección trapecial.

    T = b + 2·z·y
    """
    _check_non_negative(depth=depth, bottom_width=bottom_width, side_slope=side_slope)
    return bottom_width + 2 * side_slope * depth


def trapezoid_area(depth: float, bottom_width: float, side_slope: float) -> float:
    """
    Área mojada de sección trapecial.

    A = ½·(T + b)·y = y·(b + z·y)

    Args:
        depth: Tirante y (m)
        bottom_width: Ancho de fondo b (m)
        side_slope: Talud z (H:V)

    Returns:
        Área en m²
    """
    _check_non_negative(depth=depth, bottom_width=bottom_width, side_slope=side_slope)
    return depth * (bottom_width + side_slope * depth)


def trapezoid_perimeter(depth: float, bottom_width: float, side_slope: float) -> float:
    """
    Perímetro mojado de sección trapecial.

    P = b + 2·y·√(1 + z²)
    """
    _check_non_negative(depth=depth, bottom_width=bottom_width, side_slope=side_slope)
    return bottom_width + 2 * depth * math.sqrt(1 + side_slope ** 2)


# ============================================================================
# Canal en U
# ============================================================================

def u_channel_area(depth: float, width: float) -> float:
    """
    Área mojada de canal en U (r = W/2).

    Si y <= r (segmento circular):
        θ = 2·acos(1 - y/r);  A = r²/2·(θ - sen θ)
    Si y > r (semicírculo + rectángulo):
        A = π·r²/2 + (y - r)·W

    Args:
        depth: Tirante y (m)
        width: Ancho del canal W (m)

    Returns:
        Área en m²
    """
    _check_non_negative(depth=depth, width=width)
    r = width / 2
    if r == 0:
        return 0.0
    if depth <= r:
        theta = 2 * math.acos(1 - depth / r)
        return (r ** 2 / 2) * (theta - math.sin(theta))
    return math.pi * r ** 2 / 2 + (depth - r) * width


def u_channel_perimeter(depth: float, width: float) -> float:
    """
    Perímetro mojado de canal en U (r = W/2).

    Si y <= r: P = r·θ
    Si y > r:  P = π·r + 2·(y - r)
    """
    _check_non_negative(depth=depth, width=width)
    r = width / 2
    if r == 0:
        return 0.0
    if depth <= r:
        theta = 2 * math.acos(1 - depth / r)
        return r * theta
    return math.pi * r + 2 * (depth - r)


def u_channel_top_width(depth: float, width: float) -> float:
    """Ancho superficial del canal en U."""
    _check_non_negative(depth=depth, width=width)
    r = width / 2
    if depth >= r:
        return width
    return 2 * math.sqrt(max(r ** 2 - (r - depth) ** 2, 0.0))


# ============================================================================
# Comunes
# ============================================================================

def hydraulic_radius(area: float, perimeter: float) -> float:
    """
    Radio hidráulico R = A / P.

    Raises:
        ValueError: Si el área es negativa o el perímetro no es positivo
    """
    if area < 0:
        raise ValueError(f"Área debe ser >= 0 (recibido: {area})")
    if perimeter <= 0:
        raise ValueError(f"Perímetro debe ser > 0 (recibido: {perimeter})")
    return area / perimeter


def _radius_or_zero(depth: float, area: float, perimeter: float) -> float:
    # Canal vacío: R = 0 en el borde y = 0
    if depth == 0:
        return 0.0
    return hydraulic_radius(area, perimeter)


def trapezoid_geometry(depth: float, bottom_width: float, side_slope: float) -> ChannelGeometry:
    """Calcula todas las propiedades de una sección trapecial."""
    area = trapezoid_area(depth, bottom_width, side_slope)
    perimeter = trapezoid_perimeter(depth, bottom_width, side_slope)
    return ChannelGeometry(
        depth=depth,
        area=area,
        perimeter=perimeter,
        hydraulic_radius=_radius_or_zero(depth, area, perimeter),
        top_width=trapezoid_top_width(depth, bottom_width, side_slope),
    )


def u_channel_geometry(depth: float, width: float) -> ChannelGeometry:
    """Calcula todas las propiedades de un canal en U."""
    area = u_channel_area(depth, width)
    perimeter = u_channel_perimeter(depth, width)
    return ChannelGeometry(
        depth=depth,
        area=area,
        perimeter=perimeter,
        hydraulic_radius=_radius_or_zero(depth, area, perimeter),
        top_width=u_channel_top_width(depth, width),
    )


def section_geometry(section: ChannelSection, depth: float) -> ChannelGeometry:
    """
    Geometría de cualquier sección, despachando por forma.

    Args:
        section: TrapezoidalSection o UChannelSection
        depth: Tirante (m)

    Returns:
        ChannelGeometry
    """
    if section.shape == ChannelShape.TRAPEZOIDAL:
        return trapezoid_geometry(depth, section.bottom_width_m, section.side_slope)
    elif section.shape == ChannelShape.U_CHANNEL:
        return u_channel_geometry(depth, section.width_m)
    else:
        raise ValueError(f"Forma de canal desconocida: {section.shape}")


def make_section(
    shape: ChannelShape | str,
    width_m: float | None = None,
    bottom_width_m: float | None = None,
    side_slope: float | None = None,
) -> TrapezoidalSection | UChannelSection:
    """
    Construye una sección a partir de la forma y sus parámetros.

    Args:
        shape: 'trapezoidal' o 'u-channel'
        width_m: Ancho W (canal en U)
        bottom_width_m: Ancho de fondo b (trapecial)
        side_slope: Talud z (trapecial)
    """
    shape = ChannelShape(shape)
    if shape == ChannelShape.TRAPEZOIDAL:
        if bottom_width_m is None or side_slope is None:
            raise ValueError("Sección trapecial requiere bottom_width_m y side_slope")
        return TrapezoidalSection(bottom_width_m=bottom_width_m, side_slope=side_slope)
    if width_m is None:
        raise ValueError("Canal en U requiere width_m")
    return UChannelSection(width_m=width_m)
