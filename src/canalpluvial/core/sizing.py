"""
Dimensionamiento de canales.

Busca el canal más chico que conduce el caudal objetivo:

- Trapecial: b y z fijos; se busca el tirante por bisección, se deriva
  el ancho superficial requerido y se redondea hacia arriba al
  siguiente múltiplo de 0.5 m.
- Canal en U: se busca el ancho teórico (tirante = ancho, canal lleno)
  y se elige el primer tamaño comercial con capacidad suficiente.

La selección siempre queda del lado seguro (capacidad >= caudal).
"""

import math
import warnings
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from canalpluvial.config import (
    ChannelShape,
    DesignCriteria,
    StandardChannelSize,
    TrapezoidalSection,
    UChannelSection,
)
from canalpluvial.core.manning import manning_flow
from canalpluvial.core.numeric import bisection


@dataclass(frozen=True)
class SizingResult:
    """Resultado del dimensionamiento."""
    shape: ChannelShape
    required_width_m: float      # Ancho teórico mínimo (m)
    selected_width_m: float      # Ancho seleccionado construible (m)
    selected_size: str           # Etiqueta ("1.5m", "300mm")
    design_depth_m: float        # Tirante de diseño del tamaño seleccionado (m)
    theoretical_depth_m: float   # Tirante del ancho teórico (m)
    section: TrapezoidalSection | UChannelSection  # Sección del tamaño seleccionado
    overflow: bool = False       # Ningún tamaño alcanza el caudal
    converged: bool = True       # Convergencia de la búsqueda teórica


def _solve_increasing(
    func: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float,
    max_iterations: int,
) -> tuple[float, bool]:
    """
    Raíz de una función creciente, acotada al intervalo.

    Sin cambio de signo, devuelve el extremo que queda del lado seguro:
    el superior si aun así falta capacidad, el inferior si sobra.
    """
    result = bisection(func, lower, upper, tolerance=tolerance, max_iterations=max_iterations)
    if result.converged:
        return result.root, True
    if func(upper) < 0:
        return upper, False
    if func(lower) > 0:
        return lower, False
    return result.root, False


def _format_width(width_m: float) -> str:
    return f"{width_m:.1f}m"


def size_trapezoidal(
    target_flow: float,
    gradient: float,
    manning_n: float,
    criteria: Optional[DesignCriteria] = None,
    bottom_width_m: Optional[float] = None,
    side_slope: Optional[float] = None,
) -> SizingResult:
    """
    Dimensiona un canal trapecial de b y z fijos.

    Args:
        target_flow: Caudal de diseño (m³/s)
        gradient: Pendiente longitudinal (m/m)
        manning_n: Coeficiente n de Manning
        criteria: Criterios de diseño (default: DesignCriteria())
        bottom_width_m: Ancho de fondo (default: criterio, 0.5 m)
        side_slope: Talud H:V (default: criterio, 2.0)

    Returns:
        SizingResult; el ancho es el ancho superficial T

    Raises:
        ValueError: Si el ancho de fondo o el talud no son positivos
    """
    criteria = criteria or DesignCriteria()
    b = criteria.trapezoid_bottom_width_m if bottom_width_m is None else bottom_width_m
    z = criteria.trapezoid_side_slope if side_slope is None else side_slope
    if b <= 0:
        raise ValueError(f"Ancho de fondo debe ser > 0 (recibido: {b})")
    if z <= 0:
        raise ValueError(f"Talud debe ser > 0 (recibido: {z})")
    section = TrapezoidalSection(bottom_width_m=b, side_slope=z)

    def capacity_at(depth: float) -> float:
        return manning_flow(depth, section, gradient, manning_n)

    lo, hi = criteria.trapezoid_depth_range
    depth, converged = _solve_increasing(
        lambda y: capacity_at(y) - target_flow,
        lo,
        hi,
        criteria.sizing_tolerance,
        criteria.sizing_max_iterations,
    )

    top_width = b + 2 * z * depth
    step = criteria.top_width_increment_m
    selected = math.ceil(round(top_width / step, 9)) * step

    def depth_for(width: float) -> float:
        return (width - b) / (2 * z)

    # Subir de a un incremento hasta cubrir el caudal
    for _ in range(criteria.max_increment_steps):
        if capacity_at(depth_for(selected)) >= target_flow:
            break
        selected += step
    else:
        warnings.warn(
            f"Sección trapecial no alcanza {target_flow:.3f} m³/s en "
            f"{criteria.max_increment_steps} incrementos",
            UserWarning,
        )

    return SizingResult(
        shape=ChannelShape.TRAPEZOIDAL,
        required_width_m=top_width,
        selected_width_m=selected,
        selected_size=_format_width(selected),
        design_depth_m=depth_for(selected),
        theoretical_depth_m=depth,
        section=section,
        converged=converged,
    )


def size_u_channel(
    target_flow: float,
    gradient: float,
    manning_n: float,
    standard_sizes: Sequence[StandardChannelSize],
    criteria: Optional[DesignCriteria] = None,
) -> SizingResult:
    """
    Dimensiona un canal en U eligiendo un tamaño comercial.

    La capacidad se evalúa con tirante igual al ancho (canal lleno).
    Si ningún tamaño alcanza, se selecciona el mayor y se marca
    overflow=True; la verificación posterior lo reporta como Not OK.

    Args:
        target_flow: Caudal de diseño (m³/s)
        gradient: Pendiente longitudinal (m/m)
        manning_n: Coeficiente n de Manning
        standard_sizes: Tamaños comerciales (se ordenan ascendentes)
        criteria: Criterios de diseño

    Returns:
        SizingResult
    """
    criteria = criteria or DesignCriteria()
    if not standard_sizes:
        raise ValueError("Se requiere al menos un tamaño comercial de canal en U")

    def full_capacity(width: float) -> float:
        return manning_flow(width, UChannelSection(width_m=width), gradient, manning_n)

    lo, hi = criteria.u_channel_width_range
    required_width, converged = _solve_increasing(
        lambda w: full_capacity(w) - target_flow,
        lo,
        hi,
        criteria.sizing_tolerance,
        criteria.sizing_max_iterations,
    )

    sizes = sorted(standard_sizes, key=lambda s: s.size_mm)
    selected = sizes[-1]
    overflow = True
    for size in sizes:
        if full_capacity(size.width_m) >= target_flow:
            selected = size
            overflow = False
            break

    if overflow:
        warnings.warn(
            f"Ningún canal en U comercial conduce {target_flow:.3f} m³/s; "
            f"se adopta el mayor ({selected.label})",
            UserWarning,
        )

    return SizingResult(
        shape=ChannelShape.U_CHANNEL,
        required_width_m=required_width,
        selected_width_m=selected.width_m,
        selected_size=selected.label,
        design_depth_m=selected.width_m,
        theoretical_depth_m=required_width,
        section=UChannelSection(width_m=selected.width_m),
        overflow=overflow,
        converged=converged,
    )


def size_channel(
    target_flow: float,
    shape: ChannelShape | str,
    gradient: float,
    manning_n: float,
    standard_sizes: Sequence[StandardChannelSize] = (),
    criteria: Optional[DesignCriteria] = None,
    bottom_width_m: Optional[float] = None,
    side_slope: Optional[float] = None,
) -> SizingResult:
    """
    Dimensiona un canal según su forma.

    Args:
        target_flow: Caudal de diseño (m³/s)
        shape: 'trapezoidal' o 'u-channel'
        gradient: Pendiente longitudinal (m/m)
        manning_n: Coeficiente n de Manning
        standard_sizes: Tamaños comerciales (solo canal en U)
        criteria: Criterios de diseño
        bottom_width_m: Ancho de fondo manual (solo trapecial)
        side_slope: Talud manual (solo trapecial)

    Returns:
        SizingResult
    """
    if target_flow < 0:
        raise ValueError(f"Caudal objetivo debe ser >= 0 (recibido: {target_flow})")

    shape = ChannelShape(shape)
    if shape == ChannelShape.TRAPEZOIDAL:
        return size_trapezoidal(
            target_flow, gradient, manning_n, criteria,
            bottom_width_m=bottom_width_m, side_slope=side_slope,
        )
    return size_u_channel(target_flow, gradient, manning_n, standard_sizes, criteria)
