"""
Ecuación de Manning para flujo uniforme en canales abiertos.

    Q = (1/n) × A × R^(2/3) × S^(1/2)

Q: caudal (m³/s), n: rugosidad de Manning, A: área mojada (m²),
R: radio hidráulico (m), S: pendiente longitudinal (m/m).
"""

from dataclasses import dataclass
from typing import Optional

from canalpluvial.config import ChannelSection
from canalpluvial.core.geometry import section_geometry
from canalpluvial.core.numeric import bisection


# Límites prácticos de búsqueda del tirante normal (m)
MIN_NORMAL_DEPTH = 1e-4
MAX_NORMAL_DEPTH = 5.0


@dataclass(frozen=True)
class ManningResult:
    """Resultado hidráulico para un tirante dado."""
    normal_depth: float      # Tirante y (m)
    area: float              # A (m²)
    perimeter: float         # P (m)
    hydraulic_radius: float  # R (m)
    flow: float              # Q (m³/s)
    velocity: float          # V = Q/A (m/s)
    converged: bool = True
    iterations: int = 0


def _validate_slope_and_n(slope: float, manning_n: float) -> None:
    if slope <= 0:
        raise ValueError(f"Pendiente longitudinal debe ser > 0 (recibido: {slope})")
    if manning_n <= 0:
        raise ValueError(f"Coeficiente n de Manning debe ser > 0 (recibido: {manning_n})")


def manning_flow(
    depth: float,
    section: ChannelSection,
    slope: float,
    manning_n: float,
) -> float:
    """
    Caudal de Manning para un tirante y una sección.

    Args:
        depth: Tirante (m)
        section: Sección trapecial o en U
        slope: Pendiente longitudinal S (m/m)
        manning_n: Coeficiente de rugosidad n

    Returns:
        Caudal en m³/s (0 para tirante nulo)
    """
    _validate_slope_and_n(slope, manning_n)
    geometry = section_geometry(section, depth)
    if geometry.area == 0:
        return 0.0
    return (
        (1 / manning_n)
        * geometry.area
        * geometry.hydraulic_radius ** (2 / 3)
        * slope ** 0.5
    )


def flow_velocity(flow: float, area: float) -> float:
    """
    Velocidad media V = Q / A.

    Raises:
        ValueError: Si el caudal es negativo o el área no es positiva
    """
    if flow < 0:
        raise ValueError(f"Caudal debe ser >= 0 (recibido: {flow})")
    if area <= 0:
        raise ValueError(f"Área debe ser > 0 (recibido: {area})")
    return flow / area


def channel_capacity(
    section: ChannelSection,
    depth: float,
    slope: float,
    manning_n: float,
) -> ManningResult:
    """
    Capacidad de la sección a un tirante de diseño fijo.

    Args:
        section: Sección del canal
        depth: Tirante de diseño (m), p.ej. canal lleno
        slope: Pendiente longitudinal (m/m)
        manning_n: Coeficiente n de Manning

    Returns:
        ManningResult al tirante indicado
    """
    _validate_slope_and_n(slope, manning_n)
    geometry = section_geometry(section, depth)
    flow = manning_flow(depth, section, slope, manning_n)
    velocity = flow / geometry.area if geometry.area > 0 else 0.0

    return ManningResult(
        normal_depth=depth,
        area=geometry.area,
        perimeter=geometry.perimeter,
        hydraulic_radius=geometry.hydraulic_radius,
        flow=flow,
        velocity=velocity,
    )


def solve_normal_depth(
    target_flow: float,
    section: ChannelSection,
    slope: float,
    manning_n: float,
    fixed_depth: Optional[float] = None,
    min_depth: float = MIN_NORMAL_DEPTH,
    max_depth: float = MAX_NORMAL_DEPTH,
    tolerance: float = 1e-4,
    max_iterations: int = 80,
) -> ManningResult:
    """
    Tirante normal: profundidad a la que Q(y) = Q objetivo.

    Si `fixed_depth` se indica (el tirante es dato de diseño, como en
    el dimensionamiento por ancho), se devuelve directamente la
    hidráulica a ese tirante.

    Args:
        target_flow: Caudal objetivo (m³/s)
        section: Sección del canal
        slope: Pendiente longitudinal (m/m)
        manning_n: Coeficiente n de Manning
        fixed_depth: Tirante fijo de diseño (m), opcional
        min_depth: Límite inferior de búsqueda (m)
        max_depth: Límite superior de búsqueda (m)
        tolerance: Tolerancia de la bisección
        max_iterations: Máximo de iteraciones

    Returns:
        ManningResult con tirante, geometría, caudal y velocidad
    """
    if target_flow < 0:
        raise ValueError(f"Caudal objetivo debe ser >= 0 (recibido: {target_flow})")
    _validate_slope_and_n(slope, manning_n)

    if fixed_depth is not None:
        return channel_capacity(section, fixed_depth, slope, manning_n)
    if target_flow == 0:
        return channel_capacity(section, 0.0, slope, manning_n)

    result = bisection(
        lambda y: manning_flow(y, section, slope, manning_n) - target_flow,
        min_depth,
        max_depth,
        tolerance=tolerance,
        max_iterations=max_iterations,
    )

    hydraulics = channel_capacity(section, result.root, slope, manning_n)
    return ManningResult(
        normal_depth=hydraulics.normal_depth,
        area=hydraulics.area,
        perimeter=hydraulics.perimeter,
        hydraulic_radius=hydraulics.hydraulic_radius,
        flow=hydraulics.flow,
        velocity=hydraulics.velocity,
        converged=result.converged,
        iterations=result.iterations,
    )
