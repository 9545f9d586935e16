"""
Tiempo de concentración (Tc).

- Cuenca: fórmula del DSD Stormwater Drainage Manual (Brandsby-Williams)
- Canales aguas arriba: fórmula simplificada tipo Kirpich
- Tc efectivo: el mayor entre cuenca y aguas arriba
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class TcBreakdown:
    """Componentes del tiempo de concentración (minutos)."""
    catchment_tc_min: float
    upstream_tc_min: float
    effective_tc_min: float


def catchment_tc(
    area_m2: float,
    slope_m_per_100m: float,
    length_m: float,
    minimum_min: float = 5.0,
) -> float:
    """
    Calcula Tc de la cuenca de aporte.

    t₀ = 0.14465 × L / (H^0.2 × A^0.1)  [t₀: min, L: m, H: m/100m, A: m²]

    Args:
        area_m2: Área de la cuenca en m²
        slope_m_per_100m: Pendiente media (m cada 100 m)
        length_m: Longitud del recorrido de flujo en metros
        minimum_min: Tc mínimo en minutos

    Returns:
        Tiempo de concentración en minutos
    """
    if area_m2 <= 0:
        raise ValueError("Área debe ser > 0")
    if slope_m_per_100m <= 0:
        raise ValueError("Pendiente debe ser > 0")
    if length_m <= 0:
        raise ValueError("Longitud debe ser > 0")

    tc_min = 0.14465 * length_m / ((slope_m_per_100m ** 0.2) * (area_m2 ** 0.1))
    return max(tc_min, minimum_min)


def channel_tc(length_m: float, gradient: float) -> float:
    """
    Tc simplificado de un canal aguas arriba.

    tc = 0.02 × L^0.77 × S^(-0.385)  [tc: min, L: m, S: m/m]

    Args:
        length_m: Longitud del canal en metros
        gradient: Pendiente del canal (m/m)

    Returns:
        Tiempo de concentración en minutos
    """
    if length_m <= 0:
        raise ValueError("Longitud debe ser > 0")
    if gradient <= 0:
        raise ValueError("Pendiente debe ser > 0")

    return 0.02 * (length_m ** 0.77) * (gradient ** -0.385)


def upstream_tc(upstream_tcs: Iterable[float]) -> float:
    """Tc controlante aguas arriba: el máximo, o 0 si no hay canales."""
    values = list(upstream_tcs)
    for tc in values:
        if tc < 0:
            raise ValueError("Tc aguas arriba debe ser >= 0")
    return max(values, default=0.0)


def effective_tc(
    catchment_tc_min: float,
    upstream_tcs: Iterable[float] = (),
) -> TcBreakdown:
    """
    Tc efectivo = max(Tc cuenca, Tc aguas arriba).

    Es la duración controlante que se usa en la curva IDF.
    """
    upstream = upstream_tc(upstream_tcs)
    return TcBreakdown(
        catchment_tc_min=catchment_tc_min,
        upstream_tc_min=upstream,
        effective_tc_min=max(catchment_tc_min, upstream),
    )
