"""
Conversiones de unidades.

Todos los cálculos internos usan SI (m, s, m², m³/s). Las funciones
aceptan escalares o arrays; un escalar de entrada devuelve float.
"""

import numpy as np
from numpy.typing import NDArray

ArrayLike = float | NDArray[np.floating]


def _as_result(value, original) -> ArrayLike:
    return float(value) if np.isscalar(original) else value


def mm_per_hour_to_m_per_s(intensity_mmhr: ArrayLike) -> ArrayLike:
    """Convierte intensidad de mm/hr a m/s (÷1000 ÷3600)."""
    i = np.asarray(intensity_mmhr, dtype=float)
    return _as_result(i / 1000.0 / 3600.0, intensity_mmhr)


def m3s_to_ls(flow_m3s: ArrayLike) -> ArrayLike:
    """Convierte caudal de m³/s a L/s."""
    return _as_result(np.asarray(flow_m3s, dtype=float) * 1000.0, flow_m3s)


def ls_to_m3s(flow_ls: ArrayLike) -> ArrayLike:
    """Convierte caudal de L/s a m³/s."""
    return _as_result(np.asarray(flow_ls, dtype=float) / 1000.0, flow_ls)


def hectares_to_m2(area_ha: ArrayLike) -> ArrayLike:
    """Convierte hectáreas a m²."""
    return _as_result(np.asarray(area_ha, dtype=float) * 10000.0, area_ha)


def m2_to_hectares(area_m2: ArrayLike) -> ArrayLike:
    """Convierte m² a hectáreas."""
    return _as_result(np.asarray(area_m2, dtype=float) / 10000.0, area_m2)


def ms_to_kmh(velocity_ms: ArrayLike) -> ArrayLike:
    """Convierte velocidad de m/s a km/h."""
    return _as_result(np.asarray(velocity_ms, dtype=float) * 3.6, velocity_ms)


def kmh_to_ms(velocity_kmh: ArrayLike) -> ArrayLike:
    """Convierte velocidad de km/h a m/s."""
    return _as_result(np.asarray(velocity_kmh, dtype=float) / 3.6, velocity_kmh)
