"""
Método Racional para escorrentía.

Calcula caudal pico para cuencas pequeñas usando
la fórmula racional Q = C × i × A (en SI).
"""

from typing import Mapping

from canalpluvial.config import SubArea
from canalpluvial.core.units import mm_per_hour_to_m_per_s


def _validate_c(c: float) -> None:
    if not 0 <= c <= 1:
        raise ValueError(f"Coeficiente C debe estar entre 0 y 1 (recibido: {c})")


def rational_peak_flow(
    c: float,
    intensity_mmhr: float,
    area_m2: float,
) -> float:
    """
    Calcula caudal pico usando método racional.

    Q = C × i × A  [Q: m³/s, i: m/s, A: m²]

    La intensidad se recibe en mm/hr y se convierte a m/s.

    Args:
        c: Coeficiente de escorrentía (0-1)
        intensity_mmhr: Intensidad de lluvia en mm/hr
        area_m2: Área de la cuenca en m²

    Returns:
        Caudal pico en m³/s
    """
    _validate_c(c)
    if intensity_mmhr < 0:
        raise ValueError("Intensidad debe ser >= 0")
    if area_m2 <= 0:
        raise ValueError("Área debe ser > 0")

    return c * mm_per_hour_to_m_per_s(intensity_mmhr) * area_m2


def weighted_c(areas: list[float], coefficients: list[float]) -> float:
    """
    Calcula coeficiente C ponderado por area.

    C_ponderado = Σ(Cᵢ × Aᵢ) / Σ(Aᵢ)

    Args:
        areas: Lista de areas en cualquier unidad (m2, ha, etc.)
        coefficients: Lista de coeficientes C correspondientes

    Returns:
        Coeficiente C ponderado
    """
    if len(areas) != len(coefficients):
        raise ValueError("Las listas de areas y coeficientes deben tener igual longitud")
    if not areas:
        raise ValueError("Se requiere al menos una superficie")

    for a, c in zip(areas, coefficients):
        _validate_c(c)
        if a < 0:
            raise ValueError("Las areas deben ser >= 0")

    total_area = sum(areas)
    if total_area == 0:
        raise ValueError("El area total no puede ser cero")

    weighted_sum = sum(a * c for a, c in zip(areas, coefficients))
    return weighted_sum / total_area


def weighted_c_from_subareas(
    sub_areas: list[SubArea],
    coefficients_by_surface: Mapping[str, float],
) -> float:
    """
    C ponderado a partir de sub-áreas con tipo de superficie.

    Args:
        sub_areas: Sub-áreas con su tipo de superficie
        coefficients_by_surface: Mapeo id de superficie -> C

    Returns:
        Coeficiente C ponderado
    """
    coefficients = []
    for sub in sub_areas:
        if sub.surface_type not in coefficients_by_surface:
            raise ValueError(f"Tipo de superficie desconocido: {sub.surface_type}")
        coefficients.append(coefficients_by_surface[sub.surface_type])

    return weighted_c([sub.area_m2 for sub in sub_areas], coefficients)
