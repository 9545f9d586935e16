"""
Curvas Intensidad-Duración-Frecuencia (IDF).

Fórmula de intensidad (GEO TGN 30):

    i = a / (t + b)^c

Donde:
- i: intensidad de lluvia (mm/hr)
- t: duración en minutos (tiempo de concentración)
- a, b, c: constantes para cada período de retorno

Diseños permanentes incluyen un incremento fijo por cambio climático
(+28.1%, factor 1.281). Diseños temporales no lo aplican.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from canalpluvial.config import IDFConstants


CLIMATE_CHANGE_FACTOR = 1.281

# 1 mm/hr reportado como 1e-6 en el campo SI del resultado
SI_REPORT_FACTOR = 1e-6


@dataclass(frozen=True)
class IDFResult:
    """Resultado del cálculo IDF."""
    intensity_mmhr: float        # Intensidad final (mm/hr)
    intensity_si: float          # Intensidad final × 1e-6
    raw_intensity_mmhr: float    # Intensidad sin ajuste climático (mm/hr)
    constants: IDFConstants      # Fila de constantes usada
    duration_min: float          # Duración (min)
    return_period: int           # Período de retorno (años)
    climate_change_applied: bool
    temporary_design: bool

    @property
    def formula(self) -> str:
        """Fórmula reconstruida desde las constantes utilizadas."""
        return format_idf_formula(self.constants, self.duration_min)


def format_idf_formula(constants: IDFConstants, duration_min: float) -> str:
    """Texto de la fórmula con los valores aplicados."""
    return f"i = {constants.a:g} / ({duration_min:g} + {constants.b:g})^{constants.c:g}"


def find_idf_constants(
    table: Sequence[IDFConstants],
    return_period: int,
) -> IDFConstants:
    """
    Busca las constantes para un período de retorno (coincidencia exacta).

    Raises:
        ValueError: Si no hay constantes para ese período (no se interpola)
    """
    for row in table:
        if row.return_period == return_period:
            return row
    available = sorted(row.return_period for row in table)
    raise ValueError(
        f"No hay constantes IDF para período de retorno {return_period} años "
        f"(disponibles: {available})"
    )


def raw_idf_intensity(
    duration_min: float | NDArray[np.floating],
    constants: IDFConstants,
) -> float | NDArray[np.floating]:
    """
    Intensidad sin ajuste climático: i = a / (t + b)^c

    Args:
        duration_min: Duración en minutos (escalar o array)
        constants: Constantes IDF del período de retorno

    Returns:
        Intensidad en mm/hr
    """
    t = np.asarray(duration_min, dtype=float)
    if np.any(t <= 0):
        raise ValueError("Duración debe ser > 0")

    intensity = constants.a / ((t + constants.b) ** constants.c)
    return float(intensity) if np.isscalar(duration_min) else intensity


def idf_intensity(
    return_period: int,
    duration_min: float,
    table: Sequence[IDFConstants],
    temporary_design: bool = False,
    climate_change_factor: float = CLIMATE_CHANGE_FACTOR,
) -> IDFResult:
    """
    Intensidad de diseño para un período de retorno y una duración.

    Args:
        return_period: Período de retorno en años (debe existir en la tabla)
        duration_min: Duración en minutos
        table: Tabla de constantes IDF
        temporary_design: Si True no se aplica el ajuste climático
        climate_change_factor: Factor de ajuste climático

    Returns:
        IDFResult
    """
    constants = find_idf_constants(table, return_period)
    raw = raw_idf_intensity(duration_min, constants)

    climate_change_applied = not temporary_design
    intensity = raw * climate_change_factor if climate_change_applied else raw

    return IDFResult(
        intensity_mmhr=intensity,
        intensity_si=intensity * SI_REPORT_FACTOR,
        raw_intensity_mmhr=raw,
        constants=constants,
        duration_min=duration_min,
        return_period=return_period,
        climate_change_applied=climate_change_applied,
        temporary_design=temporary_design,
    )


def generate_idf_table(
    durations_min: list[float],
    return_periods: list[int],
    table: Sequence[IDFConstants],
    temporary_design: bool = False,
    climate_change_factor: float = CLIMATE_CHANGE_FACTOR,
) -> dict[str, NDArray[np.floating]]:
    """
    Genera tabla completa de curvas IDF.

    Args:
        durations_min: Lista de duraciones en minutos
        return_periods: Lista de períodos de retorno en años
        table: Tabla de constantes IDF
        temporary_design: Si True no se aplica el ajuste climático
        climate_change_factor: Factor de ajuste climático

    Returns:
        Diccionario con:
            - 'durations': array de duraciones
            - 'return_periods': array de períodos
            - 'intensities': matriz [n_periods x n_durations] en mm/hr
    """
    durations = np.array(durations_min, dtype=float)
    periods = np.array(return_periods)

    factor = 1.0 if temporary_design else climate_change_factor
    intensities = np.zeros((len(periods), len(durations)))

    for i, rp in enumerate(periods):
        constants = find_idf_constants(table, int(rp))
        intensities[i, :] = raw_idf_intensity(durations, constants) * factor

    return {
        "durations": durations,
        "return_periods": periods,
        "intensities": intensities,
    }
