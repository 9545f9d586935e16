"""
Modelos de datos para CanalPluvial.

Las entradas y la configuración viven en `canalpluvial.config`; aquí
están los resultados que produce el orquestador.
"""

from canalpluvial.models.results import BatchError, BatchSummary, CalculationResult

__all__ = [
    "BatchError",
    "BatchSummary",
    "CalculationResult",
]
