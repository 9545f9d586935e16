"""
Módulo de datos y tablas de referencia.

Provee acceso a las tablas del sistema (superficies, materiales,
tamaños de canal en U y constantes IDF).
"""

from canalpluvial.data.reference import (
    ReferenceData,
    load_reference_data,
    read_reference_data,
)

__all__ = [
    "ReferenceData",
    "load_reference_data",
    "read_reference_data",
]
