"""
Tablas de referencia del sistema.

Coeficientes de escorrentía por tipo de superficie, n de Manning por
material, tamaños comerciales de canales en U y constantes IDF.
Los datos se distribuyen como JSON dentro del paquete y se cargan una
sola vez; quien lo necesite puede construir su propio ReferenceData
(p.ej. otra tabla IDF) y pasarlo al orquestador.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from canalpluvial.config import (
    ChannelMaterial,
    IDFConstants,
    StandardChannelSize,
    SurfaceType,
)


_DATA_DIR = Path(__file__).parent
TABLES_FILE = "reference_tables.json"
IDF_FILE = "idf_constants_hk.json"


class ReferenceData(BaseModel):
    """Conjunto inmutable de tablas de referencia."""
    model_config = ConfigDict(frozen=True)

    surface_types: tuple[SurfaceType, ...]
    channel_materials: tuple[ChannelMaterial, ...]
    idf_table: tuple[IDFConstants, ...]
    u_channel_sizes: tuple[StandardChannelSize, ...] = Field(default=())
    idf_source: str = ""

    @model_validator(mode="after")
    def check_unique_ids(self):
        for name, rows, key in (
            ("surface_types", self.surface_types, "id"),
            ("channel_materials", self.channel_materials, "id"),
            ("idf_table", self.idf_table, "return_period"),
        ):
            keys = [getattr(row, key) for row in rows]
            if len(keys) != len(set(keys)):
                raise ValueError(f"Claves duplicadas en {name}")
        return self

    def surface_coefficient(self, surface_id: str) -> float:
        """
        Coeficiente C de un tipo de superficie.

        Raises:
            ValueError: Si el tipo no existe
        """
        for surface in self.surface_types:
            if surface.id == surface_id:
                return surface.coefficient
        raise ValueError(
            f"Tipo de superficie desconocido: '{surface_id}'. "
            f"Opciones: {[s.id for s in self.surface_types]}"
        )

    def manning_n(self, material_id: str) -> float:
        """
        n de Manning de un material de revestimiento.

        Raises:
            ValueError: Si el material no existe
        """
        for material in self.channel_materials:
            if material.id == material_id:
                return material.manning_n
        raise ValueError(
            f"Material de canal desconocido: '{material_id}'. "
            f"Opciones: {[m.id for m in self.channel_materials]}"
        )

    @property
    def coefficients_by_surface(self) -> dict[str, float]:
        return {s.id: s.coefficient for s in self.surface_types}

    @property
    def return_periods(self) -> list[int]:
        return sorted(row.return_period for row in self.idf_table)


def _read_json(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def read_reference_data(
    tables_path: Optional[Path] = None,
    idf_path: Optional[Path] = None,
) -> ReferenceData:
    """
    Lee las tablas desde archivos JSON.

    Args:
        tables_path: JSON con superficies, materiales y tamaños de canal en U
        idf_path: JSON con constantes IDF

    Returns:
        ReferenceData validado
    """
    tables = _read_json(Path(tables_path) if tables_path else _DATA_DIR / TABLES_FILE)
    idf = _read_json(Path(idf_path) if idf_path else _DATA_DIR / IDF_FILE)

    return ReferenceData(
        surface_types=tables["surface_types"],
        channel_materials=tables["channel_materials"],
        u_channel_sizes=tables.get("u_channel_sizes", []),
        idf_table=idf["constants"],
        idf_source=idf.get("name", ""),
    )


@lru_cache(maxsize=1)
def load_reference_data() -> ReferenceData:
    """Tablas del sistema (cargadas una sola vez)."""
    return read_reference_data()
