"""
Modelos de resultados del cálculo por cuenca y del lote.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from canalpluvial.config import ChannelShape, DesignStatus


class CalculationResult(BaseModel):
    """
    Resultado completo para una cuenca.

    Conserva cada valor intermedio (Tc, intensidad, C, caudal, tamaño,
    capacidad, geometría) además del veredicto de diseño. Si el cálculo
    falla, `processed=False`, los valores quedan en cero y
    `processing_error` contiene el mensaje.
    """
    model_config = ConfigDict(frozen=True)

    catchment_id: str
    catchment_name: str = ""
    channel_id: Optional[str] = None  # None si se usó el canal por defecto

    # Tiempo de concentración (min)
    catchment_tc_min: float = 0.0
    upstream_tc_min: float = 0.0
    effective_tc_min: float = 0.0

    # Lluvia y escorrentía
    return_period: int = 0
    rainfall_intensity_mmhr: float = 0.0
    raw_intensity_mmhr: float = 0.0
    intensity_si: float = 0.0
    climate_change_applied: bool = False
    using_fallback_intensity: bool = False
    idf_formula: str = ""
    runoff_coefficient: float = 0.0
    peak_flow_m3s: float = 0.0

    # Canal
    channel_shape: Optional[ChannelShape] = None
    channel_material: str = ""
    channel_gradient: float = 0.0
    manning_n: float = 0.0
    required_width_m: float = 0.0
    selected_width_m: float = 0.0
    selected_size: str = "N/A"
    design_depth_m: float = 0.0
    overflow: bool = False

    # Verificación de Manning al tamaño seleccionado
    capacity_m3s: float = 0.0
    velocity_ms: float = 0.0
    utilization: float = 0.0
    normal_depth_m: Optional[float] = None
    channel_area_m2: float = 0.0
    wetted_perimeter_m: float = 0.0
    hydraulic_radius_m: float = 0.0

    # Veredicto
    status: DesignStatus = DesignStatus.NOT_OK
    error: Optional[str] = None
    warning: Optional[str] = None

    processed: bool = True
    processing_error: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.processed and self.status == DesignStatus.OK

    @classmethod
    def failed(cls, catchment_id: str, catchment_name: str, message: str) -> "CalculationResult":
        """Resultado en cero para una cuenca cuyo cálculo lanzó una excepción."""
        return cls(
            catchment_id=catchment_id,
            catchment_name=catchment_name,
            status=DesignStatus.NOT_OK,
            error=message,
            processed=False,
            processing_error=message,
        )


class BatchError(BaseModel):
    """Error de una cuenca del lote (de diseño o de procesamiento)."""
    model_config = ConfigDict(frozen=True)

    catchment_id: str
    message: str
    processing: bool = False  # True si el cálculo lanzó una excepción

    def __str__(self) -> str:
        kind = "Error de procesamiento - " if self.processing else ""
        return f"Cuenca {self.catchment_id}: {kind}{self.message}"


class BatchSummary(BaseModel):
    """Resumen de una corrida de lote."""

    total: int
    processed: int
    successful: int  # procesadas con estado OK
    failed: int      # el resto: Not OK o no procesadas
    results: list[CalculationResult] = Field(default_factory=list)
    errors: list[BatchError] = Field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def processing_failures(self) -> int:
        """Cuencas cuyo cálculo lanzó una excepción."""
        return self.total - self.processed
