"""Modelos Pydantic para configuración y validación de datos."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ChannelShape(str, Enum):
    """Formas de sección de canal."""
    TRAPEZOIDAL = "trapezoidal"
    U_CHANNEL = "u-channel"


class DesignStatus(str, Enum):
    """Veredicto de diseño."""
    OK = "OK"
    NOT_OK = "Not OK"


# ============================================================================
# Secciones de canal (unión etiquetada por forma)
# ============================================================================

class TrapezoidalSection(BaseModel):
    """Sección trapezoidal: ancho de fondo b y talud z (H:V)."""
    model_config = ConfigDict(frozen=True)

    shape: Literal["trapezoidal"] = "trapezoidal"
    bottom_width_m: float = Field(..., ge=0, description="Ancho de fondo (m)")
    side_slope: float = Field(..., ge=0, description="Talud z (H:V)")


class UChannelSection(BaseModel):
    """Canal en U: fondo semicircular de radio W/2 y paredes verticales."""
    model_config = ConfigDict(frozen=True)

    shape: Literal["u-channel"] = "u-channel"
    width_m: float = Field(..., ge=0, description="Ancho del canal (m)")

    @property
    def radius_m(self) -> float:
        return self.width_m / 2


ChannelSection = Annotated[
    Union[TrapezoidalSection, UChannelSection],
    Field(discriminator="shape"),
]


# ============================================================================
# Valores con modo automático / manual
# ============================================================================

class AutoValue(BaseModel):
    """Valor derivado automáticamente (p.ej. pendiente extraída del terreno)."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["auto"] = "auto"
    value: float = Field(..., gt=0)


class ManualValue(BaseModel):
    """Valor ingresado manualmente por el usuario."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["manual"] = "manual"
    value: float = Field(..., gt=0)


GradientSetting = Annotated[
    Union[AutoValue, ManualValue],
    Field(discriminator="mode"),
]


# ============================================================================
# Tablas de referencia
# ============================================================================

class SurfaceType(BaseModel):
    """Tipo de superficie con su coeficiente de escorrentía C."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    coefficient: float = Field(..., ge=0, le=1)


class ChannelMaterial(BaseModel):
    """Material de revestimiento con su n de Manning."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    manning_n: float = Field(..., gt=0)


class IDFConstants(BaseModel):
    """Constantes IDF para un período de retorno: i = a / (t + b)^c"""
    model_config = ConfigDict(frozen=True)

    return_period: int = Field(..., ge=1, description="Período de retorno (años)")
    a: float = Field(..., gt=0)
    b: float = Field(..., ge=0)
    c: float = Field(..., gt=0)


class StandardChannelSize(BaseModel):
    """Tamaño comercial de canal en U."""
    model_config = ConfigDict(frozen=True)

    size_mm: int = Field(..., gt=0)
    label: str

    @property
    def width_m(self) -> float:
        return self.size_mm / 1000


# ============================================================================
# Datos de entrada
# ============================================================================

class SubArea(BaseModel):
    """Sub-área de cuenca con superficie homogénea (para C ponderado)."""
    model_config = ConfigDict(frozen=True)

    surface_type: str
    area_m2: float = Field(..., gt=0)


class CatchmentInput(BaseModel):
    """Cuenca de aporte dibujada en el mapa (ya reducida a escalares)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    area_m2: float = Field(..., gt=0, description="Área (m²)")
    average_slope: float = Field(..., gt=0, description="Pendiente media (m cada 100 m)")
    flow_path_length_m: float = Field(..., gt=0, description="Longitud de recorrido (m)")
    surface_type: str = Field(..., min_length=1)
    return_period: int = Field(default=10, ge=1, description="Período de retorno (años)")
    use_idf: bool = True
    temporary_design: bool = False
    manual_intensity_mmhr: Optional[float] = Field(None, ge=0, description="Intensidad manual (mm/hr)")
    sub_areas: list[SubArea] = Field(default_factory=list)


class UpstreamChannelRef(BaseModel):
    """Referencia a un canal aguas arriba."""
    model_config = ConfigDict(frozen=True)

    channel_id: str
    channel_no: str = ""
    tc_min: Optional[float] = Field(None, gt=0, description="Tc propio del canal si se conoce (min)")


class ChannelInput(BaseModel):
    """Alineación de canal vinculada (como máximo) a una cuenca."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    linked_catchment_id: Optional[str] = None
    shape: ChannelShape = ChannelShape.TRAPEZOIDAL
    gradient: GradientSetting = Field(default_factory=lambda: AutoValue(value=0.01))
    material: str = "concrete"
    length_m: Optional[float] = Field(None, gt=0, description="Longitud de la alineación (m)")
    bottom_width_m: Optional[float] = Field(None, gt=0, description="Ancho de fondo manual (solo trapecial)")
    side_slope: Optional[float] = Field(None, gt=0, description="Talud manual (solo trapecial)")
    upstream_channels: list[UpstreamChannelRef] = Field(default_factory=list)

    @field_validator("gradient", mode="before")
    @classmethod
    def coerce_gradient(cls, v):
        # Un número suelto se interpreta como pendiente ingresada a mano
        if isinstance(v, (int, float)):
            return ManualValue(value=v)
        return v

    @model_validator(mode="after")
    def check_overrides(self):
        if self.shape == ChannelShape.U_CHANNEL and (
            self.bottom_width_m is not None or self.side_slope is not None
        ):
            raise ValueError("Ancho de fondo y talud solo aplican a canales trapeciales")
        return self


# ============================================================================
# Criterios de diseño
# ============================================================================

class DefaultChannel(BaseModel):
    """Canal asumido cuando la cuenca no tiene alineación vinculada."""
    model_config = ConfigDict(frozen=True)

    shape: ChannelShape = ChannelShape.TRAPEZOIDAL
    gradient: float = Field(default=0.01, gt=0)
    material: str = "concrete"


class DesignCriteria(BaseModel):
    """Criterios y constantes de diseño de canales."""
    model_config = ConfigDict(frozen=True)

    min_velocity_ms: float = Field(default=0.3, ge=0, description="Velocidad mínima (autolimpieza)")
    max_velocity_ms: float = Field(default=4.0, gt=0, description="Velocidad máxima recomendada")
    max_utilization: float = Field(default=1.0, gt=0)
    climate_change_factor: float = Field(default=1.281, ge=1, description="Incremento por cambio climático")
    fallback_intensity_mmhr: float = Field(default=100.0, gt=0)
    minimum_tc_min: float = Field(default=5.0, ge=0)

    trapezoid_bottom_width_m: float = Field(default=0.5, gt=0)
    trapezoid_side_slope: float = Field(default=2.0, gt=0)
    trapezoid_depth_range: tuple[float, float] = (0.01, 2.0)
    u_channel_width_range: tuple[float, float] = (0.1, 2.0)
    top_width_increment_m: float = Field(default=0.5, gt=0)
    max_increment_steps: int = Field(default=100, ge=1)
    sizing_tolerance: float = Field(default=1e-3, gt=0, description="Tolerancia de caudal (m³/s)")
    sizing_max_iterations: int = Field(default=50, ge=1)

    default_channel: DefaultChannel = Field(default_factory=DefaultChannel)
    upstream_default_length_m: float = Field(default=100.0, gt=0)
    upstream_default_slope: float = Field(default=0.01, gt=0)

    @model_validator(mode="after")
    def check_ranges(self):
        for name in ("trapezoid_depth_range", "u_channel_width_range"):
            lo, hi = getattr(self, name)
            if not 0 < lo < hi:
                raise ValueError(f"{name} debe cumplir 0 < mínimo < máximo")
        if self.min_velocity_ms >= self.max_velocity_ms:
            raise ValueError("Velocidad mínima debe ser menor que la máxima")
        return self


# ============================================================================
# Entrada de lote
# ============================================================================

class BatchInput(BaseModel):
    """Contenido de un archivo de lote (YAML): cuencas, canales y criterios."""

    catchments: list[CatchmentInput] = Field(..., min_length=1)
    channels: list[ChannelInput] = Field(default_factory=list)
    criteria: DesignCriteria = Field(default_factory=DesignCriteria)

    @model_validator(mode="after")
    def check_unique_ids(self):
        for name, items in (("cuencas", self.catchments), ("canales", self.channels)):
            ids = [item.id for item in items]
            duplicated = sorted({i for i in ids if ids.count(i) > 1})
            if duplicated:
                raise ValueError(f"Ids de {name} duplicados: {duplicated}")
        return self
