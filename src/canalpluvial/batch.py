"""
Procesamiento por lote de cuencas.

Para cada cuenca:

1. Resuelve el canal (alineación vinculada o canal por defecto)
2. Tc de cuenca, Tc de canales aguas arriba y Tc efectivo
3. Intensidad (IDF, manual o de respaldo) y caudal por método racional
4. Dimensionamiento del canal
5. Verificación de Manning al tamaño seleccionado y veredicto

Un error en una cuenca no detiene el lote: el resultado de esa cuenca
queda con `processed=False` y el mensaje del error.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from canalpluvial.config import (
    CatchmentInput,
    ChannelInput,
    ChannelShape,
    DesignCriteria,
    DesignStatus,
    UpstreamChannelRef,
)
from canalpluvial.core.idf import format_idf_formula, idf_intensity, SI_REPORT_FACTOR
from canalpluvial.core.manning import channel_capacity, solve_normal_depth
from canalpluvial.core.rational import rational_peak_flow, weighted_c_from_subareas
from canalpluvial.core.sizing import size_channel
from canalpluvial.core.tc import catchment_tc, channel_tc, effective_tc
from canalpluvial.data import ReferenceData, load_reference_data
from canalpluvial.models import BatchError, BatchSummary, CalculationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedChannel:
    """Parámetros del canal efectivamente usados para una cuenca."""
    channel_id: Optional[str]
    shape: ChannelShape
    gradient: float
    material: str
    bottom_width_m: Optional[float] = None
    side_slope: Optional[float] = None
    upstream_channels: tuple[UpstreamChannelRef, ...] = ()


@dataclass(frozen=True)
class RainfallIntensity:
    """Intensidad de diseño y su procedencia."""
    intensity_mmhr: float
    raw_intensity_mmhr: float
    climate_change_applied: bool = False
    using_fallback: bool = False
    formula: str = ""


# ============================================================================
# Resolución de entradas
# ============================================================================

def find_linked_channel(
    catchment_id: str,
    channels: Iterable[ChannelInput],
) -> Optional[ChannelInput]:
    """Primer canal cuyo `linked_catchment_id` coincide con la cuenca."""
    for channel in channels:
        if channel.linked_catchment_id == catchment_id:
            return channel
    return None


def resolve_channel(
    channel: Optional[ChannelInput],
    criteria: DesignCriteria,
) -> ResolvedChannel:
    """Parámetros del canal vinculado, o los del canal por defecto."""
    if channel is None:
        default = criteria.default_channel
        return ResolvedChannel(
            channel_id=None,
            shape=default.shape,
            gradient=default.gradient,
            material=default.material,
        )
    return ResolvedChannel(
        channel_id=channel.id,
        shape=channel.shape,
        gradient=channel.gradient.value,
        material=channel.material,
        bottom_width_m=channel.bottom_width_m,
        side_slope=channel.side_slope,
        upstream_channels=tuple(channel.upstream_channels),
    )


def upstream_channel_tc(
    ref: UpstreamChannelRef,
    channels_by_id: dict[str, ChannelInput],
    criteria: DesignCriteria,
) -> float:
    """
    Tc de un canal aguas arriba (min).

    Orden de preferencia: Tc explícito de la referencia; longitud y
    pendiente del canal si está en el lote; valores por defecto.
    """
    if ref.tc_min is not None:
        return ref.tc_min

    upstream = channels_by_id.get(ref.channel_id)
    if upstream is not None:
        length = upstream.length_m or criteria.upstream_default_length_m
        return channel_tc(length, upstream.gradient.value)

    return channel_tc(criteria.upstream_default_length_m, criteria.upstream_default_slope)


def resolve_intensity(
    catchment: CatchmentInput,
    duration_min: float,
    reference: ReferenceData,
    criteria: DesignCriteria,
) -> RainfallIntensity:
    """
    Intensidad de diseño de la cuenca.

    - use_idf: curva IDF con el período de retorno de la cuenca
      (un período sin constantes es un error, no se reemplaza)
    - intensidad manual si se indicó
    - si no, intensidad de respaldo marcada con `using_fallback`
    """
    if catchment.use_idf:
        result = idf_intensity(
            catchment.return_period,
            duration_min,
            reference.idf_table,
            temporary_design=catchment.temporary_design,
            climate_change_factor=criteria.climate_change_factor,
        )
        return RainfallIntensity(
            intensity_mmhr=result.intensity_mmhr,
            raw_intensity_mmhr=result.raw_intensity_mmhr,
            climate_change_applied=result.climate_change_applied,
            formula=format_idf_formula(result.constants, duration_min),
        )

    if catchment.manual_intensity_mmhr is not None:
        return RainfallIntensity(
            intensity_mmhr=catchment.manual_intensity_mmhr,
            raw_intensity_mmhr=catchment.manual_intensity_mmhr,
        )

    logger.warning(
        "Cuenca %s sin IDF ni intensidad manual; se usa %.1f mm/hr",
        catchment.id, criteria.fallback_intensity_mmhr,
    )
    return RainfallIntensity(
        intensity_mmhr=criteria.fallback_intensity_mmhr,
        raw_intensity_mmhr=criteria.fallback_intensity_mmhr,
        using_fallback=True,
    )


def runoff_coefficient(catchment: CatchmentInput, reference: ReferenceData) -> float:
    """C de la superficie de la cuenca, o ponderado si hay sub-áreas."""
    c = reference.surface_coefficient(catchment.surface_type)
    if catchment.sub_areas:
        c = weighted_c_from_subareas(catchment.sub_areas, reference.coefficients_by_surface)
    return c


# ============================================================================
# Veredicto de diseño
# ============================================================================

def classify_design(
    peak_flow: float,
    capacity: float,
    velocity: float,
    criteria: DesignCriteria,
) -> tuple[DesignStatus, Optional[str], Optional[str]]:
    """
    Veredicto de diseño: (estado, error, advertencia).

    Los controles se aplican en orden fijo (utilización, velocidad
    mínima, velocidad máxima); si fallan los dos primeros queda el
    error de velocidad mínima.
    """
    status = DesignStatus.OK
    error = None
    warning = None

    utilization = peak_flow / capacity
    if utilization > criteria.max_utilization:
        status = DesignStatus.NOT_OK
        error = (
            f"Utilización del canal ({utilization * 100:.1f}%) supera el "
            f"{criteria.max_utilization * 100:.0f}%. Caudal requerido "
            f"({peak_flow:.3f} m³/s) mayor que la capacidad ({capacity:.3f} m³/s)"
        )

    if velocity < criteria.min_velocity_ms:
        status = DesignStatus.NOT_OK
        error = (
            f"Velocidad muy baja ({velocity:.2f} m/s). "
            f"Mínimo recomendado: {criteria.min_velocity_ms:.1f} m/s"
        )
    elif velocity > criteria.max_velocity_ms:
        warning = f"Velocidad mayor a {criteria.max_velocity_ms:.1f} m/s ({velocity:.2f} m/s)"

    return status, error, warning


# ============================================================================
# Cálculo por cuenca
# ============================================================================

def _calculate(
    catchment: CatchmentInput,
    channel: Optional[ChannelInput],
    reference: ReferenceData,
    criteria: DesignCriteria,
    channels_by_id: dict[str, ChannelInput],
) -> CalculationResult:
    resolved = resolve_channel(channel, criteria)
    manning_n = reference.manning_n(resolved.material)
    warnings_found = []

    # Tiempo de concentración
    tc_catchment = catchment_tc(
        catchment.area_m2,
        catchment.average_slope,
        catchment.flow_path_length_m,
        minimum_min=criteria.minimum_tc_min,
    )
    tc = effective_tc(
        tc_catchment,
        [upstream_channel_tc(ref, channels_by_id, criteria) for ref in resolved.upstream_channels],
    )

    # Lluvia y caudal
    rainfall = resolve_intensity(catchment, tc.effective_tc_min, reference, criteria)
    if rainfall.using_fallback:
        warnings_found.append(
            f"Intensidad de respaldo ({rainfall.intensity_mmhr:.0f} mm/hr): sin curva IDF"
        )
    c = runoff_coefficient(catchment, reference)
    peak_flow = rational_peak_flow(c, rainfall.intensity_mmhr, catchment.area_m2)

    # Dimensionamiento
    sizing = size_channel(
        peak_flow,
        resolved.shape,
        resolved.gradient,
        manning_n,
        standard_sizes=reference.u_channel_sizes,
        criteria=criteria,
        bottom_width_m=resolved.bottom_width_m,
        side_slope=resolved.side_slope,
    )
    if sizing.overflow:
        warnings_found.append(
            f"Ningún tamaño comercial alcanza el caudal; se adopta {sizing.selected_size}"
        )

    section = sizing.section

    # Verificación al tamaño seleccionado
    capacity = channel_capacity(section, sizing.design_depth_m, resolved.gradient, manning_n)
    if capacity.flow <= 0:
        raise ValueError(f"Capacidad nula para el tamaño {sizing.selected_size}")

    normal = solve_normal_depth(peak_flow, section, resolved.gradient, manning_n)
    status, error, velocity_warning = classify_design(
        peak_flow, capacity.flow, capacity.velocity, criteria
    )
    if velocity_warning:
        warnings_found.append(velocity_warning)

    return CalculationResult(
        catchment_id=catchment.id,
        catchment_name=catchment.name,
        channel_id=resolved.channel_id,
        catchment_tc_min=tc.catchment_tc_min,
        upstream_tc_min=tc.upstream_tc_min,
        effective_tc_min=tc.effective_tc_min,
        return_period=catchment.return_period,
        rainfall_intensity_mmhr=rainfall.intensity_mmhr,
        raw_intensity_mmhr=rainfall.raw_intensity_mmhr,
        intensity_si=rainfall.intensity_mmhr * SI_REPORT_FACTOR,
        climate_change_applied=rainfall.climate_change_applied,
        using_fallback_intensity=rainfall.using_fallback,
        idf_formula=rainfall.formula,
        runoff_coefficient=c,
        peak_flow_m3s=peak_flow,
        channel_shape=resolved.shape,
        channel_material=resolved.material,
        channel_gradient=resolved.gradient,
        manning_n=manning_n,
        required_width_m=sizing.required_width_m,
        selected_width_m=sizing.selected_width_m,
        selected_size=sizing.selected_size,
        design_depth_m=sizing.design_depth_m,
        overflow=sizing.overflow,
        capacity_m3s=capacity.flow,
        velocity_ms=capacity.velocity,
        utilization=peak_flow / capacity.flow,
        normal_depth_m=normal.normal_depth if normal.converged else None,
        channel_area_m2=capacity.area,
        wetted_perimeter_m=capacity.perimeter,
        hydraulic_radius_m=capacity.hydraulic_radius,
        status=status,
        error=error,
        warning="; ".join(warnings_found) or None,
        processed=True,
    )


def process_catchment(
    catchment: CatchmentInput,
    channel: Optional[ChannelInput] = None,
    reference: Optional[ReferenceData] = None,
    criteria: Optional[DesignCriteria] = None,
    channels_by_id: Optional[dict[str, ChannelInput]] = None,
) -> CalculationResult:
    """
    Calcula una cuenca sin propagar excepciones.

    Args:
        catchment: Cuenca a calcular
        channel: Canal vinculado (None = canal por defecto)
        reference: Tablas de referencia (default: tablas del sistema)
        criteria: Criterios de diseño
        channels_by_id: Canales del lote, para Tc aguas arriba

    Returns:
        CalculationResult; si algo falla, `processed=False` y el mensaje
        en `processing_error`
    """
    reference = reference or load_reference_data()
    criteria = criteria or DesignCriteria()

    try:
        return _calculate(catchment, channel, reference, criteria, channels_by_id or {})
    except Exception as e:
        logger.warning("Cuenca %s no procesada: %s", catchment.id, e)
        return CalculationResult.failed(catchment.id, catchment.name, str(e))


def process_catchments(
    catchments: Sequence[CatchmentInput],
    channels: Sequence[ChannelInput] = (),
    reference: Optional[ReferenceData] = None,
    criteria: Optional[DesignCriteria] = None,
    on_progress: Optional[Callable[[int, int], None]] = None,
) -> list[CalculationResult]:
    """
    Calcula todas las cuencas en orden de entrada.

    Siempre devuelve un resultado por cuenca.
    """
    reference = reference or load_reference_data()
    criteria = criteria or DesignCriteria()
    channels_by_id = {channel.id: channel for channel in channels}

    results = []
    for i, catchment in enumerate(catchments, start=1):
        channel = find_linked_channel(catchment.id, channels)
        results.append(
            process_catchment(catchment, channel, reference, criteria, channels_by_id)
        )
        if on_progress:
            on_progress(i, len(catchments))
    return results


def summarize(results: Sequence[CalculationResult], processing_time_ms: float = 0.0) -> BatchSummary:
    """Contadores y errores de un conjunto de resultados."""
    errors = []
    for result in results:
        if result.processing_error:
            errors.append(BatchError(
                catchment_id=result.catchment_id,
                message=result.processing_error,
                processing=True,
            ))
        elif result.error:
            errors.append(BatchError(catchment_id=result.catchment_id, message=result.error))

    processed = sum(1 for r in results if r.processed)
    successful = sum(1 for r in results if r.is_ok)
    return BatchSummary(
        total=len(results),
        processed=processed,
        successful=successful,
        failed=len(results) - successful,
        results=list(results),
        errors=errors,
        processing_time_ms=processing_time_ms,
    )


def run_batch(
    catchments: Sequence[CatchmentInput],
    channels: Sequence[ChannelInput] = (),
    reference: Optional[ReferenceData] = None,
    criteria: Optional[DesignCriteria] = None,
    on_progress: Optional[Callable[[int, int], None]] = None,
) -> BatchSummary:
    """
    Procesa el lote y devuelve el resumen con todos los resultados.

    Args:
        catchments: Cuencas a calcular
        channels: Alineaciones de canal del lote
        reference: Tablas de referencia
        criteria: Criterios de diseño
        on_progress: Callback (procesadas, total)

    Returns:
        BatchSummary
    """
    start = time.perf_counter()
    results = process_catchments(catchments, channels, reference, criteria, on_progress)
    summary = summarize(results, (time.perf_counter() - start) * 1000)

    logger.info(
        "Lote procesado: %d cuencas, %d OK, %d con error de procesamiento (%.0f ms)",
        summary.total, summary.successful, summary.processing_failures,
        summary.processing_time_ms,
    )
    return summary
