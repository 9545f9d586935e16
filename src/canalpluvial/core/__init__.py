"""Módulos de cálculo hidrológico e hidráulico."""

from canalpluvial.core.units import (
    mm_per_hour_to_m_per_s,
    m3s_to_ls,
    ls_to_m3s,
    hectares_to_m2,
    m2_to_hectares,
    ms_to_kmh,
    kmh_to_ms,
)

from canalpluvial.core.geometry import (
    ChannelGeometry,
    trapezoid_area,
    trapezoid_perimeter,
    trapezoid_top_width,
    u_channel_area,
    u_channel_perimeter,
    u_channel_top_width,
    hydraulic_radius,
    trapezoid_geometry,
    u_channel_geometry,
    section_geometry,
    make_section,
)

from canalpluvial.core.numeric import (
    BisectionResult,
    bisection,
)

from canalpluvial.core.manning import (
    ManningResult,
    manning_flow,
    flow_velocity,
    channel_capacity,
    solve_normal_depth,
)

from canalpluvial.core.rational import (
    rational_peak_flow,
    weighted_c,
    weighted_c_from_subareas,
)

from canalpluvial.core.idf import (
    CLIMATE_CHANGE_FACTOR,
    IDFResult,
    find_idf_constants,
    raw_idf_intensity,
    idf_intensity,
    generate_idf_table,
    format_idf_formula,
)

from canalpluvial.core.tc import (
    TcBreakdown,
    catchment_tc,
    channel_tc,
    upstream_tc,
    effective_tc,
)

from canalpluvial.core.sizing import (
    SizingResult,
    size_channel,
    size_trapezoidal,
    size_u_channel,
)

__all__ = [
    # Unidades
    "mm_per_hour_to_m_per_s",
    "m3s_to_ls",
    "ls_to_m3s",
    "hectares_to_m2",
    "m2_to_hectares",
    "ms_to_kmh",
    "kmh_to_ms",
    # Geometría
    "ChannelGeometry",
    "trapezoid_area",
    "trapezoid_perimeter",
    "trapezoid_top_width",
    "u_channel_area",
    "u_channel_perimeter",
    "u_channel_top_width",
    "hydraulic_radius",
    "trapezoid_geometry",
    "u_channel_geometry",
    "section_geometry",
    "make_section",
    # Bisección
    "BisectionResult",
    "bisection",
    # Manning
    "ManningResult",
    "manning_flow",
    "flow_velocity",
    "channel_capacity",
    "solve_normal_depth",
    # Método racional
    "rational_peak_flow",
    "weighted_c",
    "weighted_c_from_subareas",
    # IDF
    "CLIMATE_CHANGE_FACTOR",
    "IDFResult",
    "find_idf_constants",
    "raw_idf_intensity",
    "idf_intensity",
    "generate_idf_table",
    "format_idf_formula",
    # Tiempo de concentración
    "TcBreakdown",
    "catchment_tc",
    "channel_tc",
    "upstream_tc",
    "effective_tc",
    # Dimensionamiento
    "SizingResult",
    "size_channel",
    "size_trapezoidal",
    "size_u_channel",
]
