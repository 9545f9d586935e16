"""Configuración de pytest para tests de canalpluvial."""

import pytest

from canalpluvial.config import (
    CatchmentInput,
    ChannelInput,
    DesignCriteria,
    IDFConstants,
    TrapezoidalSection,
    UChannelSection,
)
from canalpluvial.data import load_reference_data


@pytest.fixture
def idf_table():
    """Constantes IDF de Hong Kong (b=5, c=0.44)."""
    return [
        IDFConstants(return_period=rp, a=a, b=5, c=0.44)
        for rp, a in [
            (2, 570), (5, 660), (10, 720), (20, 780), (50, 890),
            (100, 960), (200, 1050), (500, 1170), (1000, 1260),
        ]
    ]


@pytest.fixture
def reference():
    """Tablas de referencia del sistema."""
    return load_reference_data()


@pytest.fixture
def criteria():
    """Criterios de diseño por defecto."""
    return DesignCriteria()


@pytest.fixture
def trapezoid():
    """Sección trapecial estándar (b=0.5 m, z=2)."""
    return TrapezoidalSection(bottom_width_m=0.5, side_slope=2.0)


@pytest.fixture
def u_channel():
    """Canal en U de 300 mm."""
    return UChannelSection(width_m=0.3)


@pytest.fixture
def sample_catchments():
    """Tres cuencas típicas de un lote."""
    return [
        CatchmentInput(
            id="C1", name="Estacionamiento", area_m2=5000, average_slope=2.0,
            flow_path_length_m=80, surface_type="asphalt", return_period=50,
        ),
        CatchmentInput(
            id="C2", name="Talud", area_m2=12000, average_slope=8.0,
            flow_path_length_m=150, surface_type="lawn_steep", return_period=10,
        ),
        CatchmentInput(
            id="C3", name="Techos", area_m2=800, average_slope=1.0,
            flow_path_length_m=40, surface_type="roof", return_period=10,
        ),
    ]


@pytest.fixture
def sample_channels():
    """Canales vinculados a C1 (en U) y C2 (trapecial)."""
    return [
        ChannelInput(
            id="CH1", linked_catchment_id="C1", shape="u-channel",
            gradient=0.02, material="concrete", length_m=120,
        ),
        ChannelInput(
            id="CH2", linked_catchment_id="C2", shape="trapezoidal",
            gradient={"mode": "auto", "value": 0.015}, material="grass",
            upstream_channels=[{"channel_id": "CH1", "channel_no": "1"}],
        ),
    ]
