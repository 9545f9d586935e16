"""Tests para dimensionamiento de canales."""

import pytest

from canalpluvial.config import (
    ChannelShape,
    DesignCriteria,
    StandardChannelSize,
    TrapezoidalSection,
    UChannelSection,
)
from canalpluvial.core.manning import manning_flow
from canalpluvial.core.sizing import size_channel, size_trapezoidal, size_u_channel


class TestTrapezoidalSizing:
    """Tests para canal trapecial."""

    def test_rounds_up_to_half_meter(self):
        """Q=1 m³/s, S=0.01, n=0.013: T≈1.83 m -> 2.0 m."""
        result = size_trapezoidal(1.0, 0.01, 0.013)

        assert result.shape == ChannelShape.TRAPEZOIDAL
        assert result.required_width_m == pytest.approx(1.83, abs=0.02)
        assert result.selected_width_m == pytest.approx(2.0)
        assert result.selected_size == "2.0m"
        assert result.design_depth_m == pytest.approx(0.375)
        assert result.converged

    def test_selected_covers_flow(self):
        section = TrapezoidalSection(bottom_width_m=0.5, side_slope=2.0)
        for flow in (0.05, 0.3, 2.5):
            result = size_trapezoidal(flow, 0.005, 0.025)
            assert result.selected_width_m >= result.required_width_m
            assert manning_flow(result.design_depth_m, section, 0.005, 0.025) >= flow

    def test_selected_is_multiple_of_increment(self):
        result = size_trapezoidal(0.4, 0.01, 0.013)
        assert (result.selected_width_m / 0.5) == pytest.approx(round(result.selected_width_m / 0.5))

    def test_custom_section(self):
        result = size_trapezoidal(1.0, 0.01, 0.013, bottom_width_m=1.0, side_slope=1.0)
        assert result.design_depth_m == pytest.approx((result.selected_width_m - 1.0) / 2)

    @pytest.mark.parametrize("flow", [0.01, 0.1, 0.3, 1.5])
    def test_zero_side_slope_rejected(self, flow):
        """Talud nulo no tiene ancho superficial que dimensionar."""
        with pytest.raises(ValueError, match="Talud"):
            size_trapezoidal(flow, 0.01, 0.013, bottom_width_m=0.6, side_slope=0.0)

    def test_zero_bottom_width_rejected(self):
        with pytest.raises(ValueError, match="Ancho de fondo"):
            size_trapezoidal(0.3, 0.01, 0.013, bottom_width_m=0.0, side_slope=2.0)

    def test_result_carries_section(self):
        result = size_trapezoidal(1.0, 0.01, 0.013, bottom_width_m=1.0, side_slope=1.0)
        assert result.section == TrapezoidalSection(bottom_width_m=1.0, side_slope=1.0)

    def test_beyond_depth_range_stays_safe(self):
        """Sin convergencia se sube el ancho hasta cubrir el caudal."""
        result = size_trapezoidal(1000.0, 0.01, 0.013)
        section = TrapezoidalSection(bottom_width_m=0.5, side_slope=2.0)

        assert not result.converged
        assert manning_flow(result.design_depth_m, section, 0.01, 0.013) >= 1000.0


class TestUChannelSizing:
    """Tests para canal en U."""

    def test_selects_first_sufficient_size(self, reference):
        result = size_u_channel(0.05, 0.01, 0.013, reference.u_channel_sizes)

        assert result.shape == ChannelShape.U_CHANNEL
        assert result.selected_size == "225mm"
        assert result.selected_width_m == pytest.approx(0.225)
        assert result.design_depth_m == pytest.approx(0.225)
        assert not result.overflow
        assert result.required_width_m <= 0.225
        assert result.section == UChannelSection(width_m=0.225)

    def test_previous_size_is_insufficient(self, reference):
        section = UChannelSection(width_m=0.15)
        assert manning_flow(0.15, section, 0.01, 0.013) < 0.05

    def test_overflow_selects_largest(self, reference):
        with pytest.warns(UserWarning, match="600mm"):
            result = size_u_channel(5.0, 0.01, 0.013, reference.u_channel_sizes)

        assert result.overflow
        assert result.selected_size == "600mm"

    def test_unsorted_sizes(self):
        sizes = [
            StandardChannelSize(size_mm=600, label="600mm"),
            StandardChannelSize(size_mm=300, label="300mm"),
        ]
        result = size_u_channel(0.05, 0.01, 0.013, sizes)
        assert result.selected_size == "300mm"

    def test_empty_sizes_raise(self):
        with pytest.raises(ValueError):
            size_u_channel(0.05, 0.01, 0.013, [])


class TestSizeChannel:
    """Tests para despacho por forma."""

    def test_dispatch_by_string(self, reference):
        result = size_channel(0.05, "u-channel", 0.01, 0.013, reference.u_channel_sizes)
        assert result.shape == ChannelShape.U_CHANNEL

        result = size_channel(1.0, "trapezoidal", 0.01, 0.013)
        assert result.selected_size == "2.0m"

    def test_criteria_increment(self):
        criteria = DesignCriteria(top_width_increment_m=0.25)
        result = size_channel(1.0, ChannelShape.TRAPEZOIDAL, 0.01, 0.013, criteria=criteria)
        assert result.selected_width_m == pytest.approx(2.0)

    def test_negative_flow(self):
        with pytest.raises(ValueError):
            size_channel(-0.1, "trapezoidal", 0.01, 0.013)

    def test_unknown_shape(self):
        with pytest.raises(ValueError):
            size_channel(0.1, "circular", 0.01, 0.013)
