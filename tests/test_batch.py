"""
Tests para el procesamiento por lote.
"""

import logging

import pytest

from canalpluvial.batch import (
    classify_design,
    find_linked_channel,
    process_catchment,
    process_catchments,
    resolve_channel,
    resolve_intensity,
    run_batch,
    runoff_coefficient,
    summarize,
    upstream_channel_tc,
)
from canalpluvial.config import (
    CatchmentInput,
    ChannelInput,
    ChannelShape,
    DesignCriteria,
    DesignStatus,
    IDFConstants,
    SubArea,
    UpstreamChannelRef,
)
from canalpluvial.core.tc import channel_tc
from canalpluvial.data import ReferenceData
from canalpluvial.models import CalculationResult


def _catchment(**overrides) -> CatchmentInput:
    data = dict(
        id="X1", area_m2=5000, average_slope=2.0, flow_path_length_m=80,
        surface_type="asphalt", return_period=50,
    )
    data.update(overrides)
    return CatchmentInput(**data)


class TestChannelResolution:
    """Tests para resolución del canal de cada cuenca."""

    def test_find_linked(self, sample_channels):
        assert find_linked_channel("C1", sample_channels).id == "CH1"
        assert find_linked_channel("C3", sample_channels) is None

    def test_default_channel(self, criteria):
        resolved = resolve_channel(None, criteria)
        assert resolved.channel_id is None
        assert resolved.shape == ChannelShape.TRAPEZOIDAL
        assert resolved.gradient == 0.01
        assert resolved.material == "concrete"

    def test_auto_and_manual_gradient(self, sample_channels, criteria):
        assert resolve_channel(sample_channels[0], criteria).gradient == 0.02
        assert resolve_channel(sample_channels[1], criteria).gradient == 0.015


class TestUpstreamTc:
    """Tests para Tc de canales aguas arriba."""

    def test_explicit_tc(self, criteria):
        ref = UpstreamChannelRef(channel_id="CH9", tc_min=30)
        assert upstream_channel_tc(ref, {}, criteria) == 30

    def test_channel_in_batch(self, sample_channels, criteria):
        channels_by_id = {c.id: c for c in sample_channels}
        ref = UpstreamChannelRef(channel_id="CH1")
        assert upstream_channel_tc(ref, channels_by_id, criteria) == pytest.approx(channel_tc(120, 0.02))

    def test_unknown_channel_uses_defaults(self, criteria):
        ref = UpstreamChannelRef(channel_id="CH9")
        assert upstream_channel_tc(ref, {}, criteria) == pytest.approx(channel_tc(100, 0.01))


class TestIntensity:
    """Tests para intensidad de diseño."""

    def test_idf_with_climate_factor(self, reference, criteria):
        result = resolve_intensity(_catchment(), 5.0, reference, criteria)
        assert result.raw_intensity_mmhr == pytest.approx(890 / 10 ** 0.44)
        assert result.intensity_mmhr == pytest.approx(result.raw_intensity_mmhr * 1.281)
        assert result.climate_change_applied
        assert not result.using_fallback

    def test_temporary_design(self, reference, criteria):
        result = resolve_intensity(_catchment(temporary_design=True), 5.0, reference, criteria)
        assert result.intensity_mmhr == pytest.approx(result.raw_intensity_mmhr)
        assert not result.climate_change_applied

    def test_manual_intensity(self, reference, criteria):
        catchment = _catchment(use_idf=False, manual_intensity_mmhr=50)
        result = resolve_intensity(catchment, 5.0, reference, criteria)
        assert result.intensity_mmhr == 50
        assert not result.using_fallback

    def test_fallback_intensity(self, reference, criteria, caplog):
        catchment = _catchment(use_idf=False)
        with caplog.at_level(logging.WARNING, logger="canalpluvial.batch"):
            result = resolve_intensity(catchment, 5.0, reference, criteria)

        assert result.intensity_mmhr == 100.0
        assert result.using_fallback
        assert "X1" in caplog.text

    def test_missing_return_period_raises(self, reference, criteria):
        with pytest.raises(ValueError):
            resolve_intensity(_catchment(return_period=25), 5.0, reference, criteria)


class TestRunoffCoefficient:
    """Tests para C de la cuenca."""

    def test_surface(self, reference):
        assert runoff_coefficient(_catchment(surface_type="roof"), reference) == 0.85

    def test_sub_areas(self, reference):
        catchment = _catchment(sub_areas=[
            SubArea(surface_type="asphalt", area_m2=100),
            SubArea(surface_type="lawn", area_m2=300),
        ])
        assert runoff_coefficient(catchment, reference) == pytest.approx(0.375)

    def test_unknown_surface_raises(self, reference):
        with pytest.raises(ValueError, match="moon"):
            runoff_coefficient(_catchment(surface_type="moon"), reference)


class TestClassifyDesign:
    """Tests para el veredicto de diseño."""

    def test_ok(self, criteria):
        status, error, warning = classify_design(0.5, 0.6, 2.0, criteria)
        assert status == DesignStatus.OK
        assert error is None
        assert warning is None

    def test_over_capacity(self, criteria):
        status, error, _ = classify_design(0.7, 0.6, 2.0, criteria)
        assert status == DesignStatus.NOT_OK
        assert "Utilización" in error
        assert "116.7%" in error

    def test_exactly_full_is_ok(self, criteria):
        status, _, _ = classify_design(0.6, 0.6, 2.0, criteria)
        assert status == DesignStatus.OK

    def test_low_velocity(self, criteria):
        status, error, _ = classify_design(0.1, 0.6, 0.2, criteria)
        assert status == DesignStatus.NOT_OK
        assert error.startswith("Velocidad muy baja")

    def test_low_velocity_overrides_utilization_error(self, criteria):
        _, error, _ = classify_design(0.7, 0.6, 0.2, criteria)
        assert error.startswith("Velocidad muy baja")

    def test_high_velocity_is_warning(self, criteria):
        status, error, warning = classify_design(0.5, 0.6, 5.0, criteria)
        assert status == DesignStatus.OK
        assert error is None
        assert "Velocidad mayor a 4.0 m/s" in warning


class TestProcessCatchment:
    """Tests para el cálculo de una cuenca."""

    def test_u_channel_result(self, sample_catchments, sample_channels, reference):
        result = process_catchment(sample_catchments[0], sample_channels[0], reference)

        assert result.processed
        assert result.channel_id == "CH1"
        assert result.effective_tc_min == 5.0
        assert result.runoff_coefficient == 0.9
        assert result.peak_flow_m3s == pytest.approx(
            0.9 * result.rainfall_intensity_mmhr / 3.6e6 * 5000
        )
        assert result.intensity_si == pytest.approx(result.rainfall_intensity_mmhr * 1e-6)
        assert result.selected_size == "450mm"
        assert result.capacity_m3s >= result.peak_flow_m3s
        assert result.utilization == pytest.approx(result.peak_flow_m3s / result.capacity_m3s)
        assert result.status == DesignStatus.OK
        assert result.is_ok
        assert result.idf_formula.startswith("i = 890")

    def test_default_channel(self, sample_catchments, reference):
        result = process_catchment(sample_catchments[2], None, reference)
        assert result.channel_id is None
        assert result.channel_shape == ChannelShape.TRAPEZOIDAL
        assert result.selected_size.endswith("m")
        assert result.normal_depth_m is not None
        assert result.normal_depth_m <= result.design_depth_m

    def test_low_velocity_not_ok(self, reference):
        catchment = _catchment(area_m2=100, flow_path_length_m=10, surface_type="lawn", return_period=10)
        channel = ChannelInput(id="G1", shape="trapezoidal", gradient=0.001, material="grass")
        result = process_catchment(catchment, channel, reference)

        assert result.processed
        assert result.selected_size == "1.0m"
        assert result.status == DesignStatus.NOT_OK
        assert "Velocidad muy baja" in result.error

    def test_high_velocity_warning(self, sample_catchments, reference):
        channel = ChannelInput(id="S1", shape="u-channel", gradient=0.2)
        result = process_catchment(sample_catchments[0], channel, reference)

        assert result.status == DesignStatus.OK
        assert "Velocidad mayor" in result.warning

    def test_fallback_flagged(self, reference):
        result = process_catchment(_catchment(use_idf=False), None, reference)
        assert result.using_fallback_intensity
        assert result.rainfall_intensity_mmhr == 100.0
        assert "Intensidad de respaldo" in result.warning

    def test_overflow_flagged(self, reference):
        catchment = _catchment(area_m2=200000)
        channel = ChannelInput(id="U1", shape="u-channel", gradient=0.005)
        with pytest.warns(UserWarning):
            result = process_catchment(catchment, channel, reference)

        assert result.overflow
        assert result.selected_size == "600mm"
        assert result.status == DesignStatus.NOT_OK
        assert "Utilización" in result.error

    def test_capacity_uses_section_overrides(self, reference):
        """La verificación usa el ancho de fondo y talud del canal."""
        channel = ChannelInput(id="T2", bottom_width_m=1.0, side_slope=1.0)
        result = process_catchment(_catchment(), channel, reference)

        depth = result.design_depth_m
        assert depth == pytest.approx((result.selected_width_m - 1.0) / 2)
        assert result.channel_area_m2 == pytest.approx(depth * (1.0 + depth))

    def test_upstream_controls_tc(self, reference):
        channel = ChannelInput(
            id="T1", upstream_channels=[UpstreamChannelRef(channel_id="UP", tc_min=30)],
        )
        result = process_catchment(_catchment(), channel, reference)
        assert result.upstream_tc_min == 30
        assert result.effective_tc_min == 30

    def test_exception_is_captured(self, reference):
        result = process_catchment(_catchment(surface_type="moon"), None, reference)
        assert not result.processed
        assert "moon" in result.processing_error
        assert result.peak_flow_m3s == 0
        assert result.selected_size == "N/A"

    def test_custom_reference(self, reference):
        """Tablas inyectadas reemplazan a las del sistema."""
        custom = ReferenceData(
            surface_types=reference.surface_types,
            channel_materials=reference.channel_materials,
            u_channel_sizes=reference.u_channel_sizes,
            idf_table=(IDFConstants(return_period=25, a=800, b=5, c=0.44),),
        )
        result = process_catchment(_catchment(return_period=25), None, custom)
        assert result.processed
        assert result.raw_intensity_mmhr == pytest.approx(800 / 10 ** 0.44)


class TestBatch:
    """Tests para el lote completo."""

    def test_one_result_per_catchment(self, sample_catchments, sample_channels):
        results = process_catchments(sample_catchments, sample_channels)
        assert [r.catchment_id for r in results] == ["C1", "C2", "C3"]

    def test_upstream_from_batch(self, sample_catchments, sample_channels):
        results = process_catchments(sample_catchments, sample_channels)
        assert results[1].upstream_tc_min == pytest.approx(channel_tc(120, 0.02))

    def test_failure_does_not_stop_batch(self, sample_catchments, sample_channels):
        catchments = sample_catchments + [_catchment(id="BAD", surface_type="moon")]
        summary = run_batch(catchments, sample_channels)

        assert summary.total == 4
        assert summary.processed == 3
        assert summary.processing_failures == 1
        assert summary.successful == 3
        assert summary.failed == 1
        assert len(summary.errors) == 1
        assert summary.errors[0].processing
        assert str(summary.errors[0]).startswith("Cuenca BAD: Error de procesamiento - ")

    def test_missing_return_period_is_processing_error(self, sample_channels):
        summary = run_batch([_catchment(return_period=25)], sample_channels)
        assert summary.processed == 0
        assert summary.errors[0].processing

    def test_progress_callback(self, sample_catchments):
        calls = []
        process_catchments(sample_catchments, on_progress=lambda i, n: calls.append((i, n)))
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_criteria_applied(self, sample_catchments):
        criteria = DesignCriteria(climate_change_factor=1.0)
        results = process_catchments(sample_catchments[:1], criteria=criteria)
        assert results[0].rainfall_intensity_mmhr == pytest.approx(results[0].raw_intensity_mmhr)

    def test_summarize_design_errors(self):
        results = [
            CalculationResult(catchment_id="A", status=DesignStatus.OK),
            CalculationResult(catchment_id="B", status=DesignStatus.NOT_OK, error="Velocidad muy baja"),
            CalculationResult.failed("C", "", "boom"),
        ]
        summary = summarize(results, processing_time_ms=12.0)

        assert summary.successful == 1
        assert summary.failed == 2
        assert summary.processed == 2
        assert [e.processing for e in summary.errors] == [False, True]
        assert str(summary.errors[0]) == "Cuenca B: Velocidad muy baja"
        assert summary.processing_time_ms == 12.0

    def test_empty_batch(self):
        summary = run_batch([])
        assert summary.total == 0
        assert summary.failed == 0
        assert summary.processing_time_ms >= 0
