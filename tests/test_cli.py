"""
Tests para la CLI - Comandos de tc, idf, runoff, channel y batch.
"""

import json

import pytest
import typer
import yaml
from typer.testing import CliRunner

from canalpluvial.cli import app
from canalpluvial.cli.batch import TEMPLATE, batch_app, load_batch_file
from canalpluvial.cli.channel import channel_app, channel_capacity_cmd, channel_size_cmd
from canalpluvial.cli.idf import idf_app, idf_intensity_cmd
from canalpluvial.cli.runoff import runoff_app, runoff_rational, runoff_weighted_c
from canalpluvial.cli.tc import tc_app, tc_catchment, tc_channel
from canalpluvial.cli.theme import THEME_MINIMAL, CLITheme, ThemeName
from canalpluvial.config import ChannelShape


runner = CliRunner()


class TestTcCommands:
    """Tests para comandos tc."""

    def test_channel(self, capsys):
        """L=100 m, S=0.01 -> 4.08 min."""
        tc_channel(length=100.0, gradient=0.01)

        captured = capsys.readouterr()
        assert "Tc = 4.08 minutos" in captured.out
        assert "1.00%" in captured.out

    def test_catchment_minimum(self, capsys):
        tc_catchment(area=5000.0, slope=2.0, length=80.0, minimum=5.0)

        captured = capsys.readouterr()
        assert "TIEMPO DE CONCENTRACION" in captured.out
        assert "5.00" in captured.out
        assert "Tc mínimo" in captured.out

    def test_catchment_invalid_area(self):
        with pytest.raises(typer.Exit):
            tc_catchment(area=0.0, slope=2.0, length=80.0)

    def test_runner(self):
        result = runner.invoke(tc_app, ["channel", "100", "0.01"])
        assert result.exit_code == 0
        assert "Tc =" in result.output


class TestIdfCommands:
    """Tests para comandos idf."""

    def test_intensity(self, capsys):
        idf_intensity_cmd(duration=60.0, return_period=10, temporary=False)

        captured = capsys.readouterr()
        assert "INTENSIDAD IDF" in captured.out
        assert "x1.281" in captured.out

    def test_intensity_temporary(self, capsys):
        idf_intensity_cmd(duration=60.0, return_period=10, temporary=True)

        captured = capsys.readouterr()
        assert "Ajuste climatico" not in captured.out

    def test_invalid_return_period(self):
        result = runner.invoke(idf_app, ["intensity", "60", "--tr", "25"])
        assert result.exit_code == 1
        assert "Período de retorno" in result.output

    def test_table_json(self, tmp_path):
        output = tmp_path / "idf.json"
        result = runner.invoke(idf_app, ["table", "--tr", "10,50", "-d", "5,60", "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["return_periods_yr"] == [10, 50]
        assert len(data["intensities_mmhr"]) == 2
        assert data["intensities_mmhr"][0][1] == pytest.approx(720 / 65 ** 0.44 * 1.281)

    def test_table_invalid_list(self):
        result = runner.invoke(idf_app, ["table", "-d", "5,abc"])
        assert result.exit_code == 1


class TestRunoffCommands:
    """Tests para comandos runoff."""

    def test_rational(self, capsys):
        runoff_rational(c=0.9, intensity=100.0, area=1000.0)

        captured = capsys.readouterr()
        assert "Método Racional" in captured.out
        assert "Q = 0.0250 m3/s (25.0 L/s)" in captured.out

    def test_rational_invalid_c(self):
        with pytest.raises(typer.Exit):
            runoff_rational(c=1.5, intensity=100.0, area=1000.0)

    def test_weighted_c(self, capsys):
        runoff_weighted_c(pairs=["asphalt:100", "lawn:300"])

        captured = capsys.readouterr()
        assert "0.375" in captured.out

    def test_weighted_c_unknown_surface(self):
        result = runner.invoke(runoff_app, ["weighted-c", "moon:100"])
        assert result.exit_code == 1

    def test_weighted_c_bad_pair(self):
        result = runner.invoke(runoff_app, ["weighted-c", "asphalt100"])
        assert result.exit_code == 1


class TestChannelCommands:
    """Tests para comandos channel."""

    def test_capacity_trapezoid(self, capsys):
        channel_capacity_cmd(
            depth=1.0, slope=0.001, shape=ChannelShape.TRAPEZOIDAL,
            width=None, bottom_width=2.0, side_slope=1.5, material="concrete", n=None,
        )

        captured = capsys.readouterr()
        assert "CAPACIDAD DE MANNING" in captured.out
        assert "3.5000" in captured.out

    def test_size_u_channel(self, capsys):
        channel_size_cmd(flow=0.05, slope=0.01, shape=ChannelShape.U_CHANNEL, material="concrete", n=None)

        captured = capsys.readouterr()
        assert "225mm" in captured.out

    def test_size_trapezoid(self):
        result = runner.invoke(channel_app, ["size", "1.0", "-S", "0.01"])
        assert result.exit_code == 0
        assert "2.0m" in result.output

    def test_u_channel_requires_width(self):
        result = runner.invoke(channel_app, ["capacity", "0.2", "-S", "0.01", "-s", "u-channel"])
        assert result.exit_code == 1
        assert "--width" in result.output

    def test_normal_depth(self):
        result = runner.invoke(channel_app, ["normal-depth", "0.5", "-S", "0.01"])
        assert result.exit_code == 0
        assert "TIRANTE" in result.output

    def test_unknown_material(self):
        result = runner.invoke(channel_app, ["size", "1.0", "-m", "titanium"])
        assert result.exit_code == 1


class TestBatchCommands:
    """Tests para comandos batch."""

    def test_template_is_valid(self, tmp_path):
        path = tmp_path / "lote.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(TEMPLATE, f)

        batch = load_batch_file(path)
        assert [c.id for c in batch.catchments] == ["C1", "C2"]
        assert batch.channels[1].upstream_channels[0].channel_id == "CH1"

    def test_template_then_run(self, tmp_path):
        config = tmp_path / "lote.yaml"
        output = tmp_path / "resultados.json"

        result = runner.invoke(batch_app, ["template", "-o", str(config)])
        assert result.exit_code == 0
        assert config.exists()

        result = runner.invoke(batch_app, ["run", str(config), "-o", str(output)])
        assert result.exit_code == 0
        assert "RESUMEN" in result.output

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["total"] == 2
        assert [r["catchment_id"] for r in data["results"]] == ["C1", "C2"]

    def test_template_no_overwrite(self, tmp_path):
        config = tmp_path / "lote.yaml"
        config.write_text("x: 1", encoding="utf-8")

        result = runner.invoke(batch_app, ["template", "-o", str(config)])
        assert result.exit_code == 1
        assert config.read_text(encoding="utf-8") == "x: 1"

    def test_missing_file(self, tmp_path):
        result = runner.invoke(batch_app, ["run", str(tmp_path / "no_existe.yaml")])
        assert result.exit_code == 1
        assert "no encontrado" in result.output

    def test_invalid_file(self, tmp_path):
        config = tmp_path / "lote.yaml"
        config.write_text("catchments: []\n", encoding="utf-8")

        result = runner.invoke(batch_app, ["run", str(config)])
        assert result.exit_code == 1

    def test_processing_error_reported(self, tmp_path):
        config = tmp_path / "lote.yaml"
        config.write_text(yaml.safe_dump({"catchments": [{
            "id": "Z1", "area_m2": 500, "average_slope": 1,
            "flow_path_length_m": 20, "surface_type": "moon",
        }]}), encoding="utf-8")

        result = runner.invoke(batch_app, ["run", str(config)])
        assert result.exit_code == 0
        assert "Error de procesamiento" in result.output


class TestMainApp:
    """Tests para la aplicación principal."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("tc", "idf", "runoff", "channel", "batch", "tables"):
            assert name in result.output

    def test_tables(self):
        result = runner.invoke(app, ["tables"])
        assert result.exit_code == 0
        assert "asphalt" in result.output
        assert "600mm" in result.output

    def test_subcommand(self):
        result = runner.invoke(app, ["runoff", "rational", "0.9", "100", "1000"])
        assert result.exit_code == 0
        assert "Q = 0.0250" in result.output

    def test_minimal_theme(self):
        try:
            result = runner.invoke(app, ["--theme", "minimal", "tables"])
            assert result.exit_code == 0
            assert CLITheme.get_palette() is THEME_MINIMAL
        finally:
            CLITheme.set_theme(ThemeName.DEFAULT)
