"""
Comandos de lote: cálculo de varias cuencas desde un archivo YAML.
"""

import json
import warnings
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from pydantic import ValidationError

from canalpluvial.batch import run_batch
from canalpluvial.config import BatchInput
from canalpluvial.cli.theme import (
    print_batch_results_table,
    print_error,
    print_header,
    print_success,
    print_summary_box,
    print_warning,
)

# Crear sub-aplicación
batch_app = typer.Typer(help="Cálculo por lote desde archivo YAML")


TEMPLATE = {
    "criteria": {
        "min_velocity_ms": 0.3,
        "max_velocity_ms": 4.0,
    },
    "catchments": [
        {
            "id": "C1",
            "name": "Estacionamiento norte",
            "area_m2": 5000,
            "average_slope": 2.0,
            "flow_path_length_m": 80,
            "surface_type": "asphalt",
            "return_period": 50,
        },
        {
            "id": "C2",
            "name": "Talud verde",
            "area_m2": 12000,
            "average_slope": 8.0,
            "flow_path_length_m": 150,
            "surface_type": "lawn_steep",
            "return_period": 10,
            "temporary_design": True,
        },
    ],
    "channels": [
        {
            "id": "CH1",
            "name": "Canal perimetral",
            "linked_catchment_id": "C1",
            "shape": "u-channel",
            "gradient": 0.02,
            "material": "concrete",
            "length_m": 120,
        },
        {
            "id": "CH2",
            "name": "Cuneta de pie de talud",
            "linked_catchment_id": "C2",
            "shape": "trapezoidal",
            "gradient": {"mode": "auto", "value": 0.015},
            "material": "grass",
            "upstream_channels": [{"channel_id": "CH1", "channel_no": "1"}],
        },
    ],
}


def load_batch_file(path: Path) -> BatchInput:
    """
    Lee y valida un archivo de lote YAML.

    Raises:
        FileNotFoundError: Si el archivo no existe
        ValueError: Si el contenido no es válido
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError("El archivo de lote debe contener un mapeo YAML")
    return BatchInput.model_validate(data)


@batch_app.command("run")
def batch_run(
    config_file: Annotated[str, typer.Argument(help="Archivo YAML del lote")],
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Guardar resultados en JSON")] = None,
):
    """
    Calcula todas las cuencas de un archivo YAML.

    Formato del archivo YAML:
    ```yaml
    catchments:
      - id: C1
        area_m2: 5000
        average_slope: 2.0      # m cada 100 m
        flow_path_length_m: 80
        surface_type: asphalt
        return_period: 50
    channels:
      - id: CH1
        linked_catchment_id: C1
        shape: u-channel
        gradient: 0.02
        material: concrete
    ```

    Ejemplo:
        canalpluvial batch run lote.yaml
        canalpluvial batch run lote.yaml -o resultados.json
    """
    config_path = Path(config_file)
    if not config_path.exists():
        print_error(f"Archivo no encontrado: {config_file}")
        raise typer.Exit(1)

    try:
        batch = load_batch_file(config_path)
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        print_error(f"Archivo de lote inválido: {e}")
        raise typer.Exit(1)

    with warnings.catch_warnings():
        # Los desbordes quedan en la advertencia de cada resultado
        warnings.simplefilter("ignore", UserWarning)
        summary = run_batch(batch.catchments, batch.channels, criteria=batch.criteria)

    print_header("CALCULO POR LOTE", config_path.name)
    print_batch_results_table(summary.results)

    print_summary_box("RESUMEN", [
        ("Cuencas", str(summary.total), ""),
        ("Procesadas", str(summary.processed), ""),
        ("OK", str(summary.successful), ""),
        ("Not OK / error", str(summary.failed), ""),
        ("Tiempo", f"{summary.processing_time_ms:.0f}", "ms"),
    ])

    for error in summary.errors:
        print_error(str(error))
    for result in summary.results:
        if result.warning:
            print_warning(f"Cuenca {result.catchment_id}: {result.warning}")

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump(summary.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
        print_success(f"Resultados guardados en {output}")


@batch_app.command("template")
def batch_template(
    output: Annotated[str, typer.Option("--output", "-o", help="Archivo YAML a crear")] = "lote.yaml",
    force: Annotated[bool, typer.Option("--force", "-f", help="Sobrescribir si existe")] = False,
):
    """
    Escribe un archivo de lote de ejemplo.

    Ejemplo:
        canalpluvial batch template -o mi_lote.yaml
    """
    path = Path(output)
    if path.exists() and not force:
        print_error(f"El archivo {output} ya existe (use --force para sobrescribir)")
        raise typer.Exit(1)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(TEMPLATE, f, sort_keys=False, allow_unicode=True)
    print_success(f"Plantilla guardada en {output}")
