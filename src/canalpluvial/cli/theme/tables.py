"""
Funciones para crear e imprimir tablas Rich.
"""

from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from canalpluvial.cli.theme.palette import get_console, get_palette
from canalpluvial.cli.theme.styled import styled_status

if TYPE_CHECKING:
    from canalpluvial.data import ReferenceData
    from canalpluvial.models import CalculationResult


def create_results_table(
    title: str = None,
    columns: list[tuple[str, str]] = None,  # [(nombre, justify), ...]
) -> Table:
    """Crea una tabla estilizada para resultados."""
    p = get_palette()

    table = Table(
        title=title,
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        show_header=True,
        padding=(0, 1),
    )

    if columns:
        for name, justify in columns:
            table.add_column(name, justify=justify)

    return table


def print_batch_results_table(
    results: list["CalculationResult"],
    title: str = "RESULTADOS POR CUENCA",
) -> None:
    """Imprime una fila por cuenca con tamaño, caudal y estado."""
    console = get_console()
    p = get_palette()

    if not results:
        console.print("  No hay resultados.", style=p.muted)
        return

    table = create_results_table(title)
    table.add_column("Cuenca", style=p.accent)
    table.add_column("Tc (min)", justify="right", style=p.number)
    table.add_column("i (mm/hr)", justify="right", style=p.number)
    table.add_column("C", justify="right", style=p.number)
    table.add_column("Q (m³/s)", justify="right", style=p.number)
    table.add_column("Forma")
    table.add_column("Tamaño", justify="right", style=f"bold {p.number}")
    table.add_column("Cap. (m³/s)", justify="right", style=p.number)
    table.add_column("V (m/s)", justify="right", style=p.number)
    table.add_column("Uso", justify="right", style=p.number)
    table.add_column("Estado", justify="center")

    for r in results:
        if not r.processed:
            table.add_row(
                r.catchment_id, "-", "-", "-", "-", "-", r.selected_size, "-", "-", "-",
                styled_status(False, processed=False),
            )
            continue
        table.add_row(
            r.catchment_id,
            f"{r.effective_tc_min:.1f}",
            f"{r.rainfall_intensity_mmhr:.1f}",
            f"{r.runoff_coefficient:.2f}",
            f"{r.peak_flow_m3s:.3f}",
            r.channel_shape.value if r.channel_shape else "-",
            r.selected_size,
            f"{r.capacity_m3s:.3f}",
            f"{r.velocity_ms:.2f}",
            f"{r.utilization:.0%}",
            styled_status(r.is_ok),
        )

    console.print(table)


def print_reference_tables(reference: "ReferenceData") -> None:
    """Imprime superficies, materiales, tamaños de canal en U y constantes IDF."""
    console = get_console()
    p = get_palette()

    surfaces = create_results_table("Coeficientes de escorrentía")
    surfaces.add_column("Id", style=p.accent)
    surfaces.add_column("Superficie")
    surfaces.add_column("C", justify="right", style=p.number)
    for s in reference.surface_types:
        surfaces.add_row(s.id, s.name, f"{s.coefficient:.2f}")
    console.print(surfaces)

    materials = create_results_table("Materiales de canal")
    materials.add_column("Id", style=p.accent)
    materials.add_column("Material")
    materials.add_column("n", justify="right", style=p.number)
    for m in reference.channel_materials:
        materials.add_row(m.id, m.name, f"{m.manning_n:.3f}")
    console.print(materials)

    sizes = create_results_table("Canales en U comerciales")
    sizes.add_column("Tamaño", style=p.accent)
    sizes.add_column("Ancho (m)", justify="right", style=p.number)
    for size in reference.u_channel_sizes:
        sizes.add_row(size.label, f"{size.width_m:.3f}")
    console.print(sizes)

    idf = create_results_table(f"Constantes IDF {reference.idf_source}".strip())
    idf.add_column("Tr (años)", justify="right", style=p.accent)
    idf.add_column("a", justify="right", style=p.number)
    idf.add_column("b", justify="right", style=p.number)
    idf.add_column("c", justify="right", style=p.number)
    for row in sorted(reference.idf_table, key=lambda r: r.return_period):
        idf.add_row(str(row.return_period), f"{row.a:g}", f"{row.b:g}", f"{row.c:g}")
    console.print(idf)


def print_idf_matrix(
    durations: list[float],
    return_periods: list[int],
    intensities,
    title: str = "INTENSIDADES (mm/hr)",
) -> None:
    """Imprime la matriz IDF: filas por duración, columnas por período."""
    p = get_palette()
    table = create_results_table(title)
    table.add_column("t (min)", justify="right", style=p.accent)
    for rp in return_periods:
        table.add_column(f"Tr {rp}", justify="right", style=p.number)

    for j, duration in enumerate(durations):
        table.add_row(
            f"{duration:g}",
            *[f"{intensities[i][j]:.1f}" for i in range(len(return_periods))],
        )

    get_console().print(table)
