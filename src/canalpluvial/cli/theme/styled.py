"""
Funciones que devuelven objetos Rich estilizados (no imprimen).
"""

from rich import box
from rich.panel import Panel
from rich.text import Text

from canalpluvial.cli.theme.palette import get_palette


def styled_header(text: str, subtitle: str = None) -> Panel:
    """Encabezado en panel."""
    p = get_palette()
    content = Text(text, style=f"bold {p.primary}")
    if subtitle:
        content.append(f"\n{subtitle}", style=p.muted)
    return Panel(content, border_style=p.border, box=box.ROUNDED, padding=(0, 2))


def styled_label(label: str, value, unit: str = None) -> Text:
    """Etiqueta con valor y unidad opcional."""
    p = get_palette()
    text = Text()
    text.append(f"{label}: ", style=p.label)
    text.append(str(value), style=f"bold {p.number}")
    if unit:
        text.append(f" {unit}", style=p.unit)
    return text


def styled_success(text: str) -> Text:
    return Text(f"[+] {text}", style=get_palette().success)


def styled_warning(text: str) -> Text:
    return Text(f"[!] {text}", style=get_palette().warning)


def styled_error(text: str) -> Text:
    return Text(f"[x] {text}", style=get_palette().error)


def styled_note(text: str) -> Text:
    """Nota informativa."""
    p = get_palette()
    result = Text()
    result.append("NOTA: ", style=f"bold {p.info}")
    result.append(text, style=p.info)
    return result


def styled_status(ok: bool, processed: bool = True) -> Text:
    """Estado de diseño coloreado: OK, Not OK o ERROR (no procesada)."""
    p = get_palette()
    if not processed:
        return Text("ERROR", style=f"bold {p.error}")
    if ok:
        return Text("OK", style=f"bold {p.success}")
    return Text("Not OK", style=f"bold {p.error}")


def create_summary_panel(title: str, lines: list[Text]) -> Panel:
    """Panel de resumen con una línea por ítem."""
    p = get_palette()
    return Panel(
        Text("\n").join(lines),
        title=title,
        title_align="left",
        border_style=p.border,
        box=box.ROUNDED,
        padding=(0, 1),
    )
