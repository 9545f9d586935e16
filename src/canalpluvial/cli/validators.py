"""
Validadores centralizados para entradas CLI.

Cada validador imprime un error estilizado y termina con código 1
(o devuelve False si exit_on_error=False).
"""

import typer

from canalpluvial.cli.theme import print_error, print_warning
from canalpluvial.data import ReferenceData


def _fail(message: str, exit_on_error: bool) -> bool:
    print_error(message)
    if exit_on_error:
        raise typer.Exit(1)
    return False


# =============================================================================
# VALIDADORES DE RANGO
# =============================================================================

def validate_positive(value: float, label: str, exit_on_error: bool = True) -> bool:
    """Valida que un valor sea estrictamente positivo."""
    if value <= 0:
        return _fail(f"{label} debe ser positivo (recibido: {value})", exit_on_error)
    return True


def validate_non_negative(value: float, label: str, exit_on_error: bool = True) -> bool:
    """Valida que un valor no sea negativo."""
    if value < 0:
        return _fail(f"{label} debe ser >= 0 (recibido: {value})", exit_on_error)
    return True


def validate_c_coefficient(value: float, exit_on_error: bool = True) -> bool:
    """
    Valida que el coeficiente de escorrentía C esté en rango válido (0-1).

    Args:
        value: Valor de C a validar
        exit_on_error: Si True, termina el programa con error

    Returns:
        True si es válido, False si no
    """
    if not 0 <= value <= 1:
        return _fail(f"Coeficiente C debe estar entre 0 y 1 (recibido: {value})", exit_on_error)
    return True


def validate_gradient(value: float, exit_on_error: bool = True) -> bool:
    """
    Valida una pendiente longitudinal en m/m.

    Valores > 0.5 probablemente están en porcentaje: se advierte
    pero no se rechaza.
    """
    if value <= 0:
        return _fail(f"La pendiente debe ser positiva (recibido: {value})", exit_on_error)
    if value > 0.5:
        print_warning(f"Pendiente={value} parece estar en %. Asegúrese de usar m/m.")
    return True


# =============================================================================
# VALIDADORES CONTRA TABLAS DE REFERENCIA
# =============================================================================

def validate_return_period(
    value: int,
    reference: ReferenceData,
    exit_on_error: bool = True,
) -> bool:
    """Valida que existan constantes IDF para el período de retorno."""
    if value not in reference.return_periods:
        return _fail(
            f"Período de retorno debe ser uno de {reference.return_periods} (recibido: {value})",
            exit_on_error,
        )
    return True


def validate_material(value: str, reference: ReferenceData, exit_on_error: bool = True) -> bool:
    """Valida un id de material de canal."""
    ids = [m.id for m in reference.channel_materials]
    if value not in ids:
        return _fail(f"Material '{value}' no disponible. Opciones: {ids}", exit_on_error)
    return True


def validate_surface(value: str, reference: ReferenceData, exit_on_error: bool = True) -> bool:
    """Valida un id de tipo de superficie."""
    ids = [s.id for s in reference.surface_types]
    if value not in ids:
        return _fail(f"Superficie '{value}' no disponible. Opciones: {ids}", exit_on_error)
    return True
