"""
Métodos numéricos para resolver ecuaciones escalares.

Toda búsqueda de raíces del paquete (tirante normal, ancho requerido)
pasa por `bisection`, que concentra la política de tolerancia e
iteraciones.
"""

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class BisectionResult:
    """Resultado del método de bisección."""
    root: float          # Aproximación de la raíz
    iterations: int      # Iteraciones realizadas
    converged: bool      # True si se alcanzó la tolerancia
    final_error: float   # |f(root)|


def bisection(
    func: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float = 1e-4,
    max_iterations: int = 80,
    min_bound: Optional[float] = None,
    max_bound: Optional[float] = None,
) -> BisectionResult:
    """
    Busca una raíz de f(x) = 0 por bisección.

    Si f(lower)·f(upper) > 0 intenta expandir el intervalo (dentro de
    [min_bound, max_bound]) hasta `max_iterations` veces. Si aun así no
    hay cambio de signo, devuelve el punto medio con converged=False.

    La función debe ser monótona en el intervalo (no se verifica).

    Args:
        func: Función continua f(x)
        lower: Límite inferior del intervalo
        upper: Límite superior del intervalo
        tolerance: Tolerancia sobre |f(x)| y sobre el ancho del intervalo
        max_iterations: Máximo de iteraciones (expansión y bisección)
        min_bound: Límite absoluto inferior (default: lower)
        max_bound: Límite absoluto superior (default: upper)

    Returns:
        BisectionResult
    """
    min_bound = lower if min_bound is None else min_bound
    max_bound = upper if max_bound is None else max_bound

    if lower >= upper:
        raise ValueError("Límite inferior debe ser menor que el superior")
    if min_bound >= max_bound:
        raise ValueError("min_bound debe ser menor que max_bound")
    if tolerance <= 0:
        raise ValueError("Tolerancia debe ser > 0")

    a = max(lower, min_bound)
    b = min(upper, max_bound)
    if a >= b:
        raise ValueError("Intervalo vacío tras ajustar a los límites")

    fa = func(a)
    fb = func(b)

    if fa * fb > 0:
        ea, eb, efa, efb = a, b, fa, fb

        for _ in range(max_iterations):
            if efa * efb <= 0:
                break
            mid = (ea + eb) / 2
            fmid = func(mid)

            if efa * fmid < 0:
                eb, efb = mid, fmid
                break
            elif fmid * efb < 0:
                ea, efa = mid, fmid
                break

            # Expandir intervalo
            span = eb - ea
            ea = max(ea - span, min_bound)
            eb = min(eb + span, max_bound)
            if ea >= eb:
                break
            efa = func(ea)
            efb = func(eb)

        if efa * efb > 0:
            best_guess = (a + b) / 2
            return BisectionResult(
                root=best_guess,
                iterations=0,
                converged=False,
                final_error=abs(func(best_guess)),
            )

        return _bisect(func, ea, eb, tolerance, max_iterations)

    return _bisect(func, a, b, tolerance, max_iterations)


def _bisect(
    func: Callable[[float], float],
    left: float,
    right: float,
    tolerance: float,
    max_iterations: int,
) -> BisectionResult:
    """Iteración de bisección sobre un intervalo con cambio de signo."""
    f_left = func(left)
    if f_left == 0:
        return BisectionResult(root=left, iterations=0, converged=True, final_error=0.0)
    f_right = func(right)
    if f_right == 0:
        return BisectionResult(root=right, iterations=0, converged=True, final_error=0.0)

    iterations = 0

    for i in range(max_iterations):
        iterations = i + 1
        mid = (left + right) / 2
        f_mid = func(mid)

        if abs(f_mid) < tolerance or abs(right - left) < tolerance:
            return BisectionResult(
                root=mid,
                iterations=iterations,
                converged=True,
                final_error=abs(f_mid),
            )

        if f_left * f_mid < 0:
            right = mid
        else:
            left, f_left = mid, f_mid

    final_root = (left + right) / 2
    return BisectionResult(
        root=final_root,
        iterations=iterations,
        converged=False,
        final_error=abs(func(final_root)),
    )
