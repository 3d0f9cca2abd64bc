"""
One-dimensional root finding for the salary solver.
"""
import math
from typing import Callable

from loguru import logger

# Smallest |f(x1) - f(x0)| the secant step will divide by
_MIN_SLOPE_DENOMINATOR = 1e-300


class ConvergenceError(RuntimeError):
    """Root finder stopped without meeting its tolerance"""

    def __init__(self, message: str, last_x: float = float('nan'), iterations: int = 0):
        super().__init__(message)
        self.last_x = last_x
        self.iterations = iterations


def secant_method(f: Callable[[float], float],
                  x0: float,
                  x1: float,
                  tolerance: float = 1e-6,
                  max_iterations: int = 100) -> float:
    """
    Find x with |f(x)| <= tolerance using the secant method.

    Args:
        f: Scalar objective
        x0: First starting point
        x1: Second starting point
        tolerance: Convergence tolerance on |f(x)|
        max_iterations: Maximum number of secant steps

    Returns:
        Approximate root

    Raises:
        ConvergenceError: flat secant, non-finite value, or iteration cap reached
    """
    f0 = f(x0)
    f1 = f(x1)

    for iteration in range(max_iterations + 1):
        if not (math.isfinite(x1) and math.isfinite(f1)):
            raise ConvergenceError(
                f"Secant method produced a non-finite value (x={x1}, f(x)={f1})", x1, iteration)

        if abs(f1) <= tolerance:
            logger.debug(f"Secant method converged to {x1:.6f} in {iteration} iterations")
            return x1

        if iteration == max_iterations:
            break

        denominator = f1 - f0
        if abs(denominator) < _MIN_SLOPE_DENOMINATOR:
            raise ConvergenceError(
                f"Secant method stalled: f(x0) == f(x1) at x0={x0}, x1={x1}", x1, iteration)

        x2 = x1 - f1 * (x1 - x0) / denominator
        x0, f0 = x1, f1
        x1, f1 = x2, f(x2)

    raise ConvergenceError(
        f"Secant method did not converge in {max_iterations} iterations (last x={x1}, f(x)={f1})",
        x1, max_iterations)
