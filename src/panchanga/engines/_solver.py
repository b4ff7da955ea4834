from __future__ import annotations

import logging
from typing import Callable, Optional

from panchanga.core.errors import BoundarySearchError
from panchanga.reference.astro_args import wrap180

logger = logging.getLogger(__name__)

AngleFn = Callable[[float], float]


def _bisect(f: Callable[[float], float], a: float, b: float, *, tol: float, max_iter: int) -> float:
    """Bisection on a bracket with f(a) < 0 <= f(b)."""
    for i in range(max_iter):
        if (b - a) <= tol:
            logger.debug("bisection converged after %d iterations", i)
            return 0.5 * (a + b)
        m = 0.5 * (a + b)
        if f(m) >= 0.0:
            b = m
        else:
            a = m
    if (b - a) > tol:
        raise BoundarySearchError(
            f"bisection did not reach tol={tol:g} days in {max_iter} iterations (bracket {b - a:g})"
        )
    return 0.5 * (a + b)


def find_crossing(
    fn: AngleFn,
    target_deg: float,
    t0: float,
    t1: float,
    *,
    tol: float = 1e-6,
    max_iter: int = 64,
) -> Optional[float]:
    """
    Instant in [t0, t1] at which the angle fn(t), advancing monotonically,
    reaches target_deg (mod 360). Returns None if it is not reached by t1.

    fn(t0) must lie at most 180 degrees behind the target; a start already
    past the target means the forward-motion assumption does not hold.
    """
    def f(t: float) -> float:
        return wrap180(fn(t) - target_deg)

    if t1 <= t0:
        raise BoundarySearchError(f"degenerate search window [{t0}, {t1}]")

    fa = f(t0)
    if fa == 0.0:
        return t0
    if fa > 0.0:
        raise BoundarySearchError(
            f"angle {fn(t0):.6f} is already past target {target_deg:.6f} at window start"
        )
    if f(t1) < 0.0:
        return None

    return _bisect(f, t0, t1, tol=tol, max_iter=max_iter)


def find_crossing_near(
    fn: AngleFn,
    target_deg: float,
    t_guess: float,
    *,
    halfwidth_days: float = 3.0,
    max_halfwidth_days: float = 12.0,
    tol: float = 1e-6,
    max_iter: int = 64,
) -> float:
    """
    Solve fn(t) = target (deg) near t_guess with bracket expansion + bisection.
    Used at lunation scale (new moons), where the guess comes from the mean rate.
    """
    def f(t: float) -> float:
        return wrap180(fn(t) - target_deg)

    w = halfwidth_days
    a, b = t_guess - w, t_guess + w
    fa, fb = f(a), f(b)
    while not (fa < 0.0 <= fb) and w < max_halfwidth_days:
        w = min(w * 1.6, max_halfwidth_days)
        a, b = t_guess - w, t_guess + w
        fa, fb = f(a), f(b)
    if not (fa < 0.0 <= fb):
        raise BoundarySearchError(
            f"no bracket for target {target_deg:.6f} within +/-{w:g} days of JD {t_guess:.5f}"
        )

    return _bisect(f, a, b, tol=tol, max_iter=max_iter)
