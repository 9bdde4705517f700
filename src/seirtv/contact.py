"""
===========================================================
contact.py
Last Updated: 2026-10-19
===========================================================

Description:
    Contact-matrix normalization. The transmission rate is
    derived from R0 as beta = R0 / infectious_period, which
    only holds for a contact matrix whose dominant eigenvalue
    is 1. The model divides the contact matrix by the value
    returned here so the configured R0 keeps its meaning.

API:
    get_dominant_eigendata(matrix) -> (eigenvalue, eigenvector)
    normalize_contact_matrix(matrix) -> matrix / eigenvalue

Notes:
    - Power iteration from the uniform vector, renormalized
      by the L1 norm on every step; the returned eigenvector
      therefore sums to 1.
    - Converges for any primitive nonnegative matrix.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import logging
import numpy as np
from typing import Tuple

from .errors import ConvergenceError

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 10_000


def get_dominant_eigendata(matrix: np.ndarray, max_iterations: int = MAX_ITERATIONS) -> Tuple[float, np.ndarray]:
    """Dominant eigenvalue and eigenvector of a nonnegative square matrix.

    Parameters:
    matrix: np.ndarray. N x N nonnegative matrix
    max_iterations: int. Safety bound on the number of power iterations

    Returns:
    eigenvalue: float
    eigenvector: np.ndarray. L1-normalized, length N
    """
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"matrix must be square, got shape {matrix.shape}")

    n = matrix.shape[0]
    x = np.full(n, 1.0 / n)
    norm = 1.0
    for iteration in range(max_iterations):
        x = matrix @ x
        new_norm = np.abs(x).sum()
        if not np.isfinite(new_norm) or new_norm == 0.0:
            raise ConvergenceError(f"power iteration degenerated (norm={new_norm})")
        x = x / new_norm
        # machine epsilon, relative to the norm
        if abs(new_norm - norm) < np.finfo(float).eps * max(1.0, new_norm):
            logger.debug("power iteration converged after %d iterations", iteration + 1)
            return float(new_norm), x
        norm = new_norm

    raise ConvergenceError(
        f"power iteration did not converge within {max_iterations} iterations"
    )


def normalize_contact_matrix(matrix: np.ndarray) -> np.ndarray:
    """Scale a contact matrix so its dominant eigenvalue is 1"""
    eigenvalue, _ = get_dominant_eigendata(matrix)
    return np.asarray(matrix, dtype=float) / eigenvalue
