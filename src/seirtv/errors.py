"""
===========================================================
errors.py
Last Updated: 2026-10-19
===========================================================
Exception types raised by the seirtv model.

    ParameterError   - malformed input (dimension mismatch,
                       out-of-range values)
    ConvergenceError - power iteration on the contact matrix
                       did not stabilise
    IntegrationError - the ODE solver reported failure
-----------------------------------------------------------
License: MIT
===========================================================
"""


class ParameterError(ValueError):
    """Raised when a parameter set is malformed"""


class ConvergenceError(RuntimeError):
    """Raised when a numerical iteration fails to converge"""


class IntegrationError(RuntimeError):
    """Raised when the ODE solver does not complete"""
