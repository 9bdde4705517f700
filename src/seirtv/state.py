"""
===========================================================
state.py
Last Updated: 2026-10-19
===========================================================

Description:
    Packed state vector for the grouped SEIR model.

    Compartments (each a length-N vector, one entry per group):
        S, E, I, R       - unvaccinated susceptible / exposed /
                           infectious / recovered
        Sv, Ev, Iv, Rv   - vaccinated analogues
        PreH, Hcum       - pre-hospitalization delay buffer and
                           cumulative hospitalizations
        PreD, Dcum       - pre-death delay buffer and cumulative
                           deaths

    The solver works on a flat array of 12 * N floats laid out
    compartment by compartment; compartment k occupies
    y[k * N:(k + 1) * N].

Example Usage:
    state = State.zeros(2)
    state.s = [0.25, 0.75]
    state.i            # view into the flat buffer
    state.y            # flat array handed to the solver
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np

COMPARTMENTS = ("s", "e", "i", "r", "sv", "ev", "iv", "rv", "pre_h", "h_cum", "pre_d", "d_cum")
N_COMPARTMENTS = len(COMPARTMENTS)

# compartments that hold people (everything except the cumulative counters)
POPULATION_COMPARTMENTS = ("s", "e", "i", "r", "sv", "ev", "iv", "rv")


def _compartment(index: int, name: str):
    def getter(self) -> np.ndarray:
        return self.y[index * self.n:(index + 1) * self.n]

    def setter(self, value):
        self.y[index * self.n:(index + 1) * self.n] = value

    return property(getter, setter, doc=f"Compartment {name!r}, one entry per group")


class State:
    """Named views over a flat 12 x N state buffer.

    The buffer is shared, not copied: writing through a setter
    mutates the array passed in.
    """

    def __init__(self, y: np.ndarray, n: int):
        if y.shape != (N_COMPARTMENTS * n,):
            raise ValueError(f"state vector must have length {N_COMPARTMENTS * n}, got {y.shape}")
        self.y = y
        self.n = n

    @classmethod
    def zeros(cls, n: int) -> "State":
        return cls(np.zeros(N_COMPARTMENTS * n), n)

    @classmethod
    def wrap(cls, y: np.ndarray) -> "State":
        """View a flat solver vector, inferring N from its length"""
        n, rem = divmod(y.shape[0], N_COMPARTMENTS)
        if rem:
            raise ValueError(f"state vector length {y.shape[0]} is not a multiple of {N_COMPARTMENTS}")
        return cls(y, n)

    def get(self, name: str) -> np.ndarray:
        index = COMPARTMENTS.index(name)
        return self.y[index * self.n:(index + 1) * self.n]

    def population(self) -> np.ndarray:
        """People currently in a compartment, by group (excludes cumulative counters)"""
        return sum(self.get(name) for name in POPULATION_COMPARTMENTS)

    def as_dict(self) -> dict:
        return {name: self.get(name).copy() for name in COMPARTMENTS}

    def __repr__(self):
        return f"State(n={self.n}, " + ", ".join(
            f"{name}={self.get(name).tolist()}" for name in COMPARTMENTS) + ")"


for _index, _name in enumerate(COMPARTMENTS):
    setattr(State, _name, _compartment(_index, _name))
del _index, _name
