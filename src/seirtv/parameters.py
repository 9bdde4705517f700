"""
===============================================================================
parameters.py
Last Updated: 2026-10-19
===============================================================================
Model Parameters for the grouped SEIR model with treatment and vaccination

The population is split into a small number of groups (by default children
and adults). Mixing between groups is described by a contact matrix whose
(i, j) entry is the per-capita contact rate of group i with group j. Severity
(symptomatic, hospitalized, dead) is given per group.

All rates are per day. Delays are means, in days, from onset of
infectiousness to the outcome.

The record shape used by to_dict()/from_dict() is the one exchanged with the
host application: per-group arrays as lists and matrices flattened in
column-major order.
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations
import copy
import warnings
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .errors import ParameterError
from .mitigations import MitigationParams

PER_GROUP_VECTORS = (
    "population_fractions",
    "fraction_symptomatic",
    "fraction_hospitalized",
    "fraction_dead",
)


@dataclass
class Parameters:
    """
    Parameter set for one run of the grouped SEIR model.

    The number of groups N is fixed by population_fractions; every other
    per-group field must match it.
    """

    # ==================== Population =============================================
    population: float = 330_000_000.0
    population_fractions: np.ndarray = field(default_factory=lambda: np.array([0.25, 0.75]))
    population_fraction_labels: List[str] = field(default_factory=lambda: ["Children", "Adults"])

    # contact_matrix[i, j]: contacts per day of a member of group i with group j
    contact_matrix: np.ndarray = field(
        default_factory=lambda: np.array([[18.0, 3.0],
                                          [9.0, 12.0]])
    )

    # ==================== Epidemiology ===========================================
    initial_infections: float = 1_000.0
    r0: float = 1.5
    latent_period: float = 1.0      # days
    infectious_period: float = 2.5  # days

    # ==================== Severity ===============================================
    fraction_symptomatic: np.ndarray = field(default_factory=lambda: np.array([0.5, 0.5]))
    fraction_hospitalized: np.ndarray = field(default_factory=lambda: np.array([0.01, 0.1]))
    hospitalization_delay: float = 7.0
    fraction_dead: np.ndarray = field(default_factory=lambda: np.array([0.0005, 0.005]))
    death_delay: float = 10.0

    # ==================== Interventions ==========================================
    mitigations: MitigationParams = None

    def __post_init__(self):
        """Coerce arrays, fill in defaults and validate"""
        self.population_fractions = np.array(self.population_fractions, dtype=float).ravel()
        n = self.population_fractions.size
        for name in PER_GROUP_VECTORS[1:]:
            setattr(self, name, np.array(getattr(self, name), dtype=float).ravel())
        self.contact_matrix = np.array(self.contact_matrix, dtype=float)
        if self.contact_matrix.ndim == 1 and self.contact_matrix.size == n * n:
            self.contact_matrix = self.contact_matrix.reshape((n, n), order="F")
        self.population_fraction_labels = list(self.population_fraction_labels)

        if self.mitigations is None:
            self.mitigations = MitigationParams.default(n)
        else:
            self.mitigations.community.resolve(n)

        self._validate_parameters()

    def _validate_parameters(self):
        """Validate that all parameters are consistent and physically reasonable"""
        n = self.n_groups
        if n == 0:
            raise ParameterError("at least one population group is required")
        for name in PER_GROUP_VECTORS:
            if getattr(self, name).size != n:
                raise ParameterError(f"{name} must have {n} entries")
        if len(self.population_fraction_labels) != n:
            raise ParameterError(f"population_fraction_labels must have {n} entries")
        if self.contact_matrix.shape != (n, n):
            raise ParameterError(
                f"contact_matrix must be {n}x{n}, got shape {self.contact_matrix.shape}"
            )
        if np.any(self.contact_matrix < 0):
            raise ParameterError("contact_matrix must be non-negative")

        if self.population <= 0:
            raise ParameterError("population must be positive")
        if not 0 <= self.initial_infections < self.population:
            raise ParameterError("initial_infections must be in [0, population)")
        for name in ("r0", "latent_period", "infectious_period",
                     "hospitalization_delay", "death_delay"):
            if getattr(self, name) <= 0:
                raise ParameterError(f"{name} must be positive")

        if np.any(self.population_fractions < 0):
            raise ParameterError("population_fractions must be non-negative")
        for name in PER_GROUP_VECTORS[1:]:
            values = getattr(self, name)
            if np.any((values < 0) | (values > 1)):
                raise ParameterError(f"{name} must be in [0, 1]")

        total = self.population_fractions.sum()
        if not np.isclose(total, 1.0):
            warnings.warn(
                f"population_fractions sum to {total:.4f}, not 1; "
                f"group sizes will not add up to the population"
            )

    # derived quantities
    @property
    def n_groups(self) -> int:
        return self.population_fractions.size

    @property
    def beta(self) -> float:
        """Transmission rate, beta = R0 / infectious_period"""
        return self.r0 / self.infectious_period

    @property
    def sigma(self) -> float:
        """Progression rate E -> I (1/latent_period)"""
        return 1.0 / self.latent_period

    @property
    def gamma(self) -> float:
        """Recovery rate (1/infectious_period)"""
        return 1.0 / self.infectious_period

    @property
    def group_sizes(self) -> np.ndarray:
        return self.population_fractions * self.population

    # mitigations
    def has_mitigations(self) -> bool:
        """True if any mitigation is enabled"""
        return self.mitigations.any_enabled()

    def without_mitigations(self) -> "Parameters":
        """Copy of these parameters with every mitigation disabled"""
        params = copy.deepcopy(self)
        params.mitigations.disable_all()
        return params

    # host records
    @classmethod
    def default(cls) -> "Parameters":
        return cls()

    def to_dict(self) -> Dict:
        """Convert parameters to the host record shape."""
        return {
            "n": self.n_groups,
            "population": self.population,
            "population_fraction_labels": list(self.population_fraction_labels),
            "population_fractions": self.population_fractions.tolist(),
            "contact_matrix": self.contact_matrix.flatten(order="F").tolist(),
            "initial_infections": self.initial_infections,
            "r0": self.r0,
            "latent_period": self.latent_period,
            "infectious_period": self.infectious_period,
            "fraction_symptomatic": self.fraction_symptomatic.tolist(),
            "fraction_hospitalized": self.fraction_hospitalized.tolist(),
            "hospitalization_delay": self.hospitalization_delay,
            "fraction_dead": self.fraction_dead.tolist(),
            "death_delay": self.death_delay,
            "mitigations": self.mitigations.to_dict(),
        }

    @classmethod
    def from_dict(cls, record: Dict) -> "Parameters":
        """Build parameters from a host record.

        Raises ParameterError if the per-group arrays do not match n.
        """
        record = dict(record)
        n = record.pop("n", None)
        if n is None:
            n = len(record.get("population_fractions", []))
        if len(record.get("population_fractions", [])) != n:
            raise ParameterError("Invalid number of population fractions")
        if len(record.get("contact_matrix", [])) != n * n:
            raise ParameterError("Invalid number of contact matrix elements")

        record["contact_matrix"] = np.asarray(record["contact_matrix"], dtype=float).reshape((n, n), order="F")
        if "mitigations" in record:
            record["mitigations"] = MitigationParams.from_dict(record["mitigations"], n=n)
        try:
            return cls(**record)
        except TypeError as e:
            raise ParameterError(str(e)) from e

    def print_summary(self):
        """Print parameter summary for documentation."""
        print("GROUPED SEIR MODEL PARAMETERS:")
        print(f"Population: {self.population:,.0f}")
        print("\n--- GROUPS ---")
        for label, frac, fs, fh, fd in zip(self.population_fraction_labels,
                                           self.population_fractions,
                                           self.fraction_symptomatic,
                                           self.fraction_hospitalized,
                                           self.fraction_dead):
            print(f"{label}: {frac * 100:.1f}% of population, "
                  f"symptomatic {fs * 100:.1f}%, hospitalized {fh * 100:.2f}%, dead {fd * 100:.3f}%")

        print("\n--- EPIDEMIOLOGY ---")
        print(f"R₀: {self.r0:.2f}")
        print(f"Latent period: {self.latent_period:.1f} days")
        print(f"Infectious period: {self.infectious_period:.1f} days")
        print(f"Transmission rate (β): {self.beta:.3f} per day")
        print(f"Hospitalization delay: {self.hospitalization_delay:.1f} days")
        print(f"Death delay: {self.death_delay:.1f} days")

        print("\n--- MITIGATIONS ---")
        for name, m in zip(("Vaccine", "Antivirals", "Community"), self.mitigations):
            print(f"{name}: {'enabled' if m.get_enabled() else 'disabled'}")


# Alternative parameter sets
def create_default_params() -> Parameters:
    """Default two-group parameters, no mitigations"""
    return Parameters()


def create_vaccine_params() -> Parameters:
    """Default parameters with the vaccine switched on"""
    params = Parameters()
    params.mitigations.vaccine.enabled = True
    return params


PRESETS: Dict[str, Callable[[], Parameters]] = {
    "Default (unmitigated)": create_default_params,
    "With vaccines": create_vaccine_params,
}
