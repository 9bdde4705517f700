"""
===============================================================================
model.py
Last Updated: 2026-10-19
===============================================================================
Grouped SEIR model with treatment (antivirals) and vaccination

Deterministic compartmental model for an acute respiratory infection in a
population split into N mixing groups. The model includes:
- Unvaccinated and vaccinated SEIR chains (S, E, I, R / Sv, Ev, Iv, Rv)
- Vaccination at a constant daily rate until the dose stock is used up
- Antiviral treatment reducing infectiousness and severity
- Community mitigation scaling the contact matrix over a time window
- Delay buffers from infection to hospitalization and to death, feeding
  cumulative counters

The contact matrix is normalized by its dominant eigenvalue so that the
configured R0 is the reproduction number of the unmitigated model.

Integration uses scipy's RK45 (Dormand-Prince 5(4)) with the solver's own
step placement; incidence is the first difference between consecutive
solver samples.
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations
import logging
import numpy as np
from scipy.integrate import solve_ivp
from typing import Tuple

from .ave import AVE
from .contact import get_dominant_eigendata
from .errors import IntegrationError
from .output import ModelOutput
from .parameters import Parameters
from .state import State

logger = logging.getLogger(__name__)

RTOL = 1e-6
ATOL = 1e-6
FIRST_STEP = 1.0    # days


class SEIRModel:
    """Grouped SEIR model with treatment and vaccination.

    Parameters:
    parameters : Parameters
        Parameter object containing all model parameters. The model keeps a
        reference; callers should not mutate it while the model is in use.

    The contact-matrix normalization and the antiviral risk ratios are
    computed once here and held for the life of the model.
    """

    def __init__(self, parameters: Parameters):
        self.parameters = parameters
        self.n = parameters.n_groups
        self.contact_matrix_normalization, _ = get_dominant_eigendata(parameters.contact_matrix)
        self.ave = AVE.from_parameters(parameters)

        community = parameters.mitigations.community
        community.resolve(self.n)
        self._contact_matrix = parameters.contact_matrix / self.contact_matrix_normalization
        self._mitigated_contact_matrix = (
            parameters.contact_matrix * community.contact_multiplier
            / self.contact_matrix_normalization
        )
        logger.debug(
            "SEIRModel: %d groups, contact normalization %.6g, mitigations enabled: %s",
            self.n, self.contact_matrix_normalization, parameters.has_mitigations(),
        )

    def contact_matrix_at(self, t: float) -> np.ndarray:
        """Normalized contact matrix in effect at time t"""
        if self.parameters.mitigations.community.is_active(t):
            return self._mitigated_contact_matrix
        return self._contact_matrix

    def initial_conditions(self) -> np.ndarray:
        """Set initial conditions for the model.

        Returns:
            y0: np.ndarray. Flat state with the initial infections spread over
            the groups in proportion to their size, everyone else susceptible.
        """
        p = self.parameters
        state = State.zeros(self.n)
        state.s = p.population_fractions * (p.population - p.initial_infections)
        state.i = p.population_fractions * p.initial_infections
        return state.y

    def derivatives(self, t: float, y: np.ndarray) -> np.ndarray:
        """Calculate derivatives for the model.

        Parameters:
        t : float. Current time (days since start)
        y : np.ndarray. Current flat state, 12 * N entries

        Returns:
        dydt : np.ndarray. Derivatives, same layout as y
        """
        p = self.parameters
        vaccine = p.mitigations.vaccine
        ve_s, ve_i, ve_p = vaccine.ve_s, vaccine.ve_i, vaccine.ve_p
        rr_i = self.ave.rr_i

        x = State(y, self.n)
        s, e, i, r = x.s, x.e, x.i, x.r
        sv, ev, iv = x.sv, x.ev, x.iv

        # transmission
        contact_matrix = self.contact_matrix_at(t)
        i_effective = i * rr_i + iv * (1.0 - ve_i) * (1.0 + (1.0 - ve_p) * (1.0 - rr_i))
        # an empty group has no susceptibles to infect
        pressure = np.divide(contact_matrix @ i_effective, p.population_fractions,
                             out=np.zeros(self.n), where=p.population_fractions > 0)
        infection_rate = (p.beta / p.population) * pressure

        ds_to_e = s * infection_rate
        de_to_i = e / p.latent_period
        di_to_r = i / p.infectious_period

        dsv_to_ev = sv * (1.0 - ve_s) * infection_rate
        dev_to_iv = ev / p.latent_period
        div_to_rv = iv / p.infectious_period

        # vaccination, shared out by each group's share of the unvaccinated pool
        administration_rate = vaccine.rate_at(t)
        if administration_rate > 0.0:
            pool = s + e + i + r
            share = np.divide(s, pool, out=np.zeros_like(s), where=pool > 0)
            ds_to_sv = share * p.population_fractions * administration_rate
        else:
            ds_to_sv = np.zeros_like(s)

        # severity pipelines
        d_at_risk = de_to_i + dev_to_iv * (1.0 - ve_p)
        dto_pre_h = d_at_risk * p.fraction_hospitalized * self.ave.rr_p_hosp
        dpre_h_to_h_cum = x.pre_h / p.hospitalization_delay
        dto_pre_d = d_at_risk * p.fraction_dead * self.ave.rr_p_death
        dpre_d_to_d_cum = x.pre_d / p.death_delay

        dy = State.zeros(self.n)
        dy.s = -(ds_to_e + ds_to_sv)
        dy.e = ds_to_e - de_to_i
        dy.i = de_to_i - di_to_r
        dy.r = di_to_r
        dy.sv = ds_to_sv - dsv_to_ev
        dy.ev = dsv_to_ev - dev_to_iv
        dy.iv = dev_to_iv - div_to_rv
        dy.rv = div_to_rv
        dy.pre_h = dto_pre_h - dpre_h_to_h_cum
        dy.h_cum = dpre_h_to_h_cum
        dy.pre_d = dto_pre_d - dpre_d_to_d_cum
        dy.d_cum = dpre_d_to_d_cum
        return dy.y

    def integrate_trajectory(self, days: float, rtol: float = RTOL, atol: float = ATOL) -> Tuple[np.ndarray, np.ndarray]:
        """Solve the model over [0, days].

        Returns:
        t: np.ndarray. Solver sample times, starting at 0
        y: np.ndarray. Flat states, shape (12 * N, len(t))
        """
        if days < 0:
            raise ValueError("days must be non-negative")
        y0 = self.initial_conditions()
        if days == 0:
            return np.array([0.0]), y0[:, np.newaxis]

        solution = solve_ivp(
            self.derivatives,
            (0.0, float(days)),
            y0,
            method="RK45",
            rtol=rtol,
            atol=atol,
            first_step=FIRST_STEP,
        )
        if not solution.success:
            raise IntegrationError(f"integration failed: {solution.message}")
        logger.debug("integrated %s days in %d steps (%d evaluations)",
                     days, solution.t.size - 1, solution.nfev)
        return solution.t, solution.y

    def integrate(self, days: int) -> ModelOutput:
        """Run the model and convert the trajectory to incidence.

        Parameters:
        days: int. Simulation horizon in days

        Returns:
        output: ModelOutput. One record per solver sample after the first
        """
        t, y = self.integrate_trajectory(days)
        ve_p = self.parameters.mitigations.vaccine.ve_p
        fraction_symptomatic = self.parameters.fraction_symptomatic

        output = ModelOutput()
        prev = None
        for k in range(t.size):
            state = State(y[:, k], self.n)
            current = (state.i + state.r, state.iv + state.rv, state.h_cum, state.d_cum)
            if prev is not None:
                new_unvac = current[0] - prev[0]
                new_vac = current[1] - prev[1]
                new_symptomatic = (new_unvac + (1.0 - ve_p) * new_vac) * fraction_symptomatic
                output.add_infection_incidence(t[k], new_unvac + new_vac)
                output.add_symptomatic_incidence(t[k], new_symptomatic)
                output.add_hospital_incidence(t[k], current[2] - prev[2])
                output.add_death_incidence(t[k], current[3] - prev[3])
            prev = current
        return output
