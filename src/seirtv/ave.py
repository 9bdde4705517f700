"""
===========================================================
ave.py
Last Updated: 2026-10-19
===========================================================

Description:
    Antiviral efficacy (AVE) risk ratios. Treated cases are
    the symptomatic ones that seek care, get diagnosed and
    prescribed, and adhere; among them antivirals cut
    infectiousness by ave_i and progression by ave_p.

    rr_i       = 1 - fs * seek * dx_out * adhere * ave_i
    rr_p_hosp  = 1 - fs * seek * dx_out * adhere * ave_p
    rr_p_death = (1 - dx_in * ave_p) * rr_p_hosp

    All three are ones when antivirals are disabled.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class AVE:
    rr_i: np.ndarray        # risk ratio against transmission
    rr_p_hosp: np.ndarray   # risk ratio against hospitalization given infection
    rr_p_death: np.ndarray  # risk ratio against death given infection

    def __post_init__(self):
        for arr in (self.rr_i, self.rr_p_hosp, self.rr_p_death):
            arr.setflags(write=False)

    @classmethod
    def from_parameters(cls, params) -> "AVE":
        av = params.mitigations.antivirals
        ones = np.ones(params.n_groups)
        if not av.enabled:
            return cls(ones, ones.copy(), ones.copy())

        treated = params.fraction_symptomatic * av.fraction_treated_outpatient
        rr_i = ones - treated * av.ave_i
        rr_p_hosp = ones - treated * av.ave_p
        rr_p_death = (1.0 - av.fraction_diagnosed_prescribed_inpatient * av.ave_p) * rr_p_hosp
        return cls(rr_i, rr_p_hosp, rr_p_death)
