import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from seirtv import MitigationParams, Parameters


def single_group(**overrides) -> Parameters:
    """One-group population of 330M with R0 = 2, latent 1 day, infectious 3 days"""
    kwargs = dict(
        population=330_000_000.0,
        population_fractions=[1.0],
        population_fraction_labels=["All"],
        contact_matrix=[[1.0]],
        initial_infections=1_000.0,
        r0=2.0,
        latent_period=1.0,
        infectious_period=3.0,
        fraction_symptomatic=[0.5],
        fraction_hospitalized=[0.0],
        hospitalization_delay=1.0,
        fraction_dead=[0.0],
        death_delay=1.0,
        mitigations=MitigationParams.default(1),
    )
    kwargs.update(overrides)
    return Parameters(**kwargs)


@pytest.fixture
def single_group_params():
    return single_group()


@pytest.fixture
def two_group_params():
    """Default two-group parameters, scaled to a unit population"""
    params = Parameters()
    params.population = 1.0
    params.initial_infections = 1e-8
    params.r0 = 2.0
    params.latent_period = 1.0
    params.infectious_period = 3.0
    return params


@pytest.fixture
def all_mitigations_params():
    params = Parameters()
    for m in params.mitigations:
        m.set_enabled(True)
    return params


@pytest.fixture
def rng():
    return np.random.default_rng(20261019)
