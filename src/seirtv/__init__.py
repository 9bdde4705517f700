"""
seirtv: grouped SEIR model with treatment, vaccination and community
mitigation, with automatic mitigated vs. unmitigated comparison.

Example Usage:
    from seirtv import Parameters, ScenarioRunner
    params = Parameters()
    params.mitigations.vaccine.enabled = True
    result = ScenarioRunner(params).run(200)
    result.summarize("InfectionIncidence", params.population_fraction_labels)
"""
from .ave import AVE
from .contact import get_dominant_eigendata, normalize_contact_matrix
from .errors import ConvergenceError, IntegrationError, ParameterError
from .mitigations import (
    AntiviralsParams,
    CommunityMitigationParams,
    Mitigation,
    MitigationParams,
    VaccineParams,
)
from .model import SEIRModel
from .output import ModelOutput, OutputItem, OutputType
from .parameters import PRESETS, Parameters, create_default_params, create_vaccine_params
from .scenarios import MitigationType, ScenarioResult, ScenarioRunner, attack_rates, run_scenarios
from .state import COMPARTMENTS, State

__version__ = "0.1.0"

__all__ = [
    "AVE",
    "AntiviralsParams",
    "COMPARTMENTS",
    "CommunityMitigationParams",
    "ConvergenceError",
    "IntegrationError",
    "Mitigation",
    "MitigationParams",
    "MitigationType",
    "ModelOutput",
    "OutputItem",
    "OutputType",
    "PRESETS",
    "ParameterError",
    "Parameters",
    "SEIRModel",
    "ScenarioResult",
    "ScenarioRunner",
    "State",
    "VaccineParams",
    "attack_rates",
    "create_default_params",
    "create_vaccine_params",
    "get_dominant_eigendata",
    "normalize_contact_matrix",
    "run_scenarios",
]
