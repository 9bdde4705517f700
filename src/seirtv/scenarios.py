"""
===============================================================================
scenarios.py
Last Updated: 2026-10-19
===============================================================================
Mitigated vs. unmitigated scenario comparison

Runs the model once when no mitigation is enabled, labelled "Unmitigated".
When any mitigation is enabled it first runs the counterfactual with every
mitigation switched off ("Unmitigated") and then the parameters as given
("Mitigated"), so the two can be compared and the burden prevented computed.

Each run gets its own copy of the parameters and its own model instance.
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations
import copy
import logging
import numpy as np
import pandas as pd
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .model import SEIRModel
from .output import ModelOutput, OutputType
from .parameters import Parameters

logger = logging.getLogger(__name__)


class MitigationType(str, Enum):
    UNMITIGATED = "Unmitigated"
    MITIGATED = "Mitigated"


def select_model(parameters: Parameters) -> SEIRModel:
    return SEIRModel(parameters)


class ScenarioResult:
    """Model output per scenario label, in run order.

    Attributes:
    output: dict. MitigationType -> ModelOutput
    mitigation_types: list. Labels actually produced
    output_types: list. Every OutputType present in each ModelOutput
    """

    def __init__(self, runs: Sequence[Tuple[MitigationType, ModelOutput]]):
        self.output: Dict[MitigationType, ModelOutput] = {}
        self.mitigation_types: List[MitigationType] = []
        self.output_types: List[OutputType] = list(OutputType)
        for mitigation_type, model_output in runs:
            if mitigation_type not in self.mitigation_types:
                self.mitigation_types.append(mitigation_type)
            self.output[mitigation_type] = model_output

    @property
    def has_mitigations(self) -> bool:
        return MitigationType.MITIGATED in self.output

    def __getitem__(self, mitigation_type: MitigationType) -> ModelOutput:
        return self.output[MitigationType(mitigation_type)]

    def summarize(
            self,
            output_type: OutputType,
            labels: Optional[Sequence[str]] = None,
            round_to: Optional[float] = None
    ) -> pd.DataFrame:
        """Total incidence by group and scenario.

        One column per scenario; when both scenarios are present a
        'Prevented' column holds Unmitigated minus Mitigated.

        round_to: float, optional. Round each scenario's totals to the
            nearest multiple (1000 in the host summary table) before
            Prevented is taken. Raw sums when None.
        """
        columns = {m.value: self.output[m].totals(output_type) for m in self.mitigation_types}
        if round_to is not None:
            if round_to <= 0:
                raise ValueError(f"round_to must be positive, got {round_to}")
            columns = {k: np.round(v / round_to) * round_to for k, v in columns.items()}
        table = pd.DataFrame(columns)
        if labels is not None:
            table.index = list(labels)
        table.index.name = "group"
        if self.has_mitigations:
            table["Prevented"] = table[MitigationType.UNMITIGATED.value] - table[MitigationType.MITIGATED.value]
        return table

    def to_dataframe(self, labels: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Long-form table over all scenarios, with a mitigation_type column"""
        frames = []
        for m in self.mitigation_types:
            df = self.output[m].to_dataframe(labels)
            df["mitigation_type"] = m.value
            frames.append(df)
        if not frames:
            return pd.DataFrame(columns=["time", "value", "group", "output_type", "mitigation_type"])
        return pd.concat(frames, ignore_index=True)

    def to_dict(self) -> Dict:
        """Host record: output keyed by label then output type"""
        return {
            "output": {m.value: self.output[m].to_dict() for m in self.mitigation_types},
            "mitigation_types": [m.value for m in self.mitigation_types],
            "output_types": [t.value for t in self.output_types],
        }

    def print_summary(self, labels: Optional[Sequence[str]] = None):
        """Print total burden per scenario."""
        print("SCENARIO RESULTS:")
        print(f"Scenarios: {', '.join(m.value for m in self.mitigation_types)}")
        for output_type in self.output_types:
            table = self.summarize(output_type, labels)
            print(f"\n--- {output_type.value} ---")
            print(table.round(0).to_string())
            totals = table.sum(axis=0)
            print("Total: " + ", ".join(f"{col} {val:,.0f}" for col, val in totals.items()))


class ScenarioRunner:
    """Runs the unmitigated counterfactual alongside a mitigated scenario.

    Parameters:
    parameters: Parameters. Scenario to simulate; it is copied, not mutated
    """

    def __init__(self, parameters: Parameters):
        self.parameters = parameters

    def scenarios(self) -> List[Tuple[MitigationType, Parameters]]:
        """Parameter sets to run, in order, with their labels"""
        if self.parameters.has_mitigations():
            return [
                (MitigationType.UNMITIGATED, self.parameters.without_mitigations()),
                (MitigationType.MITIGATED, copy.deepcopy(self.parameters)),
            ]
        return [(MitigationType.UNMITIGATED, copy.deepcopy(self.parameters))]

    def run(self, days: int) -> ScenarioResult:
        """Run every scenario for `days` days.

        Parameters:
        days: int. Simulation horizon in whole days (>= 0)
        """
        if int(days) != days or days < 0:
            raise ValueError(f"days must be a non-negative integer, got {days}")
        runs = []
        for label, params in self.scenarios():
            logger.debug("running %s scenario for %d days", label.value, days)
            runs.append((label, select_model(params).integrate(int(days))))
        return ScenarioResult(runs)


def run_scenarios(parameters: Parameters, days: int) -> ScenarioResult:
    """Convenience wrapper: ScenarioRunner(parameters).run(days)"""
    return ScenarioRunner(parameters).run(days)


def attack_rates(output: ModelOutput, parameters: Parameters) -> Tuple[float, np.ndarray]:
    """Overall and per-group attack rate of one run.

    Returns:
    overall: float. Total infections / population
    by_group: np.ndarray. Infections in each group / group size
    """
    infections = output.totals(OutputType.INFECTION_INCIDENCE)
    if infections.size == 0:
        return 0.0, np.zeros(parameters.n_groups)
    sizes = parameters.group_sizes
    by_group = np.divide(infections, sizes, out=np.zeros_like(infections), where=sizes > 0)
    return float(infections.sum() / parameters.population), by_group
