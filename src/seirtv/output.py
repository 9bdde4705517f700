"""
===========================================================
output.py
Last Updated: 2026-10-19
===========================================================

Description:
    Containers for model output: per output type, an ordered
    list of (time, values-by-group) records, one per solver
    sample after the first.

API:
    OutputType - InfectionIncidence, SymptomaticIncidence,
                 HospitalIncidence, DeathIncidence
    OutputItem(time, grouped_values)
    ModelOutput
      - add_*_incidence(time, values)
      - get_output(output_type) -> list[OutputItem]
      - totals(output_type) -> np.ndarray (per group)
      - to_dataframe() -> long-form pd.DataFrame

Notes:
    - Values are incidence over the interval ending at `time`;
      intervals follow the solver's steps and are not uniform.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np
import pandas as pd
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence


class OutputType(str, Enum):
    INFECTION_INCIDENCE = "InfectionIncidence"
    SYMPTOMATIC_INCIDENCE = "SymptomaticIncidence"
    HOSPITAL_INCIDENCE = "HospitalIncidence"
    DEATH_INCIDENCE = "DeathIncidence"


@dataclass
class OutputItem:
    time: float
    grouped_values: List[float]

    def to_dict(self) -> Dict:
        return {"time": self.time, "grouped_values": list(self.grouped_values)}


class ModelOutput:
    """Incidence records for one model run, keyed by OutputType"""

    def __init__(self):
        self.output: Dict[OutputType, List[OutputItem]] = {t: [] for t in OutputType}

    def get_output(self, output_type: OutputType) -> List[OutputItem]:
        try:
            return self.output[OutputType(output_type)]
        except (KeyError, ValueError):
            raise KeyError(f"Unexpected output type: {output_type!r}") from None

    def _add_output(self, output_type: OutputType, time: float, grouped_values: Sequence[float]):
        self.get_output(output_type).append(
            OutputItem(float(time), [float(v) for v in grouped_values])
        )

    def add_infection_incidence(self, time: float, grouped_values: Sequence[float]):
        self._add_output(OutputType.INFECTION_INCIDENCE, time, grouped_values)

    def add_symptomatic_incidence(self, time: float, grouped_values: Sequence[float]):
        self._add_output(OutputType.SYMPTOMATIC_INCIDENCE, time, grouped_values)

    def add_hospital_incidence(self, time: float, grouped_values: Sequence[float]):
        self._add_output(OutputType.HOSPITAL_INCIDENCE, time, grouped_values)

    def add_death_incidence(self, time: float, grouped_values: Sequence[float]):
        self._add_output(OutputType.DEATH_INCIDENCE, time, grouped_values)

    def times(self) -> np.ndarray:
        return np.array([item.time for item in self.get_output(OutputType.INFECTION_INCIDENCE)])

    def values(self, output_type: OutputType) -> np.ndarray:
        """Incidence as an array of shape (n_samples, n_groups)"""
        items = self.get_output(output_type)
        return np.array([item.grouped_values for item in items], dtype=float)

    def totals(self, output_type: OutputType) -> np.ndarray:
        """Total incidence over the run, per group"""
        values = self.values(output_type)
        if values.size == 0:
            return np.zeros(0)
        return values.sum(axis=0)

    def to_dict(self) -> Dict[str, List[Dict]]:
        return {t.value: [item.to_dict() for item in items] for t, items in self.output.items()}

    def to_dataframe(self, labels: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Long-form table with one row per (output type, time, group).

        Columns: time, value, group, output_type. If labels are given, group
        holds the group label instead of its index.
        """
        records = []
        for output_type, items in self.output.items():
            for item in items:
                for g, value in enumerate(item.grouped_values):
                    records.append({
                        "time": item.time,
                        "value": value,
                        "group": labels[g] if labels is not None else g,
                        "output_type": output_type.value,
                    })
        return pd.DataFrame.from_records(records, columns=["time", "value", "group", "output_type"])

    def __len__(self):
        return len(self.get_output(OutputType.INFECTION_INCIDENCE))
