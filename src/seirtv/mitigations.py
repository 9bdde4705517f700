"""
===============================================================================
mitigations.py
Last Updated: 2026-10-19
===============================================================================
Public-health interventions for the grouped SEIR model

Three independent mitigation bundles, each of which can be switched on or
off without touching its settings:
- Vaccine: constant-rate administration from a start day until the stock
  of doses runs out, with efficacies against susceptibility (ve_s),
  infectiousness (ve_i) and progression to severe outcomes (ve_p)
- Antivirals: treatment of symptomatic cases, gated by a care-seeking,
  diagnosis and adherence cascade, with efficacies against transmission
  (ave_i) and progression (ave_p)
- Community: a time window during which the contact matrix is multiplied
  element-wise by a contact multiplier (1.0 = no change)

All three share the Mitigation capability (enabled / editable flags) so the
scenario runner can strip them generically.
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, Optional

from .errors import ParameterError

# default community mitigation: a 25% cut in every contact rate
DEFAULT_CONTACT_MULTIPLIER = 0.75


@dataclass
class Mitigation:
    """Base capability shared by every mitigation bundle.

    enabled: bool. Is the mitigation applied to the model?
    editable: bool. Is the mitigation offered for editing by the host application?
    """
    enabled: bool = False
    editable: bool = True

    def get_enabled(self) -> bool:
        return self.enabled

    def set_enabled(self, enabled: bool):
        self.enabled = bool(enabled)

    def get_editable(self) -> bool:
        return self.editable

    def set_editable(self, editable: bool):
        self.editable = bool(editable)

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, record: Dict):
        known = {f.name for f in fields(cls)}
        unknown = set(record) - known
        if unknown:
            raise ParameterError(f"Unknown {cls.__name__} fields: {sorted(unknown)}")
        return cls(**record)


def _check_fraction(name: str, value: float):
    if not 0.0 <= value <= 1.0:
        raise ParameterError(f"{name} must be in [0, 1], got {value}")


@dataclass
class VaccineParams(Mitigation):
    """Vaccine administered at a constant daily rate.

    doses: int. Number of doses in the schedule (informational)
    start: float. Day administration begins
    administration_rate: float. Doses per day
    doses_available: float. Total stock; administration stops once used up
    ve_s, ve_i, ve_p: float. Efficacy against susceptibility, infectiousness
        and progression
    """
    doses: int = 1
    start: float = 0.0
    administration_rate: float = 1_500_000.0
    doses_available: float = 40_000_000.0
    ve_s: float = 0.5
    ve_i: float = 0.5
    ve_p: float = 0.5

    def __post_init__(self):
        for name in ("ve_s", "ve_i", "ve_p"):
            _check_fraction(name, getattr(self, name))
        if self.administration_rate < 0:
            raise ParameterError("administration_rate must be non-negative")
        if self.doses_available < 0:
            raise ParameterError("doses_available must be non-negative")

    def rate_at(self, t: float) -> float:
        """Doses administered per day at time t.

        Administration is still on at the exact instant the cumulative
        doses given equal doses_available.
        """
        if not self.enabled or t < self.start:
            return 0.0
        if (t - self.start) * self.administration_rate <= self.doses_available:
            return self.administration_rate
        return 0.0


@dataclass
class AntiviralsParams(Mitigation):
    """Antiviral treatment of symptomatic cases."""
    fraction_adhere: float = 0.8
    fraction_diagnosed_prescribed_inpatient: float = 1.0
    fraction_diagnosed_prescribed_outpatient: float = 0.7
    fraction_seek_care: float = 0.6
    ave_i: float = 0.5
    ave_p: float = 0.5

    def __post_init__(self):
        for f in fields(self):
            if f.name not in ("enabled", "editable"):
                _check_fraction(f.name, getattr(self, f.name))

    @property
    def fraction_treated_outpatient(self) -> float:
        """Share of symptomatic cases that seek care, get a prescription and adhere"""
        return (self.fraction_seek_care
                * self.fraction_diagnosed_prescribed_outpatient
                * self.fraction_adhere)


@dataclass
class CommunityMitigationParams(Mitigation):
    """Contact reduction over the window [start, start + duration).

    contact_multiplier: np.ndarray (N x N). Element-wise multiplier applied to
        the contact matrix while the mitigation is active. None means the
        default multiplier everywhere, filled in once the group count is known.
    """
    start: float = 60.0
    duration: float = 20.0
    contact_multiplier: Optional[np.ndarray] = None

    def __post_init__(self):
        if self.duration < 0:
            raise ParameterError("duration must be non-negative")
        if self.contact_multiplier is not None:
            self.contact_multiplier = np.array(self.contact_multiplier, dtype=float)
            if np.any(self.contact_multiplier < 0):
                raise ParameterError("contact_multiplier must be non-negative")

    @classmethod
    def from_effectiveness(cls, effectiveness, **kwargs) -> "CommunityMitigationParams":
        """Build from a contact-reduction effectiveness matrix (0 = no reduction)"""
        effectiveness = np.asarray(effectiveness, dtype=float)
        return cls(contact_multiplier=1.0 - effectiveness, **kwargs)

    def is_active(self, t: float) -> bool:
        return self.enabled and self.start <= t < self.start + self.duration

    def resolve(self, n: int):
        """Fill in the default multiplier and check it is n x n"""
        if self.contact_multiplier is None:
            self.contact_multiplier = np.full((n, n), DEFAULT_CONTACT_MULTIPLIER)
        self.contact_multiplier = np.asarray(self.contact_multiplier, dtype=float)
        if self.contact_multiplier.shape != (n, n):
            raise ParameterError(
                f"contact_multiplier must be {n}x{n}, got shape {self.contact_multiplier.shape}"
            )

    def to_dict(self) -> Dict:
        record = super().to_dict()
        if self.contact_multiplier is not None:
            # column-major, as exchanged with the host application
            record["contact_multiplier"] = self.contact_multiplier.flatten(order="F").tolist()
        return record

    @classmethod
    def from_dict(cls, record: Dict, n: Optional[int] = None) -> "CommunityMitigationParams":
        record = dict(record)
        flat = record.get("contact_multiplier")
        if flat is not None:
            flat = np.asarray(flat, dtype=float)
            if flat.ndim == 1:
                size = n if n is not None else int(round(np.sqrt(flat.size)))
                if flat.size != size * size:
                    raise ParameterError("Invalid number of contact multiplier elements")
                record["contact_multiplier"] = flat.reshape((size, size), order="F")
        return super().from_dict(record)


@dataclass
class MitigationParams:
    """The closed set of mitigations applied to one model run."""
    vaccine: VaccineParams = field(default_factory=VaccineParams)
    antivirals: AntiviralsParams = field(default_factory=AntiviralsParams)
    community: CommunityMitigationParams = field(default_factory=CommunityMitigationParams)

    def __iter__(self) -> Iterator[Mitigation]:
        return iter((self.vaccine, self.antivirals, self.community))

    @classmethod
    def default(cls, n: int) -> "MitigationParams":
        mitigations = cls()
        mitigations.community.resolve(n)
        return mitigations

    def any_enabled(self) -> bool:
        return any(m.get_enabled() for m in self)

    def disable_all(self):
        for m in self:
            m.set_enabled(False)

    def to_dict(self) -> Dict:
        return {
            "vaccine": self.vaccine.to_dict(),
            "antivirals": self.antivirals.to_dict(),
            "community": self.community.to_dict(),
        }

    @classmethod
    def from_dict(cls, record: Dict, n: Optional[int] = None) -> "MitigationParams":
        return cls(
            vaccine=VaccineParams.from_dict(record.get("vaccine", {})),
            antivirals=AntiviralsParams.from_dict(record.get("antivirals", {})),
            community=CommunityMitigationParams.from_dict(record.get("community", {}), n=n),
        )
