import numpy as np
import pytest

from seirtv import (
    AntiviralsParams,
    CommunityMitigationParams,
    MitigationParams,
    ParameterError,
    Parameters,
    ScenarioRunner,
    VaccineParams,
)


def test_uniform_capability():
    mitigations = MitigationParams.default(2)
    assert not mitigations.any_enabled()
    for m in mitigations:
        assert m.get_editable()
        m.set_enabled(True)
        assert m.get_enabled()
        m.set_editable(False)
        assert not m.get_editable()
    assert mitigations.any_enabled()

    mitigations.disable_all()
    assert not any(m.get_enabled() for m in mitigations)
    # disabling leaves the editable flags alone
    assert not any(m.get_editable() for m in mitigations)


def test_each_mitigation_counts():
    for name in ("vaccine", "antivirals", "community"):
        mitigations = MitigationParams.default(2)
        getattr(mitigations, name).enabled = True
        assert mitigations.any_enabled()


def test_vaccine_rate():
    vaccine = VaccineParams(enabled=True, start=10.0, administration_rate=1_000.0, doses_available=5_000.0)
    assert vaccine.rate_at(9.99) == 0.0
    assert vaccine.rate_at(10.0) == 1_000.0
    # stock used up exactly at day 15; administration still on at that instant
    assert vaccine.rate_at(15.0) == 1_000.0
    assert vaccine.rate_at(15.001) == 0.0


def test_vaccine_disabled_rate():
    vaccine = VaccineParams(enabled=False)
    assert vaccine.rate_at(100.0) == 0.0


def test_vaccine_efficacy_range():
    with pytest.raises(ParameterError):
        VaccineParams(ve_s=1.5)


def test_antivirals_treated_fraction():
    av = AntiviralsParams(fraction_adhere=0.5, fraction_diagnosed_prescribed_outpatient=0.5,
                          fraction_seek_care=0.5)
    assert av.fraction_treated_outpatient == pytest.approx(0.125)
    with pytest.raises(ParameterError):
        AntiviralsParams(ave_p=-0.1)


def test_community_window():
    community = CommunityMitigationParams(enabled=True, start=60.0, duration=20.0)
    assert not community.is_active(59.9)
    assert community.is_active(60.0)
    assert community.is_active(79.9)
    assert not community.is_active(80.0)
    community.enabled = False
    assert not community.is_active(70.0)


def test_community_default_multiplier():
    community = CommunityMitigationParams()
    community.resolve(3)
    np.testing.assert_allclose(community.contact_multiplier, np.full((3, 3), 0.75))


def test_community_shape_checked():
    community = CommunityMitigationParams(contact_multiplier=np.ones((2, 2)))
    with pytest.raises(ParameterError):
        community.resolve(3)


def test_community_multiplier_assigned_as_list():
    params = Parameters()
    params.mitigations.community.enabled = True
    params.mitigations.community.contact_multiplier = [[0.5, 0.5], [0.5, 0.5]]
    result = ScenarioRunner(params).run(100)
    assert result.has_mitigations

    community = CommunityMitigationParams()
    community.contact_multiplier = [[0.5, 1.0], [1.0, 0.5]]
    community.resolve(2)
    np.testing.assert_allclose(community.contact_multiplier, [[0.5, 1.0], [1.0, 0.5]])


def test_community_from_effectiveness():
    community = CommunityMitigationParams.from_effectiveness([[0.25, 0.0], [0.5, 1.0]], enabled=True)
    np.testing.assert_allclose(community.contact_multiplier, [[0.75, 1.0], [0.5, 0.0]])
    assert community.enabled


def test_mitigations_record():
    mitigations = MitigationParams(
        community=CommunityMitigationParams(contact_multiplier=[[1.0, 0.5], [0.8, 0.9]])
    )
    record = mitigations.to_dict()
    assert record["community"]["contact_multiplier"] == [1.0, 0.8, 0.5, 0.9]
    assert record["vaccine"]["ve_s"] == 0.5
    assert record["antivirals"]["enabled"] is False

    restored = MitigationParams.from_dict(record, n=2)
    np.testing.assert_allclose(restored.community.contact_multiplier, [[1.0, 0.5], [0.8, 0.9]])
    assert restored.vaccine == mitigations.vaccine
    assert restored.antivirals == mitigations.antivirals


def test_unknown_field_rejected():
    with pytest.raises(ParameterError):
        VaccineParams.from_dict({"enabled": True, "speed": 3})
