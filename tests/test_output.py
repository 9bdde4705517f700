import numpy as np
import pytest

from seirtv import ModelOutput, OutputType


@pytest.fixture
def output():
    out = ModelOutput()
    for time, values in ((0.5, [1.0, 2.0]), (1.5, [3.0, 4.0])):
        out.add_infection_incidence(time, values)
        out.add_symptomatic_incidence(time, [v / 2 for v in values])
        out.add_hospital_incidence(time, [0.0, 0.1])
        out.add_death_incidence(time, [0.0, 0.01])
    return out


def test_every_type_present():
    out = ModelOutput()
    assert set(out.output) == set(OutputType)
    assert len(out) == 0


def test_records(output):
    items = output.get_output(OutputType.INFECTION_INCIDENCE)
    assert [item.time for item in items] == [0.5, 1.5]
    assert items[1].grouped_values == [3.0, 4.0]
    np.testing.assert_array_equal(output.times(), [0.5, 1.5])


def test_lookup_by_name(output):
    assert output.get_output("HospitalIncidence") is output.get_output(OutputType.HOSPITAL_INCIDENCE)


def test_unknown_type(output):
    with pytest.raises(KeyError, match="Unexpected output type"):
        output.get_output("RecoveryIncidence")


def test_totals(output):
    np.testing.assert_allclose(output.totals(OutputType.INFECTION_INCIDENCE), [4.0, 6.0])
    np.testing.assert_allclose(output.totals(OutputType.SYMPTOMATIC_INCIDENCE), [2.0, 3.0])
    assert output.values(OutputType.DEATH_INCIDENCE).shape == (2, 2)


def test_to_dataframe(output):
    df = output.to_dataframe(labels=["Children", "Adults"])
    assert list(df.columns) == ["time", "value", "group", "output_type"]
    assert len(df) == 4 * 2 * 2
    infections = df[df["output_type"] == "InfectionIncidence"]
    assert infections.groupby("group")["value"].sum().to_dict() == {"Adults": 6.0, "Children": 4.0}


def test_to_dict(output):
    record = output.to_dict()
    assert record["DeathIncidence"][0] == {"time": 0.5, "grouped_values": [0.0, 0.01]}
