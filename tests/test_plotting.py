import matplotlib.pyplot as plt

from seirtv import OutputType, Parameters, ScenarioRunner
from seirtv.plotting import daily_rate, plot_epi_curve, plot_incidence_panels


def mitigated_result():
    params = Parameters()
    params.mitigations.vaccine.enabled = True
    return ScenarioRunner(params).run(100)


def test_daily_rate():
    result = mitigated_result()
    output = result["Unmitigated"]
    t, rate = daily_rate(output, OutputType.INFECTION_INCIDENCE)
    assert rate.shape == (t.size, 2)
    assert (rate >= -1e-6).all()


def test_plot_epi_curve():
    result = mitigated_result()
    fig, ax = plt.subplots()
    returned = plot_epi_curve(result, OutputType.HOSPITAL_INCIDENCE, ax=ax)
    assert returned is ax
    assert len(ax.get_lines()) == 2
    assert ax.get_title() == "Hospitalizations"
    plt.close(fig)


def test_plot_by_group():
    result = mitigated_result()
    ax = plot_epi_curve(result, labels=["Children", "Adults"], by_group=True)
    assert len(ax.get_lines()) == 4
    plt.close(ax.figure)


def test_plot_panels(tmp_path):
    path = tmp_path / "panels.png"
    fig = plot_incidence_panels(mitigated_result(), save_path=str(path))
    assert len(fig.axes) == 4
    assert path.exists()
    plt.close(fig)
