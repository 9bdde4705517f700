import numpy as np
import pytest

from seirtv import ConvergenceError, get_dominant_eigendata, normalize_contact_matrix


def test_dominant_eigendata():
    x = np.array([[1.0, 3.0],
                  [2.0, 4.0]])
    eigenvalue, eigenvector = get_dominant_eigendata(x)
    assert eigenvalue == pytest.approx(5.3722813, abs=1e-6)
    assert eigenvector[0] == pytest.approx(0.4069297, abs=1e-6)
    assert eigenvector[1] == pytest.approx(0.5930703, abs=1e-6)


def test_matches_numpy_for_default_contacts():
    contacts = np.array([[18.0, 3.0],
                         [9.0, 12.0]])
    eigenvalue, eigenvector = get_dominant_eigendata(contacts)
    assert eigenvalue == pytest.approx(np.max(np.linalg.eigvals(contacts).real), rel=1e-12)
    np.testing.assert_allclose(contacts @ eigenvector, eigenvalue * eigenvector, rtol=1e-10)
    assert eigenvector.sum() == pytest.approx(1.0)


def test_single_group():
    eigenvalue, eigenvector = get_dominant_eigendata(np.array([[4.0]]))
    assert eigenvalue == pytest.approx(4.0)
    np.testing.assert_allclose(eigenvector, [1.0])


def test_normalized_matrix_has_unit_eigenvalue():
    normalized = normalize_contact_matrix(np.array([[1.0, 3.0], [2.0, 4.0]]))
    eigenvalue, _ = get_dominant_eigendata(normalized)
    assert eigenvalue == pytest.approx(1.0, abs=1e-12)


def test_zero_matrix_fails():
    with pytest.raises(ConvergenceError):
        get_dominant_eigendata(np.zeros((2, 2)))


def test_iteration_cap():
    # M^3 = 6I: the L1 norm cycles with period 3 and never settles
    oscillating = np.array([[0.0, 1.0, 0.0],
                            [0.0, 0.0, 2.0],
                            [3.0, 0.0, 0.0]])
    with pytest.raises(ConvergenceError):
        get_dominant_eigendata(oscillating, max_iterations=50)


def test_non_square_rejected():
    with pytest.raises(ValueError):
        get_dominant_eigendata(np.ones((2, 3)))
