import numpy as np
import pytest

from objective_functions import CallableObjective, SearchDomain, as_point, display_grid
from pso_errors import InvalidArgumentError, NotSupportedError


def paraboloid(x):
    return float(x[0] ** 2 + 3.0 * x[1] ** 2)


def test_search_domain_span_and_clamp():
    dom = SearchDomain(-2.0, 3.0)
    assert dom.span == 5.0
    assert dom.clamp(-7.0) == -2.0
    assert dom.clamp(10.0) == 3.0
    assert dom.clamp(0.5) == 0.5


def test_callable_objective_reports_bounds_and_evaluates():
    f = CallableObjective(paraboloid, (-1.0, 1.0), (-4.0, 2.0))
    x_dom, z_dom = f.domain_bounds()
    assert x_dom == SearchDomain(-1.0, 1.0)
    assert z_dom == SearchDomain(-4.0, 2.0)
    assert np.array_equal(f.domain_min, [-1.0, -4.0])
    assert np.array_equal(f.domain_max, [1.0, 2.0])
    assert f.evaluate((1.0, 2.0)) == 13.0
    # display defaults to evaluate
    assert f.display_value((1.0, 2.0)) == 13.0
    assert f((1.0, 2.0)) == 13.0


def test_z_bounds_default_to_x_bounds():
    f = CallableObjective(paraboloid, (-3.0, 3.0))
    assert f.domain_bounds()[1] == SearchDomain(-3.0, 3.0)


def test_optimum_not_supported_without_declaration():
    f = CallableObjective(paraboloid, (-1.0, 1.0))
    with pytest.raises(NotSupportedError):
        f.optimum_location()
    with pytest.raises(NotSupportedError):
        f.optimum_value()


def test_declared_optimum():
    f = CallableObjective(paraboloid, (-1.0, 1.0), optimum=(0.0, 0.0))
    assert np.array_equal(f.optimum_location(), [0.0, 0.0])
    assert f.optimum_value() == 0.0


@pytest.mark.parametrize("bounds", [(1.0, -1.0), (0.0,), "ab", (0.0, np.inf)])
def test_invalid_bounds_rejected(bounds):
    with pytest.raises(InvalidArgumentError):
        CallableObjective(paraboloid, bounds)


def test_degenerate_axis_allowed():
    f = CallableObjective(paraboloid, (2.0, 2.0), (-1.0, 1.0))
    assert f.domain_bounds()[0].span == 0.0


def test_non_callable_rejected():
    with pytest.raises(InvalidArgumentError):
        CallableObjective(42, (-1.0, 1.0))


def test_as_point_shape_check():
    assert as_point([1, 2]).dtype == np.float64
    with pytest.raises(InvalidArgumentError):
        as_point([1.0, 2.0, 3.0])


def test_display_grid_covers_domain():
    f = CallableObjective(paraboloid, (-1.0, 1.0), (-2.0, 2.0))
    X, Z, Y = display_grid(f, resolution=5)
    assert X.shape == Z.shape == Y.shape == (5, 5)
    assert X.min() == -1.0 and X.max() == 1.0
    assert Z.min() == -2.0 and Z.max() == 2.0
    assert Y[2, 2] == 0.0
    assert Y[0, 0] == paraboloid((-1.0, -2.0))


def test_display_grid_rejects_tiny_resolution():
    f = CallableObjective(paraboloid, (-1.0, 1.0))
    with pytest.raises(InvalidArgumentError):
        display_grid(f, resolution=1)
