import math

import numpy as np
import pytest
from scipy.stats import norm

import bsmpricer.normal as normal
from bsmpricer.errors import DomainError
from bsmpricer.normal import norm_cdf, norm_pdf


def test_known_points():
    assert norm_cdf(0.0) == 0.5
    assert norm_cdf(1.96) == pytest.approx(0.9750021048517795, abs=1e-14)
    assert norm_pdf(0.0) == pytest.approx(1 / math.sqrt(2 * math.pi), rel=1e-15)


def test_matches_scipy_over_practical_range():
    xs = np.linspace(-10, 10, 2001)
    got = np.array([norm_cdf(float(x)) for x in xs])
    assert np.max(np.abs(got - norm.cdf(xs))) < 1e-12


def test_lower_tail_keeps_relative_precision():
    for x in (-5.0, -8.0, -12.0):
        assert norm_cdf(x) == pytest.approx(norm.cdf(x), rel=1e-9)


def test_symmetry():
    for x in (0.1, 1.0, 3.3, 7.5):
        assert norm_cdf(x) + norm_cdf(-x) == pytest.approx(1.0, abs=1e-15)


def test_saturates():
    assert norm_cdf(-40.0) == 0.0
    assert norm_cdf(40.0) == 1.0


@pytest.mark.parametrize("x", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_input(x):
    with pytest.raises(DomainError):
        norm_cdf(x)
    with pytest.raises(DomainError):
        norm_pdf(x)


def test_documented():
    assert normal.__doc__
    assert norm_pdf.__doc__ and norm_cdf.__doc__
