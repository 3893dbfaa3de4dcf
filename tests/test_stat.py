import math

import numpy as np
import pytest

from gridslam.point import OrientedPoint
from gridslam.stat import (
    Covariance3,
    EigenCovariance3,
    Gaussian3,
    compute_gaussian_from_samples,
    eval_gaussian,
    eval_log_gaussian,
    sample_gaussian,
    sample_uniform_double,
    sample_uniform_int,
    seed,
)

SAMPLES_NUMBER = 10000


def _base_cov():
    return Covariance3(xx=1.0, yy=0.01, tt=0.01, xy=0.0, xt=0.0, yt=0.0)


def _orthonormal(evec):
    m = np.array(evec)
    return np.allclose(m.T @ m, np.eye(3))


def test_eigen_decomposition_of_source_covariance():
    ecov = EigenCovariance3.from_covariance(_base_cov())
    assert sorted(ecov.eigenvalues) == pytest.approx([0.01, 0.01, 1.0])
    assert _orthonormal(ecov.eigenvectors)
    m = np.array(ecov.eigenvectors)
    rebuilt = m @ np.diag(ecov.eigenvalues) @ m.T
    assert np.allclose(rebuilt, _base_cov().matrix())


def test_rotation_keeps_eigenvalues():
    ecov = EigenCovariance3.from_covariance(_base_cov())
    rcov = ecov.rotate(math.pi / 4)
    assert rcov.eigenvalues == ecov.eigenvalues
    assert _orthonormal(rcov.eigenvectors)


def test_sampling_recovers_covariance_templates_and_method():
    seed(12345)
    rcov = EigenCovariance3.from_covariance(_base_cov()).rotate(math.pi / 4)
    points = [rcov.sample() for _ in range(SAMPLES_NUMBER)]
    gaussian = compute_gaussian_from_samples(points)
    assert sorted(gaussian.covariance.eigenvalues) == pytest.approx([0.01, 0.01, 1.0], rel=0.1)
    assert abs(gaussian.cov.xy) == pytest.approx(0.495, rel=0.1)

    other = Gaussian3()
    other.compute_from_samples(points)
    assert other.covariance.eigenvalues == pytest.approx(gaussian.covariance.eigenvalues)
    assert other.mean == gaussian.mean


def test_weighted_samples_with_uniform_weights_divide_by_count():
    poses = [OrientedPoint(0.0, 0.0, 0.0), OrientedPoint(2.0, 4.0, 0.0)]
    g = compute_gaussian_from_samples(poses, [1.0, 1.0])
    assert g.mean.x == pytest.approx(1.0)
    assert g.mean.y == pytest.approx(2.0)
    assert g.cov.xx == pytest.approx(1.0)
    assert g.cov.xy == pytest.approx(2.0)


def test_weighted_samples_errors():
    poses = [OrientedPoint(0.0, 0.0, 0.0)]
    with pytest.raises(ValueError):
        compute_gaussian_from_samples(poses, [1.0, 2.0])
    with pytest.raises(ValueError):
        compute_gaussian_from_samples(poses, [0.0])


def test_sample_gaussian_zero_sigma_and_seeding():
    assert sample_gaussian(0.0) == 0.0
    a = sample_gaussian(1.0, 42)
    b = sample_gaussian(1.0, 42)
    assert a == b


def test_sample_gaussian_statistics():
    seed(7)
    values = [sample_gaussian(2.0) for _ in range(20000)]
    assert np.mean(values) == pytest.approx(0.0, abs=0.1)
    assert np.std(values) == pytest.approx(2.0, rel=0.05)


def test_uniform_samplers_in_range():
    seed(3)
    ints = [sample_uniform_int(5) for _ in range(500)]
    assert set(ints) == {0, 1, 2, 3, 4}
    doubles = [sample_uniform_double(-1.0, 2.0) for _ in range(500)]
    assert all(-1.0 <= d < 2.0 for d in doubles)


def test_eval_gaussian_consistent_with_log():
    for s2, d in [(1.0, 0.0), (0.5, 1.2), (3.0, -2.0)]:
        assert math.log(eval_gaussian(s2, d)) == pytest.approx(eval_log_gaussian(s2, d))


def test_non_positive_variance_is_clamped():
    assert eval_log_gaussian(0.0, 0.3) == eval_log_gaussian(1e-4, 0.3)
    assert eval_gaussian(-1.0, 0.0) == eval_gaussian(1e-4, 0.0)


def test_gaussian3_eval_peaks_at_mean():
    ecov = EigenCovariance3.from_covariance(_base_cov())
    g = Gaussian3(mean=OrientedPoint(1.0, 2.0, 0.5), covariance=ecov, cov=_base_cov())
    at_mean = g.eval(g.mean)
    expected = sum(-0.5 * math.log(2 * math.pi * v) for v in ecov.eigenvalues)
    assert at_mean == pytest.approx(expected)
    assert g.eval(OrientedPoint(1.5, 2.0, 0.5)) < at_mean
    assert g.eval(OrientedPoint(1.0, 2.0, 0.5 + 2 * math.pi)) == pytest.approx(at_mean)


def test_covariance_addition_and_zero():
    a = _base_cov()
    assert a + Covariance3.zero() == a
    assert (a + a).xx == pytest.approx(2 * a.xx)