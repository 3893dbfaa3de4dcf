import pytest

from gridslam.icp import icp_nonlinear_step, icp_step
from gridslam.point import Point

SOURCE = [Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 3.0), Point(3.0, 2.0)]
SHIFT = Point(0.5, -1.25)


def _translated():
    return [(p, p + SHIFT) for p in SOURCE]


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_pure_translation_is_recovered(step):
    pose, error = step(_translated())
    assert pose.theta == 0.0
    assert pose.x == pytest.approx(SHIFT.x)
    assert pose.y == pytest.approx(SHIFT.y)
    assert error == pytest.approx(0.0, abs=1e-20)


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_identity_pairs_give_zero_transform(step):
    pose, error = step([(p, p) for p in SOURCE])
    assert (pose.x, pose.y, pose.theta) == pytest.approx((0.0, 0.0, 0.0))
    assert error == pytest.approx(0.0, abs=1e-20)


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_error_is_nonnegative_for_noisy_pairs(step):
    noise = [Point(0.1, 0.0), Point(-0.2, 0.1), Point(0.0, 0.3), Point(0.05, -0.1)]
    pairs = [(p, p + SHIFT + n) for p, n in zip(SOURCE, noise)]
    _, error = step(pairs)
    assert error > 0.0


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_empty_pairs_raise(step):
    with pytest.raises(ValueError):
        step([])