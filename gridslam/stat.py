"""Gaussian sampling and three-dimensional pose Gaussians."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from .point import OrientedPoint

_rng = random.Random()


def seed(value) -> None:
    """Seed the generator used by all sampling functions here."""
    _rng.seed(value)


def _draw_nonzero() -> float:
    while True:
        r = _rng.random()
        if r != 0.0:
            return r


def _ran_gaussian(sigma: float) -> float:
    # Polar Box-Muller transformation.
    while True:
        x1 = 2.0 * _draw_nonzero() - 1.0
        _draw_nonzero()
        x2 = 2.0 * _rng.random() - 1.0
        w = x1 * x1 + x2 * x2
        if 0.0 < w <= 1.0:
            break
    return sigma * x2 * math.sqrt(-2.0 * math.log(w) / w)


def sample_gaussian(sigma: float, seed_value: int = 0) -> float:
    """Draw from a zero-mean normal with standard deviation sigma.

    A non-zero seed_value reseeds the generator first.
    """
    if seed_value != 0:
        seed(seed_value)
    if sigma == 0:
        return 0.0
    return _ran_gaussian(sigma)


def sample_uniform_int(maximum: int) -> int:
    """A uniform integer in [0, maximum)."""
    return int(maximum * _rng.random())


def sample_uniform_double(minimum: float, maximum: float) -> float:
    return minimum + _rng.random() * (maximum - minimum)


def eval_gaussian(sigma_square: float, delta: float) -> float:
    if sigma_square <= 0:
        sigma_square = 1e-4
    return math.exp(-0.5 * delta * delta / sigma_square) / math.sqrt(2 * math.pi * sigma_square)


def eval_log_gaussian(sigma_square: float, delta: float) -> float:
    if sigma_square <= 0:
        sigma_square = 1e-4
    return -0.5 * delta * delta / sigma_square - 0.5 * math.log(2 * math.pi * sigma_square)


@dataclass(frozen=True)
class Covariance3:
    """A symmetric 3x3 covariance over (x, y, theta)."""

    xx: float = 0.0
    yy: float = 0.0
    tt: float = 0.0
    xy: float = 0.0
    xt: float = 0.0
    yt: float = 0.0

    def __add__(self, other: Covariance3) -> Covariance3:
        if not isinstance(other, Covariance3):
            return NotImplemented
        return Covariance3(
            self.xx + other.xx,
            self.yy + other.yy,
            self.tt + other.tt,
            self.xy + other.xy,
            self.xt + other.xt,
            self.yt + other.yt,
        )

    @classmethod
    def zero(cls) -> Covariance3:
        return cls()

    def matrix(self) -> np.ndarray:
        return np.array(
            [
                [self.xx, self.xy, self.xt],
                [self.xy, self.yy, self.yt],
                [self.xt, self.yt, self.tt],
            ],
            dtype=float,
        )


_IDENTITY = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


@dataclass(frozen=True)
class EigenCovariance3:
    """Eigen-decomposition of a Covariance3; eigenvectors are the columns."""

    eigenvalues: tuple = (0.0, 0.0, 0.0)
    eigenvectors: tuple = _IDENTITY

    @classmethod
    def from_covariance(cls, cov: Covariance3) -> EigenCovariance3:
        values, vectors = np.linalg.eigh(cov.matrix())
        return cls(
            tuple(float(v) for v in values),
            tuple(tuple(float(v) for v in row) for row in vectors),
        )

    def rotate(self, angle: float) -> EigenCovariance3:
        """Rotate the eigenvectors about the theta axis."""
        c, s = math.cos(angle), math.sin(angle)
        rot = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        result = rot @ np.array(self.eigenvectors, dtype=float)
        return EigenCovariance3(
            self.eigenvalues, tuple(tuple(float(v) for v in row) for row in result)
        )

    def sample(self) -> OrientedPoint:
        """Draw a zero-mean pose perturbation from this distribution."""
        pnoise = []
        for value in self.eigenvalues:
            sigma = math.sqrt(value) if value >= 0 else math.nan
            v = sample_gaussian(sigma)
            pnoise.append(0.0 if math.isnan(v) else v)
        noise = np.array(self.eigenvectors, dtype=float) @ np.array(pnoise)
        x, y, t = (float(v) for v in noise)
        return OrientedPoint(x, y, math.atan2(math.sin(t), math.cos(t)))


@dataclass
class Gaussian3:
    """A Gaussian over poses, kept both as covariance and eigen-decomposition."""

    mean: OrientedPoint = field(default_factory=OrientedPoint)
    covariance: EigenCovariance3 = field(default_factory=EigenCovariance3)
    cov: Covariance3 = field(default_factory=Covariance3)

    def eval(self, p: OrientedPoint) -> float:
        """Log-density of p (up to the decorrelating rotation)."""
        q = p - self.mean
        dt = p.theta - self.mean.theta
        q_theta = math.atan2(math.sin(dt), math.cos(dt))
        vec = self.covariance.eigenvectors
        components = (q.x, q.y, q_theta)
        total = 0.0
        for j, value in enumerate(self.covariance.eigenvalues):
            v = sum(vec[i][j] * components[i] for i in range(3))
            total += eval_log_gaussian(value, v)
        return total

    def compute_from_samples(
        self, poses: Iterable[OrientedPoint], weights: Optional[Sequence[float]] = None
    ) -> None:
        g = compute_gaussian_from_samples(poses, weights)
        self.mean, self.covariance, self.cov = g.mean, g.covariance, g.cov


def compute_gaussian_from_samples(
    poses: Iterable[OrientedPoint], weights: Optional[Sequence[float]] = None
) -> Gaussian3:
    """Fit a Gaussian3 to pose samples, optionally weighted.

    Without weights the normaliser is one more than the sample count.
    """
    poses = list(poses)
    if weights is None:
        ws = [1.0] * len(poses)
        wcum = 1.0 + len(poses)
    else:
        ws = [float(w) for w in weights]
        if len(ws) != len(poses):
            raise ValueError("poses and weights differ in length")
        wcum = sum(ws)
        if wcum == 0:
            raise ValueError("total weight is zero")

    s = sum(w * math.sin(p.theta) for p, w in zip(poses, ws)) / wcum
    c = sum(w * math.cos(p.theta) for p, w in zip(poses, ws)) / wcum
    mx = sum(w * p.x for p, w in zip(poses, ws)) / wcum
    my = sum(w * p.y for p, w in zip(poses, ws)) / wcum
    mean = OrientedPoint(mx, my, math.atan2(s, c))

    xx = yy = tt = xy = yt = xt = 0.0
    for p, w in zip(poses, ws):
        d = p - mean
        dt = math.atan2(math.sin(d.theta), math.cos(d.theta))
        xx += w * d.x * d.x
        yy += w * d.y * d.y
        tt += w * dt * dt
        xy += w * d.x * d.y
        yt += w * d.y * dt
        xt += w * d.x * dt
    cov = Covariance3(xx / wcum, yy / wcum, tt / wcum, xy / wcum, xt / wcum, yt / wcum)
    return Gaussian3(mean, EigenCovariance3.from_covariance(cov), cov)