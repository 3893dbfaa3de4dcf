"""Particle weight handling, resampling and simple evolution drivers.

Particles are anything convertible with ``float()`` to their weight.
Where a resampled or evolved particle gets a new weight, dataclass
particles are rebuilt with ``dataclasses.replace(p, weight=w)``, other
objects are shallow-copied and get a ``weight`` attribute, and plain
numbers are replaced by the weight itself.
"""

from __future__ import annotations

import copy
import dataclasses
import math
import random
import sys
from dataclasses import dataclass, field
from itertools import groupby
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple


def _with_weight(particle: Any, weight: float) -> Any:
    if isinstance(particle, (int, float)):
        return weight
    if dataclasses.is_dataclass(particle) and not isinstance(particle, type):
        return dataclasses.replace(particle, weight=weight)
    clone = copy.copy(particle)
    clone.weight = weight
    return clone


def to_normal_form(values: Iterable[float]) -> Tuple[List[float], float]:
    """Turn log weights into raw weights scaled so the largest is 1.

    Returns the raw weights and the maximum log weight.
    """
    logs = [float(v) for v in values]
    lmax = max(logs, default=-sys.float_info.max)
    return [math.exp(v - lmax) for v in logs], lmax


def to_log_form(values: Iterable[float], lmax: float) -> List[float]:
    """Turn raw weights into log weights shifted down by lmax."""
    return [math.log(float(v)) - lmax for v in values]


def resample_indexes(
    weights: Sequence[float],
    nparticles: int = 0,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Systematic (low-variance) resampling of indexes by weight.

    The result has ``nparticles`` entries, or one per weight when
    ``nparticles`` is not positive, and is in non-decreasing order.
    """
    ws = [float(w) for w in weights]
    if not ws:
        raise ValueError("no weights to resample")
    total = sum(ws)
    if not total > 0:
        raise ValueError("total weight must be positive")
    n = nparticles if nparticles > 0 else len(ws)
    interval = total / n
    target = interval * (rng or random).random()
    indexes: List[int] = []
    cweight = 0.0
    for i, w in enumerate(ws):
        cweight += w
        while cweight > target and len(indexes) < n:
            indexes.append(i)
            target += interval
    # Rounding may leave the last slot unfilled; it belongs to the last weight drawn.
    last = indexes[-1] if indexes else len(ws) - 1
    indexes.extend([last] * (n - len(indexes)))
    return indexes


def normalize_weights(weights: Sequence[float], min_weight: float) -> List[float]:
    """Map log weights linearly onto [log(min_weight), 0] and exponentiate.

    The largest weight becomes 1 and the smallest becomes min_weight.
    """
    ws = [float(w) for w in weights]
    if not ws:
        return []
    wmin, wmax = min(ws), max(ws)
    dn = math.log(1.0) - math.log(min_weight)
    dw = wmax - wmin
    if dw == 0:
        dw = 1.0
    scale = dn / dw
    offset = -wmax * scale
    return [math.exp(scale * w + offset) for w in ws]


def repeat_indexes(indexes: Iterable[int], particles: Sequence[Any]) -> List[Any]:
    """The particles picked by indexes, in that order."""
    return [particles[i] for i in indexes]


def repeat_indexes_into(
    indexes2: Sequence[int], particles: Sequence[Any], indexes: Sequence[int]
) -> List[Any]:
    """A copy of particles where slot indexes[i] is replaced by particles[indexes2[i]]."""
    if len(indexes) < len(indexes2):
        raise ValueError("fewer target slots than source indexes")
    dest = list(particles)
    for slot, source in zip(indexes, indexes2):
        dest[slot] = particles[source]
    return dest


def neff(weights: Iterable[float]) -> float:
    """Effective sample size of a set of (unnormalised) weights."""
    ws = [float(w) for w in weights]
    total = sum(ws)
    if not ws or total == 0:
        raise ValueError("weights must be non-empty with a non-zero sum")
    cum = sum((w / total) ** 2 for w in ws)
    return 1.0 / cum


def normalize(weights: Iterable[float]) -> List[float]:
    """Weights scaled to sum to one."""
    ws = [float(w) for w in weights]
    total = sum(ws)
    if total == 0:
        raise ValueError("weights sum to zero")
    return [w / total for w in ws]


def rle(values: Iterable[Any]) -> List[Tuple[Any, int]]:
    """Run-length encoding as (value, count) pairs."""
    return [(value, sum(1 for _ in run)) for value, run in groupby(values)]


@dataclass
class UniformResampler:
    """Systematic resampler over particles convertible to their weight."""

    rng: Optional[random.Random] = None
    reweight: Callable[[Any, float], Any] = _with_weight

    def resample_indexes(self, particles: Sequence[Any], nparticles: int = 0) -> List[int]:
        return resample_indexes([float(p) for p in particles], nparticles, self.rng)

    def resample(self, particles: Sequence[Any], nparticles: int = 0) -> List[Any]:
        """Resampled particles, each carrying the weight 1/n."""
        indexes = self.resample_indexes(particles, nparticles)
        uw = 1.0 / len(indexes)
        return [self.reweight(particles[i], uw) for i in indexes]

    def neff(self, particles: Iterable[Any]) -> float:
        ws = [float(p) for p in particles]
        cum = sum(w * w for w in ws)
        if cum == 0:
            raise ValueError("all weights are zero")
        total = sum(ws)
        return total * total / cum


@dataclass
class Evolver:
    """Applies a model's ``evolve`` to every particle."""

    evolution_model: Any

    def evolve(self, particles: Iterable[Any]) -> List[Any]:
        return [self.evolution_model.evolve(p) for p in particles]


@dataclass
class AuxiliaryEvolver:
    """Auxiliary particle filter step.

    Particles are first scored by the likelihood of their qualified
    prediction, resampled on those scores, evolved, and reweighted by
    likelihood(evolved) / score.
    """

    evolution_model: Any
    qualification_model: Any
    likelihood_model: Any
    resampler: UniformResampler = field(default_factory=UniformResampler)

    def evolve(self, particles: Sequence[Any]) -> List[Any]:
        observation_weights = [
            float(self.likelihood_model.likelihood(self.qualification_model.evolve(p)))
            for p in particles
        ]
        indexes = self.resampler.resample_indexes(observation_weights)
        result = []
        for i in indexes:
            evolved = self.evolution_model.evolve(particles[i])
            weight = self.likelihood_model.likelihood(evolved) / observation_weights[i]
            result.append(self.resampler.reweight(evolved, weight))
        return result