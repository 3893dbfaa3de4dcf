"""Forward/sideward/rotate movements between robot poses."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .point import OrientedPoint, normalize_angle


@dataclass
class FSRMovement:
    """A relative motion: f forward, s sideways, r rotation."""

    f: float = 0.0
    s: float = 0.0
    r: float = 0.0

    @classmethod
    def between(cls, pt1: OrientedPoint, pt2: OrientedPoint) -> FSRMovement:
        """The movement that takes pt1 to pt2."""
        return cls.move_between_points(pt1, pt2)

    def normalize(self) -> None:
        """Bring the rotation into [-pi, pi) in place."""
        self.r = normalize_angle(self.r)

    def invert(self) -> None:
        inv = FSRMovement.invert_move(self)
        self.f, self.s, self.r = inv.f, inv.s, inv.r

    def compose(self, move2: FSRMovement) -> None:
        comp = FSRMovement.compose_moves(self, move2)
        self.f, self.s, self.r = comp.f, comp.s, comp.r

    def move(self, pt: OrientedPoint) -> OrientedPoint:
        return FSRMovement.move_point(pt, self)

    @staticmethod
    def compose_moves(move1: FSRMovement, move2: FSRMovement) -> FSRMovement:
        c, s = math.cos(move1.r), math.sin(move1.r)
        comp = FSRMovement(
            c * move2.f - s * move2.s + move1.f,
            s * move2.f + c * move2.s + move1.s,
            move1.r + move2.r,
        )
        comp.normalize()
        return comp

    @staticmethod
    def move_point(pt: OrientedPoint, move1: FSRMovement) -> OrientedPoint:
        c, s = math.cos(pt.theta), math.sin(pt.theta)
        return OrientedPoint(
            pt.x + move1.f * c - move1.s * s,
            pt.y + move1.f * s + move1.s * c,
            move1.r + pt.theta,
        ).normalize()

    @staticmethod
    def move_between_points(pt1: OrientedPoint, pt2: OrientedPoint) -> FSRMovement:
        c, s = math.cos(pt1.theta), math.sin(pt1.theta)
        dx, dy = pt2.x - pt1.x, pt2.y - pt1.y
        move = FSRMovement(dy * s + dx * c, dy * c - dx * s, pt2.theta - pt1.theta)
        move.normalize()
        return move

    @staticmethod
    def invert_move(move1: FSRMovement) -> FSRMovement:
        c, s = math.cos(move1.r), math.sin(move1.r)
        inv = FSRMovement(-c * move1.f - s * move1.s, s * move1.f - c * move1.s, -move1.r)
        inv.normalize()
        return inv

    @staticmethod
    def frame_transformation(
        reference_pt_frame1: OrientedPoint,
        reference_pt_frame2: OrientedPoint,
        pt_frame1: OrientedPoint,
    ) -> OrientedPoint:
        """Map a pose from frame 1 to frame 2, given one pose known in both frames."""
        zero = OrientedPoint()
        itrans_refp1 = FSRMovement.between(zero, reference_pt_frame1)
        itrans_refp1.invert()
        trans_refp2 = FSRMovement.between(zero, reference_pt_frame2)
        trans_pt = FSRMovement.between(zero, pt_frame1)
        tmp = FSRMovement.compose_moves(
            FSRMovement.compose_moves(trans_refp2, itrans_refp1), trans_pt
        )
        return tmp.move(zero)