"""Binary PGM output of a grid of values in [0, 1]."""

from __future__ import annotations

from typing import BinaryIO, Sequence


def write_pgm(stream: BinaryIO, xsize: int, ysize: int, matrix: Sequence[Sequence[float]]) -> BinaryIO:
    """Write matrix[x][y] as a P5 image, top row first, 1.0 as black.

    Returns the stream.
    """
    stream.write(f"P5\n{xsize}\n{ysize}\n255\n".encode("ascii"))
    stream.write(
        bytes(
            int(255 * abs(1.0 - matrix[x][y])) & 0xFF
            for y in reversed(range(ysize))
            for x in range(xsize)
        )
    )
    return stream