import io

from gridslam.pgm import write_pgm


def test_header_and_size():
    out = io.BytesIO()
    matrix = [[0.5, 0.5, 0.5], [0.5, 0.5, 0.5]]
    write_pgm(out, 2, 3, matrix)
    data = out.getvalue()
    header = b"P5\n2\n3\n255\n"
    assert data.startswith(header)
    assert len(data) == len(header) + 6


def test_pixels_run_top_row_first():
    out = io.BytesIO()
    matrix = [[1.0, 0.0], [0.0, 1.0]]
    write_pgm(out, 2, 2, matrix)
    pixels = out.getvalue()[len(b"P5\n2\n2\n255\n"):]
    assert list(pixels) == [255, 0, 0, 255]


def test_returns_stream():
    out = io.BytesIO()
    assert write_pgm(out, 1, 1, [[1.0]]) is out
    assert out.getvalue().endswith(b"\x00")