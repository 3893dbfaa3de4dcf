import io

from gridslam.memusage import parse_mem_status, print_mem_usage

STATUS = [
    "Name:\tpython\n",
    "VmPeak:\t  9999 kB\n",
    "VmSize:\t  1234 kB\n",
    "VmData:\t   567 kB\n",
    "Threads:\t1\n",
]


def test_parse_picks_values():
    assert parse_mem_status(STATUS) == {"VmSize": "1234", "VmData": "567"}


def test_parse_keeps_order():
    assert list(parse_mem_status(STATUS)) == ["VmSize", "VmData"]


def test_parse_ignores_missing_value():
    assert parse_mem_status(["VmData:"]) == {}


def test_print_from_file(tmp_path):
    path = tmp_path / "status"
    path.write_text("".join(STATUS))
    out = io.StringIO()
    values = print_mem_usage(out, str(path))
    assert out.getvalue() == "#VmSize:\t1234\n#VmData:\t567\n"
    assert values["VmData"] == "567"


def test_print_missing_file_writes_nothing(tmp_path):
    out = io.StringIO()
    values = print_mem_usage(out, str(tmp_path / "absent"))
    assert values == {}
    assert out.getvalue() == ""