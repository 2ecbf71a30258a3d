import io
import pytest

from codesize.features.reporting.data.formatter import (
    extension_label,
    format_human_readable,
    label_width,
    render_largest,
    render_totals,
)
from codesize.features.reporting.service.reporter import Reporter


@pytest.mark.parametrize("value, base, expected", [
    (9999, None, "9999"),
    (123456789, None, "123456789"),
    (0, 1000, "0"),
    (9999, 1000, "9999"),
    (10000, 1000, "10K"),
    (10_000_000, 1000, "10M"),
    (12_345_678_901, 1000, "12G"),
    (10_000_000_000, 1000, "10G"),
    (10_000_000_000_000, 1000, "10T"),
    (10_000_000_000_000_000, 1000, "10000T"),
    # Stops at T even though the value is still large
    (10 ** 20, 1000, "100000000T"),
    (10240, 1024, "10K"),
    (10239, 1024, "9K"),
    (20 * 1024 ** 3, 1024, "20G"),
    (20 * 1024 ** 2, 1024, "20M"),
    (9 * 1024 ** 2, 1024, "9216K"),
])
def test_format_human_readable(value, base, expected):
    assert format_human_readable(value, base) == expected

def test_extension_label():
    assert extension_label("py") == ".py"
    assert extension_label("") == ""

def test_label_width():
    assert label_width(["py", "toml", ""]) == 5
    assert label_width([""]) == 0
    assert label_width([]) == 0

def test_render_totals_orders_by_value_then_extension():
    lines = render_totals({"c": 5, "b": 5, "a": 1, "": 9})
    assert lines == [
        "   9",
        ".b 5",
        ".c 5",
        ".a 1",
    ]

def test_render_totals_only_empty_extension():
    assert render_totals({"": 3}) == [" 3"]

def test_render_totals_empty():
    assert render_totals({}) == []

def test_render_largest_sorts_entries():
    lines = render_largest({"py": [(1, "z.py"), (5, "b.py"), (5, "a.py")]})
    assert lines == ["py", "  5 a.py", "  5 b.py", "  1 z.py"]

def test_reporter_writes_to_injected_sink():
    sink = io.StringIO()
    Reporter(sink).report_totals({"py": 20000}, base=1000)
    assert sink.getvalue() == ".py 20K\n"

def test_reporter_defaults_to_stdout(capsys):
    Reporter().report_totals({"go": 1})
    assert capsys.readouterr().out == ".go 1\n"

def test_render_largest_escapes_undecodable_paths():
    lines = render_largest({"": [(3, "src/bad.\udcff")]})
    assert lines == ["", "  3 src/bad.\\xff"]

def test_reporter_writes_undecodable_paths_to_strict_utf8_stream():
    """
    A name that is not valid UTF-8 on disk must not break a strict UTF-8 stdout.
    """
    raw = io.BytesIO()
    sink = io.TextIOWrapper(raw, encoding="utf-8", errors="strict")

    Reporter(sink).report_largest({"": [(3, "bad.\udcff")], "py": [(1, "ok.py")]})

    assert raw.getvalue() == b"\n  3 bad.\\xff\npy\n  1 ok.py\n"

class RecordingSink(io.StringIO):
    def __init__(self):
        super().__init__()
        self.writes = 0

    def write(self, text):
        self.writes += 1
        return super().write(text)

def test_reporter_writes_report_in_one_piece():
    sink = RecordingSink()
    Reporter(sink).report_totals({"py": 3, "rs": 2, "": 1})

    assert sink.writes == 1
    assert sink.getvalue() == ".py 3\n.rs 2\n    1\n"

def test_reporter_writes_nothing_for_empty_report():
    sink = RecordingSink()
    Reporter(sink).report_totals({})
    assert sink.writes == 0
