import os
import pytest

from codesize.cli import EXIT_OK, EXIT_SCAN_FAILED, build_parser, main, request_from_args
from codesize.core.common.enums import CollectorKind, MetricKind, WalkStrategy


def test_default_run_counts_lines(source_tree, capsys):
    assert main([str(source_tree)]) == EXIT_OK
    assert capsys.readouterr().out == ".rs  4\n.py  3\n.txt 3\n     0\n"

def test_size_flag_with_human_readable(tmp_path, capsys):
    (tmp_path / "blob.bin").write_bytes(b"\0" * 30720)

    assert main(["-s", "-h", str(tmp_path)]) == EXIT_OK
    assert capsys.readouterr().out == ".bin 30K\n"

def test_count_with_extension_filter(source_tree, capsys):
    assert main(["-c", "--ext", "rs", "--ext", ".txt", str(source_tree)]) == EXIT_OK
    assert capsys.readouterr().out == ".rs  2\n.txt 1\n"

def test_largest_flag(source_tree, capsys):
    assert main(["-l", "1", "--ext", "py", str(source_tree)]) == EXIT_OK
    assert capsys.readouterr().out == f"py\n  2 {source_tree / 'main.py'}\n"

@pytest.mark.parametrize("extra", [["--strategy", "metadata"], ["--async"]])
def test_alternative_modes_match_default(source_tree, capsys, extra):
    main([str(source_tree)])
    baseline = capsys.readouterr().out

    assert main([*extra, str(source_tree)]) == EXIT_OK
    assert capsys.readouterr().out == baseline

def test_missing_directory_exits_with_failure(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == EXIT_SCAN_FAILED
    assert capsys.readouterr().out == ""

def test_usage_errors_exit_2(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["-s", "-c"])
    assert exc_info.value.code == 2

    with pytest.raises(SystemExit) as exc_info:
        main(["-l", "-3"])
    assert exc_info.value.code == 2

def test_request_from_args():
    args = build_parser().parse_args(["-s", "-l", "3", "--git", "--ext", ".py", "--strategy", "metadata", "src"])
    request = request_from_args(args)

    assert request.metric is MetricKind.BYTES
    assert request.collector is CollectorKind.TOP_K
    assert request.largest == 3
    assert request.use_git
    assert request.extensions == frozenset({"py"})
    assert request.strategy is WalkStrategy.METADATA
    assert str(request.root_path) == "src"

def test_defaults():
    request = request_from_args(build_parser().parse_args([]))

    assert request.metric is MetricKind.LINES
    assert request.collector is CollectorKind.SUM
    assert request.strategy is WalkStrategy.DESCRIPTOR
    assert not request.concurrent
    assert str(request.root_path) == "."

@pytest.mark.parametrize("extra", [[], ["-l", "1"]])
def test_undecodable_file_name_prints_full_report(tmp_path, capsys, extra):
    (tmp_path / "ok.py").write_bytes(b"x\n")
    with open(os.path.join(os.fsencode(tmp_path), b"bad.\xff"), "wb") as f:
        f.write(b"1\n2\n")

    assert main([*extra, str(tmp_path)]) == EXIT_OK

    out = capsys.readouterr().out
    assert out.encode("utf-8")
    if extra:
        assert out == f"\n  2 {tmp_path}/bad.\\xff\npy\n  1 {tmp_path / 'ok.py'}\n"
    else:
        assert out == "    2\n.py 1\n"
