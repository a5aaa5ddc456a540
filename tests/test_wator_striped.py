import re
from unittest import mock

import pytest

from oceanlab.wator_striped import default_workers, main

_END_RE = re.compile(r"Wa-tor ends\. Niter=(\d+), NFishes= (-?\d+), NSharks=(-?\d+)\.")

SMALL = ["-r", "6", "-c", "6", "-nf", "5", "-ns", "2", "-ni", "3"]


def test_default_workers_positive():
    assert default_workers() >= 1


def test_default_workers_uses_cpu_count():
    with mock.patch("os.cpu_count", return_value=4):
        assert default_workers() == 4


def test_default_workers_falls_back_to_one():
    with mock.patch("os.cpu_count", return_value=None):
        assert default_workers() == 1


def test_help_prints_usage(capsys):
    assert main(["-h"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Options are:")
    assert "-ffmpeg" in out


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-r", "5"], "Rows must be multiple of 3"),
        (["-c", "7"], "Col must be multiple of 3"),
        (["-nf", "0"], "NInitFishes<=0"),
        (["-ni", "0"], "MaxNIter<=0"),
    ],
)
def test_bad_settings_fail(capsys, argv, message):
    assert main(argv) == 1
    assert message in capsys.readouterr().out


def test_small_run_reports_result(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with mock.patch("os.cpu_count", return_value=2):
        assert main(SMALL) == 0
    out = capsys.readouterr().out
    assert "Parallel with 2 threads" in out
    match = _END_RE.search(out)
    assert match is not None
    niter, fishes, sharks = (int(g) for g in match.groups())
    assert 1 <= niter <= 3
    assert 0 <= fishes <= 36
    assert 0 <= sharks <= 36
    assert fishes + sharks <= 36


def test_data_file_records_iterations(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with mock.patch("subprocess.run") as run:
        assert main(SMALL + ["-d"]) == 0
    assert run.called
    out = capsys.readouterr().out
    niter = int(_END_RE.search(out).group(1))
    lines = (tmp_path / "data.txt").read_text().splitlines()
    assert lines[0] == "0\t5\t2"
    assert len(lines) == niter + 1
    assert [int(line.split("\t")[0]) for line in lines] == list(range(niter + 1))
    last = lines[-1].split("\t")
    match = _END_RE.search(out)
    assert last[1] == match.group(2)
    assert last[2] == match.group(3)