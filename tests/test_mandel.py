from unittest import mock

import pytest

from oceanlab.mandel import (
    MandelSettings,
    UsageError,
    convert_command,
    escape_counts,
    main,
    niter_to_gray,
    niter_to_rgb,
    parse_settings,
    render_gray,
    render_rgb,
)

BASE = ["-r", "6", "-c", "8", "-mx", "-2", "-my", "-1.5", "-sx", "3", "-sy", "3", "-mi", "20"]


def test_palette_first_entry():
    assert niter_to_rgb(0) == (66, 30, 15)


def test_palette_wraps_every_16():
    for n in range(16):
        assert niter_to_rgb(n) == niter_to_rgb(n + 16)


def test_gray_extremes():
    assert niter_to_gray(0, 50) == 0
    assert niter_to_gray(50, 50) == 255


def test_gray_is_a_byte():
    assert all(0 <= niter_to_gray(n, 7) <= 255 for n in range(9))


def test_origin_never_escapes():
    counts = escape_counts(4, 4, 0.0, 0.0, 1.0, 1.0, 30)
    assert counts[0][0] == 31


def test_counts_shape_and_bounds():
    counts = escape_counts(5, 7, -2.0, -1.5, 3.0, 3.0, 25)
    assert len(counts) == 5
    assert all(len(row) == 7 for row in counts)
    assert all(1 <= n <= 26 for row in counts for n in row)


def test_far_point_escapes_quickly():
    counts = escape_counts(4, 4, 10.0, 10.0, 1.0, 1.0, 30)
    assert counts[0][0] == 1


def test_render_lengths():
    counts = escape_counts(4, 5, -2.0, -1.5, 3.0, 3.0, 10)
    assert len(render_gray(counts, 10)) == 20
    assert len(render_rgb(counts)) == 60


def test_render_rgb_matches_palette():
    data = render_rgb([[0, 1]])
    assert data[:3] == bytes(niter_to_rgb(0))
    assert data[3:] == bytes(niter_to_rgb(1))


def test_parse_settings_defaults():
    settings = parse_settings(BASE)
    assert settings.rows == 6
    assert settings.cols == 8
    assert settings.min_x == -2.0
    assert settings.min_y == -1.5
    assert settings.max_iter == 20
    assert settings.output == "Image"
    assert settings.gray is False


def test_parse_settings_output_and_gray():
    settings = parse_settings(BASE + ["-o", "pic", "-g"])
    assert settings.output == "pic"
    assert settings.gray is True


@pytest.mark.parametrize("flag", ["-r", "-c", "-mx", "-my", "-sx", "-sy", "-mi"])
def test_missing_parameter(flag):
    argv = list(BASE)
    index = argv.index(flag)
    del argv[index : index + 2]
    with pytest.raises(UsageError) as info:
        parse_settings(argv)
    assert info.value.show_usage is True
    assert str(info.value) == f"Parameter {flag} is neccesary."


@pytest.mark.parametrize(
    "flag, value, message",
    [("-r", "3", "Rows<=3"), ("-c", "2", "Col<=3"), ("-mi", "0", "Max. number of Iterations < 1")],
)
def test_invalid_values(flag, value, message):
    argv = list(BASE)
    argv[argv.index(flag) + 1] = value
    with pytest.raises(UsageError) as info:
        parse_settings(argv)
    assert str(info.value) == message
    assert info.value.show_usage is False


def test_convert_command_formats():
    colour = MandelSettings(6, 8, 0.0, 0.0, 1.0, 1.0, 5, output="pic")
    gray = MandelSettings(6, 8, 0.0, 0.0, 1.0, 1.0, 5, output="pic", gray=True)
    assert convert_command(colour) == "rawtoppm 8 6 pic | pnmtopng > pic.png"
    assert convert_command(gray) == "rawtopgm 8 6 pic | pnmtopng > pic.png"


def test_main_writes_rgb_file(tmp_path):
    out = tmp_path / "img"
    with mock.patch("oceanlab.mandel.subprocess.run") as run:
        code = main(BASE + ["-o", str(out)])
    assert code == 0
    assert out.stat().st_size == 6 * 8 * 3
    assert run.call_args.args[0].startswith("rawtoppm 8 6 ")


def test_main_writes_gray_file(tmp_path):
    out = tmp_path / "img"
    with mock.patch("oceanlab.mandel.subprocess.run") as run:
        code = main(BASE + ["-o", str(out), "-g"])
    assert code == 0
    assert out.stat().st_size == 6 * 8
    assert run.call_args.args[0].startswith("rawtopgm")


def test_main_invalid_rows_returns_one(capsys):
    argv = list(BASE)
    argv[1] = "2"
    assert main(argv) == 1
    assert "Rows<=3" in capsys.readouterr().out


def test_main_help(capsys):
    assert main(["-h"]) == 0
    assert "Options are:" in capsys.readouterr().out