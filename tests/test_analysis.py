import pytest

from sobeledge.analysis import (
    ASCII_RAMP,
    IMAGE_PIXELS,
    IMAGE_WIDTH,
    analyze_edges,
    analyze_raw,
    analyze_raw_main,
    ascii_preview,
    edge_analyzer_main,
    interpret,
    read_raw,
)


def _frame(fill=0):
    return bytearray([fill]) * IMAGE_PIXELS


def test_read_raw_pads_short_file(tmp_path):
    path = tmp_path / "short.raw"
    path.write_bytes(bytes([1, 2, 3, 4, 5]))
    data = read_raw(path)
    assert len(data) == IMAGE_PIXELS
    assert data[:5] == bytes([1, 2, 3, 4, 5])
    assert data[5:] == bytes(IMAGE_PIXELS - 5)


def test_read_raw_truncates_long_file(tmp_path):
    path = tmp_path / "long.raw"
    path.write_bytes(bytes([7]) * (IMAGE_PIXELS + 100))
    assert read_raw(path) == bytes([7]) * IMAGE_PIXELS


def test_read_raw_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_raw(tmp_path / "absent.raw")


def test_analyze_raw_counts():
    data = bytes([0] * 10 + [7] * 30)
    result = analyze_raw(data)
    assert result.size == 40
    assert result.min_value == 0
    assert result.max_value == 7
    assert result.zero_count == 10
    assert result.nonzero_count == 30
    assert result.histogram[7] == 30
    assert sum(result.histogram) == result.size
    assert result.common_values == [(0, 10), (7, 30)]
    assert result.zero_percent + result.nonzero_percent == pytest.approx(100.0)


def test_analyze_raw_first_values_limited():
    data = bytes(range(50))
    result = analyze_raw(data)
    assert result.first_values == tuple(range(20))


def test_analyze_raw_rejects_empty():
    with pytest.raises(ValueError):
        analyze_raw(b"")


def test_analyze_edges_buckets():
    data = _frame()
    data[:100] = bytes([255]) * 100
    data[100:300] = bytes([150]) * 200
    data[300:700] = bytes([60]) * 400
    result = analyze_edges(data)
    assert result.strong_edges == 100
    assert result.medium_edges == 200
    assert result.weak_edges == 400
    assert result.min_value == 0
    assert result.max_value == 255
    assert result.average == pytest.approx(sum(data) / len(data))


def test_analyze_edges_center_sample():
    data = _frame()
    data[315 * IMAGE_WIDTH + 315] = 9
    data[324 * IMAGE_WIDTH + 324] = 11
    result = analyze_edges(data)
    assert len(result.center_sample) == 10
    assert all(len(row) == 10 for row in result.center_sample)
    assert result.center_sample[0][0] == 9
    assert result.center_sample[9][9] == 11


def test_analyze_edges_wrong_size():
    with pytest.raises(ValueError):
        analyze_edges(bytes(10))


def test_interpret_dark_frame():
    messages = interpret(analyze_edges(_frame()))
    assert messages[0] == "❌ PROBLEM: Almost no edges (all dark)"
    assert "✅ Mostly background (expected for edge detection)" in messages
    assert "✅ Good dynamic range (uses full 0-255 scale)" not in messages


def test_interpret_bright_frame():
    messages = interpret(analyze_edges(_frame(255)))
    assert messages == [
        "✅ EXCELLENT: Lots of strong edges detected!",
        "✅ Good dynamic range (uses full 0-255 scale)",
    ]


def test_ascii_preview_dimensions_and_ramp_ends():
    dark = ascii_preview(bytes(_frame()), 8).split("\n")
    assert len(dark) == 640 // 8
    assert all(line == " " * (640 // 8) for line in dark)
    bright = ascii_preview(bytes(_frame(255)), 16).split("\n")
    assert len(bright) == 640 // 16
    assert set("".join(bright)) == {ASCII_RAMP[-1]}


def test_ascii_preview_midtone():
    preview = ascii_preview(bytes(_frame(128)), 64)
    assert set(preview.replace("\n", "")) == {"="}


def test_ascii_preview_rejects_bad_rate():
    with pytest.raises(ValueError):
        ascii_preview(bytes(_frame()), 0)


def test_analyze_raw_main_usage(capsys):
    assert analyze_raw_main([]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_analyze_raw_main_report(tmp_path, capsys):
    path = tmp_path / "frame.raw"
    path.write_bytes(bytes(_frame()))
    assert analyze_raw_main([str(path)]) == 0
    out = capsys.readouterr().out
    assert f"File size: {IMAGE_PIXELS} bytes" in out
    assert "Min value: 0" in out
    assert "  Value 0: " in out


def test_analyze_raw_main_missing(tmp_path, capsys):
    assert analyze_raw_main([str(tmp_path / "nope.raw")]) == 1
    assert "Cannot open file" in capsys.readouterr().err


def test_edge_analyzer_main_with_ascii(tmp_path, capsys):
    path = tmp_path / "edges.raw"
    path.write_bytes(bytes(_frame(255)))
    assert edge_analyzer_main([str(path), "ascii"]) == 0
    out = capsys.readouterr().out
    assert "=== INTERPRETATION ===" in out
    assert "Legend: ' '=no edge, '@'=strong edge" in out


def test_edge_analyzer_main_usage_and_missing(tmp_path, capsys):
    assert edge_analyzer_main([]) == 1
    assert edge_analyzer_main([str(tmp_path / "absent.raw")]) == 1
    assert "Cannot open" in capsys.readouterr().err