from __future__ import annotations

import pytest
import requests
from PIL import Image

import main
from csv2img import sources


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b,c\n1,2,3\n4,5,6\n", encoding="utf-8")
    return path


def test_main_writes_png(tmp_path, csv_file, capsys):
    out = tmp_path / "out" / "table.png"
    assert main.main([str(csv_file), str(out)]) == 0
    assert out.read_bytes().startswith(b"\x89PNG")
    printed = capsys.readouterr().out
    assert "[CSV2IMG]" in printed
    assert "rows=2" in printed


def test_main_uses_default_out_path(tmp_path, csv_file, monkeypatch):
    target = tmp_path / "default.png"
    monkeypatch.setattr(main, "OUT_PATH", str(target))
    assert main.main([str(csv_file)]) == 0
    assert target.exists()


def test_main_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main([])
    assert exc.value.code == 2
    assert "usage" in capsys.readouterr().err


def test_main_rejects_extra_arguments(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(["a.csv", "b.png", "c"])
    assert exc.value.code == 2


def test_main_reports_missing_file(tmp_path, capsys):
    assert main.main([str(tmp_path / "missing.csv"), str(tmp_path / "x.png")]) == 1
    assert "=== csv2img ERROR ===" in capsys.readouterr().out


def test_main_fetches_urls(tmp_path, monkeypatch):
    class Resp:
        content = b"a\n1"

        def raise_for_status(self):
            return None

    monkeypatch.setattr(sources.requests, "get", lambda url, timeout=None: Resp())
    out = tmp_path / "web.png"
    assert main.main(["https://example.com/data.csv", str(out)]) == 0
    assert out.exists()


def test_main_reports_http_errors(tmp_path, monkeypatch, capsys):
    def fail(url, timeout=None):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(sources.requests, "get", fail)
    assert main.main(["https://example.com/data.csv", str(tmp_path / "x.png")]) == 1
    assert "offline" in capsys.readouterr().out


def test_main_honours_separator_and_max_length(tmp_path, monkeypatch, capsys):
    path = tmp_path / "dots.csv"
    path.write_text("a.b\n1.22222", encoding="utf-8")
    monkeypatch.setattr(main, "SEPARATOR", ".")
    monkeypatch.setattr(main, "MAX_LENGTH", 2)
    assert main.main([str(path), str(tmp_path / "dots.png")]) == 0
    out = capsys.readouterr().out
    assert "[WARN]" in out
    assert "columns=2" in out


def test_main_rejects_negative_max_length(tmp_path, csv_file, monkeypatch, capsys):
    monkeypatch.setattr(main, "MAX_LENGTH", -1)
    out = tmp_path / "neg.png"
    assert main.main([str(csv_file), str(out)]) == 2
    assert "=== csv2img ERROR ===" in capsys.readouterr().out
    assert not out.exists()


def test_main_renders_once_and_prints_image_size(tmp_path, csv_file, monkeypatch, capsys):
    calls = []
    real_render = main.render

    def counting_render(table, font_size=None, style=None):
        calls.append(font_size)
        return real_render(table, font_size=font_size, style=style)

    monkeypatch.setattr(main, "render", counting_render)
    out = tmp_path / "once.png"
    assert main.main([str(csv_file), str(out)]) == 0
    assert len(calls) == 1
    with Image.open(out) as img:
        width, height = img.size
    assert f"size={width}x{height}" in capsys.readouterr().out
