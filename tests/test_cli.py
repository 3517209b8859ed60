from __future__ import annotations

import pytest

from csv_formatter import __main__ as cli
from csv_formatter.config import AppConfig, load_config, save_config
from csv_formatter.document import ParseCache


def _csv(data_rows: int) -> str:
    return "id\n" + "".join(f"{i}\n" for i in range(1, data_rows + 1))


def test_bare_file_means_view():
    assert cli._normalize_argv(["data.csv"]) == ["view", "data.csv"]
    assert cli._normalize_argv(["--log-level", "DEBUG", "data.csv"]) == ["--log-level", "DEBUG", "view", "data.csv"]
    assert cli._normalize_argv(["render", "data.csv"]) == ["render", "data.csv"]
    assert cli._normalize_argv([]) == []


def test_render_page_to_stdout(write_csv, capsys):
    path = write_csv(_csv(250))
    assert cli.main(["render", str(path), "--page", "3"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<!DOCTYPE html>")
    assert "Page 3 of 3 (250 rows)" in out
    assert "<td>201</td>" in out


def test_render_fragment_to_file(write_csv, tmp_path):
    path = write_csv(_csv(2))
    target = tmp_path / "frag.html"
    assert cli.main(["render", str(path), "--fragment", "-o", str(target)]) == 0
    text = target.read_text(encoding="utf-8")
    assert text.startswith("<style>")
    assert "<!DOCTYPE" not in text


def test_render_page_out_of_range(write_csv, capsys):
    path = write_csv(_csv(2))
    assert cli.main(["render", str(path), "--page", "2"]) == 1
    assert "1 page(s)" in capsys.readouterr().err


def test_render_missing_file(tmp_path, capsys):
    assert cli.main(["render", str(tmp_path / "missing.csv")]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_export(write_csv, tmp_path, capsys):
    path = write_csv(_csv(150))
    assert cli.main(["export", str(path), str(tmp_path / "site")]) == 0
    printed = capsys.readouterr().out.split()
    assert [p.rsplit("/", 1)[-1] for p in printed] == ["page-1.html", "page-2.html"]


def test_export_bad_page_size(write_csv, tmp_path, capsys):
    path = write_csv(_csv(1))
    assert cli.main(["export", str(path), str(tmp_path / "site"), "--page-size", "0"]) == 1


def test_theme_set_and_show(capsys):
    assert cli.main(["theme", "--set", "gridColor=#010203"]) == 0
    out = capsys.readouterr().out
    assert "gridColor=#010203" in out
    assert load_config().theme.grid_color == "#010203"
    assert cli.main(["theme", "--reset"]) == 0
    assert "gridColor=#444444" in capsys.readouterr().out


def test_theme_bad_assignment(capsys):
    assert cli.main(["theme", "--set", "gridColor"]) == 1
    assert cli.main(["theme", "--set", "nope=red"]) == 1


def test_no_command_prints_help(capsys):
    assert cli.main(["--log-level", "INFO"]) == 2
    assert "usage" in capsys.readouterr().out


def test_missing_argument_exits():
    with pytest.raises(SystemExit):
        cli.main(["render"])


def test_render_output_write_failure(write_csv, tmp_path, capsys):
    path = write_csv(_csv(2))
    assert cli.main(["render", str(path), "-o", str(tmp_path / "no" / "such" / "x.html")]) == 1
    assert "Cannot write" in capsys.readouterr().err


def test_export_into_regular_file(write_csv, tmp_path, capsys):
    path = write_csv(_csv(2))
    blocker = tmp_path / "site"
    blocker.write_text("not a directory", encoding="utf-8")
    assert cli.main(["export", str(path), str(blocker)]) == 1
    assert "Cannot write" in capsys.readouterr().err


@pytest.fixture
def opened_sessions(monkeypatch):
    from csv_formatter.app import CsvViewerApp

    sessions = []
    monkeypatch.setattr(CsvViewerApp, "run", lambda self: sessions.append(self.session))
    return sessions


def test_view_uses_parse_cache(write_csv, opened_sessions):
    path = write_csv(_csv(2))
    assert cli.main([str(path)]) == 0
    assert opened_sessions[0].path == path
    assert isinstance(opened_sessions[0]._cache, ParseCache)


def test_no_file_reopens_last_file(write_csv, opened_sessions):
    path = write_csv(_csv(2))
    save_config(AppConfig(last_file=str(path)))
    assert cli.main([]) == 0
    assert cli.main(["view"]) == 0
    assert [s.path for s in opened_sessions] == [path, path]


def test_view_without_file_or_history(opened_sessions, capsys):
    assert cli.main(["view"]) == 1
    assert "previously opened" in capsys.readouterr().err
    assert opened_sessions == []
