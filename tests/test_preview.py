from __future__ import annotations

import os

import pytest

from csv_formatter.errors import DocumentError
from csv_formatter.preview import PreviewSession
from csv_formatter.theme import ThemeConfig


def _csv(data_rows: int) -> str:
    return "id,name\n" + "".join(f"{i},n{i}\n" for i in range(1, data_rows + 1))


def _touch_forward(path):
    st = path.stat()
    os.utime(path, ns=(st.st_atime_ns, st.st_mtime_ns + 5_000_000_000))


def test_reload_renders_first_page(write_csv):
    session = PreviewSession(write_csv(_csv(250)), ThemeConfig)
    rendered = session.reload()
    assert rendered.page.summary == "Page 1 of 3 (250 rows)"
    assert session.total_pages == 3


def test_navigation_is_clamped(write_csv):
    session = PreviewSession(write_csv(_csv(250)), ThemeConfig)
    session.reload()
    assert session.prev_page().page.page_index == 0
    session.next_page()
    session.next_page()
    rendered = session.next_page()
    assert rendered.page.page_index == 2
    assert rendered.page.can_go_next is False
    assert session.first_page().page.page_index == 0
    assert session.last_page().page.page_index == 2
    assert session.go_to(99).page.page_index == 2


def test_changed_file_resets_page(write_csv):
    path = write_csv(_csv(250))
    session = PreviewSession(path, ThemeConfig)
    session.reload()
    session.last_page()
    path.write_text(_csv(260), encoding="utf-8")
    _touch_forward(path)
    assert session.refresh_if_changed() is True
    assert session.page_index == 0
    assert session.current().page.total_rows == 260


def test_same_content_keeps_page(write_csv):
    path = write_csv(_csv(250))
    session = PreviewSession(path, ThemeConfig)
    session.reload()
    session.next_page()
    _touch_forward(path)
    assert session.refresh_if_changed() is True
    assert session.page_index == 1


def test_unchanged_file_is_not_reread(write_csv):
    session = PreviewSession(write_csv(_csv(3)), ThemeConfig)
    session.reload()
    assert session.refresh_if_changed() is False


def test_theme_is_read_on_every_render(write_csv):
    themes = [ThemeConfig()]
    session = PreviewSession(write_csv(_csv(3)), lambda: themes[-1])
    assert "#333333" in session.reload().markup
    themes.append(ThemeConfig(header_background="orange"))
    assert "background-color: orange" in session.current().markup


def test_rows_for_display_fit_the_header(write_csv):
    session = PreviewSession(write_csv("a,b,c\n1\n1,2,3,4\n"), ThemeConfig)
    session.reload()
    header, rows = session.rows_for_display()
    assert header == ["a", "b", "c"]
    assert rows == [["1", "", ""], ["1", "2", "3"]]


def test_empty_file(write_csv):
    session = PreviewSession(write_csv(""), ThemeConfig)
    rendered = session.reload()
    assert not rendered.has_data
    assert session.rows_for_display() == ([], [])
    assert session.total_pages == 1


def test_missing_file_surfaces_error(tmp_path):
    session = PreviewSession(tmp_path / "nope.csv", ThemeConfig)
    with pytest.raises(DocumentError):
        session.reload()


def test_invalid_page_size(tmp_path):
    with pytest.raises(ValueError):
        PreviewSession(tmp_path / "a.csv", ThemeConfig, page_size=0)


def test_export_html(write_csv, tmp_path):
    session = PreviewSession(write_csv(_csv(3)), ThemeConfig)
    session.reload()
    out = session.export_html(tmp_path / "out" / "page.html")
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<!DOCTYPE html>")
    assert "<td>n3</td>" in text


def test_export_all_links_pages(write_csv, tmp_path):
    session = PreviewSession(write_csv(_csv(250)), ThemeConfig)
    session.reload()
    paths = session.export_all(tmp_path / "pages")
    assert [p.name for p in paths] == ["page-1.html", "page-2.html", "page-3.html"]
    middle = paths[1].read_text(encoding="utf-8")
    assert 'href="page-1.html"' in middle
    assert 'href="page-3.html"' in middle
    assert '<span class="next disabled">Next</span>' in paths[2].read_text(encoding="utf-8")


def test_failed_read_is_retried_on_next_poll(write_csv):
    path = write_csv(_csv(3))
    session = PreviewSession(path, ThemeConfig)
    session.reload()
    path.write_bytes(b"id\n\xff\xfe\xfa\n")
    _touch_forward(path)
    with pytest.raises(DocumentError):
        session.refresh_if_changed()
    with pytest.raises(DocumentError):
        session.refresh_if_changed()
    path.write_bytes(b"id\n1\n2\n")
    _touch_forward(path)
    assert session.refresh_if_changed() is True
    assert session.rows_for_display() == (["id"], [["1"], ["2"]])
