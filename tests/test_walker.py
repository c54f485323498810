# tests/test_walker.py
import logging
from pathlib import Path

import pytest

from minipolar.core.banner import render_banner
from minipolar.core.ignore import load_ignore_spec
from minipolar.core.walker import TreeWalker, detect_kind
from minipolar.minifiers.base import Minifiers, MinifyError
from minipolar.minifiers.engine import get_minifiers
from minipolar.models import FileKind, TaskStatus


# --- Fixtures ---

@pytest.fixture
def site(tmp_path):
    """
    src/
      app.css, app.js, index.html, readme.txt
      views/page.ejs
      img/logo.bin
    """
    src = tmp_path / "src"
    (src / "views").mkdir(parents=True)
    (src / "img").mkdir()

    (src / "app.css").write_text("body { color: red; ; }\n", encoding="utf-8")
    (src / "app.js").write_text("function add(a, b) {\n  return a + b;\n}\n", encoding="utf-8")
    (src / "index.html").write_text("<html>\n<body>\n  <p>Hi</p>\n</body>\n</html>\n", encoding="utf-8")
    (src / "readme.txt").write_text("Read me.\n  Keep   spacing.\n", encoding="utf-8")
    (src / "views" / "page.ejs").write_text("<ul>\n  <li><%= item %></li>\n</ul>\n", encoding="utf-8")
    (src / "img" / "logo.bin").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff")
    return tmp_path


def recording_minifiers(calls, fail_js=False):
    def js(text, options):
        calls.append(("js", text, options))
        if fail_js:
            raise MinifyError("Unexpected token: punc (;)")
        return text.strip()

    def css(text, options):
        calls.append(("css", text, options))
        return text.strip()

    def html(text, options):
        calls.append(("html", text, options))
        return text.strip()

    return Minifiers(js=js, css=css, html=html)


def output_paths(root: Path):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


# --- Dispatch ---

@pytest.mark.parametrize("name, kind", [
    ("a.js", FileKind.JS),
    ("A.JS", FileKind.JS),
    ("a.css", FileKind.CSS),
    ("a.html", FileKind.HTML),
    ("a.ejs", FileKind.HTML),
    ("a.htm", FileKind.OTHER),
    ("a.min.js", FileKind.JS),
    ("Makefile", FileKind.OTHER),
])
def test_detect_kind(name, kind):
    assert detect_kind(Path(name)) is kind


def test_output_tree_mirrors_input(site):
    walker = TreeWalker(site / "src", site / "dist", get_minifiers("python"))
    report = walker.run()

    assert not report.failed
    assert output_paths(site / "dist") == output_paths(site / "src")


def test_css_end_to_end(site):
    TreeWalker(site / "src", site / "dist", get_minifiers("python")).run()

    out = (site / "dist" / "app.css").read_text(encoding="utf-8")
    banner = render_banner(FileKind.CSS)
    assert out.startswith(banner)
    body = out[len(banner):]
    assert "color:red" in body
    assert ";;" not in body
    assert " " not in body


def test_unrecognized_files_are_copied_verbatim(site):
    TreeWalker(site / "src", site / "dist", get_minifiers("python")).run()

    for rel in ("readme.txt", "img/logo.bin"):
        assert (site / "dist" / rel).read_bytes() == (site / "src" / rel).read_bytes()


def test_html_and_ejs_get_html_banner(site):
    TreeWalker(site / "src", site / "dist", get_minifiers("python")).run()

    page = (site / "dist" / "views" / "page.ejs").read_text(encoding="utf-8")
    assert page.startswith(render_banner(FileKind.HTML))
    assert "<%= item %>" in page


def test_js_options_follow_classifier(site):
    (site / "src" / "app.js").write_text("const s = `code sample`;\n", encoding="utf-8")
    calls = []
    TreeWalker(site / "src", site / "dist", recording_minifiers(calls)).run()

    js_calls = [c for c in calls if c[0] == "js"]
    assert len(js_calls) == 1
    options = js_calls[0][2]
    assert options.beautify is True
    assert options.mangle_toplevel is False


def test_failed_js_leaves_no_output_and_sibling_css_is_processed(site, caplog):
    calls = []
    report = TreeWalker(site / "src", site / "dist", recording_minifiers(calls, fail_js=True)).run()

    assert not (site / "dist" / "app.js").exists()
    assert (site / "dist" / "app.css").exists()
    assert "Error minifying JavaScript app.js" in caplog.text

    failed = [o for o in report.outcomes if o.status is TaskStatus.FAILED]
    assert [o.task.rel_path for o in failed] == ["app.js"]
    assert "Unexpected token" in failed[0].error
    assert report.exit_code == 1


def test_undecodable_source_fails_only_that_file(site):
    (site / "src" / "bad.css").write_bytes(b"a{content:'\xff\xfe'}")
    report = TreeWalker(site / "src", site / "dist", recording_minifiers([])).run()

    assert not (site / "dist" / "bad.css").exists()
    assert (site / "dist" / "app.css").exists()
    assert report.count(TaskStatus.FAILED) == 1


def test_directory_failure_skips_only_that_subtree(site):
    dist = site / "dist"
    dist.mkdir()
    # A file where the mirrored directory should go makes mkdir fail.
    (dist / "views").write_text("in the way", encoding="utf-8")

    report = TreeWalker(site / "src", dist, recording_minifiers([])).run()

    assert [rel for rel, _ in report.directory_errors] == ["views"]
    assert (dist / "img" / "logo.bin").exists()
    assert (dist / "app.css").exists()
    assert report.failed


def test_reprocessing_output_does_not_stack_banners(site):
    minifiers = get_minifiers("python")
    TreeWalker(site / "src", site / "dist", minifiers).run()
    TreeWalker(site / "dist", site / "dist2", minifiers).run()

    first = (site / "dist" / "app.css").read_text(encoding="utf-8")
    second = (site / "dist2" / "app.css").read_text(encoding="utf-8")
    assert second == first
    assert second.count(render_banner(FileKind.CSS)) == 1


def test_nested_output_root_is_not_walked(site):
    src = site / "src"
    TreeWalker(src, src / "dist", recording_minifiers([])).run()
    TreeWalker(src, src / "dist", recording_minifiers([])).run()

    assert not (src / "dist" / "dist").exists()


def test_ignore_rules_prune_files_and_directories(site):
    src = site / "src"
    (src / ".minifyignore").write_text("img/\n*.txt\n", encoding="utf-8")
    spec = load_ignore_spec(src / ".minifyignore")

    TreeWalker(src, site / "dist", recording_minifiers([]), ignore_spec=spec).run()

    assert output_paths(site / "dist") == ["app.css", "app.js", "index.html", "views/page.ejs"]


def test_entries_are_processed_in_sorted_order(site):
    calls = []
    report = TreeWalker(site / "src", site / "dist", recording_minifiers(calls)).run()

    assert [o.task.rel_path for o in report.outcomes] == [
        "app.css",
        "app.js",
        "index.html",
        "readme.txt",
        "img/logo.bin",
        "views/page.ejs",
    ]


def test_unexpected_handler_error_fails_only_that_file(site, caplog):
    def exploding_html(text, options):
        raise RuntimeError("renderer crashed")

    minifiers = recording_minifiers([])
    minifiers = Minifiers(js=minifiers.js, css=minifiers.css, html=exploding_html)
    report = TreeWalker(site / "src", site / "dist", minifiers).run()

    failed = [o for o in report.outcomes if o.status is TaskStatus.FAILED]
    assert sorted(o.task.rel_path for o in failed) == ["index.html", "views/page.ejs"]
    assert "RuntimeError" in failed[0].error
    assert "Unexpected error processing index.html" in caplog.text
    assert not (site / "dist" / "index.html").exists()
    assert (site / "dist" / "readme.txt").exists()
    assert (site / "dist" / "app.css").exists()
    assert len(report.outcomes) == 6


def test_python_engine_rejects_unparseable_js(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "bad.js").write_text("function ( {{ var = ;", encoding="utf-8")
    (src / "ok.css").write_text("a { color: blue; }", encoding="utf-8")

    report = TreeWalker(src, tmp_path / "dist", get_minifiers("python")).run()

    statuses = {o.task.rel_path: o.status for o in report.outcomes}
    assert statuses == {"bad.js": TaskStatus.FAILED, "ok.css": TaskStatus.MINIFIED}
    assert not (tmp_path / "dist" / "bad.js").exists()
    assert (tmp_path / "dist" / "ok.css").exists()


def test_deeply_nested_structured_data_does_not_stop_the_walk(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    nested = "[" * 100000 + "]" * 100000
    (src / "a.html").write_text(f'<script type="application/ld+json">{nested}</script>', encoding="utf-8")
    (src / "z.css").write_text("a { color: blue; }", encoding="utf-8")

    report = TreeWalker(src, tmp_path / "dist", get_minifiers("python")).run()

    assert [o.task.rel_path for o in report.outcomes] == ["a.html", "z.css"]
    assert (tmp_path / "dist" / "z.css").exists()
