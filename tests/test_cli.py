# tests/test_cli.py
import pytest

from minipolar import cli
from minipolar.minifiers.base import Minifiers, MinifyError


@pytest.fixture
def project(tmp_path):
    src = tmp_path / "src"
    (src / "css").mkdir(parents=True)
    (src / "css" / "site.css").write_text("a { color: blue; }\n", encoding="utf-8")
    (src / "notes.md").write_text("# Notes\n", encoding="utf-8")
    (src / "main.js").write_text("var x = 1;\n", encoding="utf-8")
    return tmp_path


def test_end_to_end_run(project, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(project / "src"), str(project / "dist"), "--engine", "python", "--tree"])

    assert exc.value.code == 0
    assert (project / "dist" / "css" / "site.css").exists()
    assert (project / "dist" / "notes.md").read_text(encoding="utf-8") == "# Notes\n"

    out = capsys.readouterr().out
    assert "site.css [min]" in out
    assert "notes.md [copy]" in out
    assert "Minification complete!" in out


def test_failures_give_nonzero_exit(project, monkeypatch, capsys):
    def failing_js(text, options):
        raise MinifyError("SyntaxError")

    fake = Minifiers(js=failing_js, css=lambda text, options: text, html=lambda text, options: text)
    monkeypatch.setattr(cli, "get_minifiers", lambda engine, timeout=None: fake)

    with pytest.raises(SystemExit) as exc:
        cli.main([str(project / "src"), str(project / "dist")])

    assert exc.value.code == 1
    assert not (project / "dist" / "main.js").exists()
    assert (project / "dist" / "css" / "site.css").exists()
    assert "finished with errors" in capsys.readouterr().out


def test_exclude_flag(project):
    with pytest.raises(SystemExit):
        cli.main([str(project / "src"), str(project / "dist"), "--engine", "python", "--exclude", "*.md", "-q"])

    assert not (project / "dist" / "notes.md").exists()
    assert (project / "dist" / "main.js").exists()


def test_invalid_input_directory(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(tmp_path / "missing"), str(tmp_path / "dist")])

    assert exc.value.code == 1
    assert "Invalid directory" in capsys.readouterr().err


def test_output_must_differ_from_input(project):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(project / "src"), str(project / "src")])
    assert exc.value.code == 1


def test_defaults_are_src_and_dist():
    args = cli.create_arg_parser().parse_args([])
    assert (args.input_dir, args.output_dir, args.engine) == ("src", "dist", "auto")
