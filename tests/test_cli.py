"""Tests for the poptags command line."""

import logging

from typer.testing import CliRunner

from poptags._version import __version__
from poptags.cli.main import typer_app
from poptags.cli.utils import setup_logging

runner = CliRunner()


def make_site(root):
    templates = root / "templates"
    (templates / "layouts").mkdir(parents=True)
    (templates / "layouts" / "default.html").write_text("<html><pop:region name='main' /></html>")
    (templates / "page.html").write_text(
        "<pop:layout name='default' /><pop:block region='main'><h1><pop:title /></h1></pop:block>"
    )
    (templates / "broken.html").write_text("<pop:title>")
    content = root / "content.yaml"
    content.write_text("title: Hello\n")
    return templates, content


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_to_stdout(tmp_path):
    templates, content = make_site(tmp_path)
    result = runner.invoke(typer_app, ["render", "page", "-t", str(templates), "-c", str(content)])
    assert result.exit_code == 0, result.output
    assert result.output == "<html><h1>Hello</h1></html>"


def test_render_to_file(tmp_path):
    templates, content = make_site(tmp_path)
    out = tmp_path / "site" / "index.html"
    result = runner.invoke(
        typer_app,
        ["render", "page", "-t", str(templates), "-c", str(content), "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert out.read_text() == "<html><h1>Hello</h1></html>"


def test_render_with_extensions(tmp_path):
    templates, _ = make_site(tmp_path)
    (templates / "about.html").write_text("<pop:site:name />")
    extensions = tmp_path / "extensions"
    extensions.mkdir()
    (extensions / "site.yaml").write_text("name: Webpop\n")
    result = runner.invoke(
        typer_app, ["render", "about", "-t", str(templates), "-e", str(extensions)]
    )
    assert result.exit_code == 0, result.output
    assert result.output == "Webpop"


def test_render_missing_template(tmp_path):
    templates, _ = make_site(tmp_path)
    result = runner.invoke(typer_app, ["render", "nope", "-t", str(templates)])
    assert result.exit_code == 1
    assert "Error: Template not found: nope" in result.output


def test_render_compile_error(tmp_path):
    templates, _ = make_site(tmp_path)
    result = runner.invoke(typer_app, ["render", "broken", "-t", str(templates)])
    assert result.exit_code == 1
    assert "Unclosed tag" in result.output


def test_check_reports_each_template(tmp_path):
    templates, _ = make_site(tmp_path)
    result = runner.invoke(typer_app, ["check", "page", "broken", "-t", str(templates)])
    assert result.exit_code == 1
    assert "✓ page" in result.output
    assert "✗ broken" in result.output


def test_check_passes(tmp_path):
    templates, _ = make_site(tmp_path)
    result = runner.invoke(typer_app, ["check", "page", "-t", str(templates)])
    assert result.exit_code == 0


def test_inspect_prints_tree(tmp_path):
    templates, _ = make_site(tmp_path)
    result = runner.invoke(typer_app, ["inspect", "page", "-t", str(templates)])
    assert result.exit_code == 0, result.output
    assert '"name":"layout"' in result.output
    assert '"name":"title"' in result.output


def test_setup_logging_levels(monkeypatch):
    monkeypatch.delenv("POPTAGS_DEBUG", raising=False)
    setup_logging()
    assert logging.getLogger("poptags").level == logging.WARNING
    setup_logging(verbose=True)
    assert logging.getLogger("poptags").level == logging.INFO
    monkeypatch.setenv("POPTAGS_DEBUG", "1")
    setup_logging()
    assert logging.getLogger("poptags").level == logging.DEBUG


def test_render_reports_unexpected_errors(tmp_path):
    templates, _ = make_site(tmp_path)
    content = tmp_path / "bad.yaml"
    content.write_text("title: [unclosed\n")
    result = runner.invoke(typer_app, ["render", "page", "-t", str(templates), "-c", str(content)])
    assert result.exit_code == 1
    assert "Unexpected error:" in result.output
