from click.testing import CliRunner

from gorgon.cli import cli
from gorgon.server import RELOAD_EXIT_CODE
from gorgon.site import Site

SITE_FILE = """
from gorgon import Site

site = Site({"title": "CLI"})


@site.setup
def configure(config):
    config.add_page("index.html", template="index.html")
"""


def create_project(tmp_path, template="<h1>{{ title }}</h1>"):
    (tmp_path / "site.py").write_text(SITE_FILE, encoding="utf-8")
    (tmp_path / "index.html").write_text(template, encoding="utf-8")
    return tmp_path


def test_cli_build(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    result = CliRunner().invoke(cli, ["build", "--silent"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Built 1 pages" in result.output
    assert (tmp_path / "build" / "index.html").read_text(encoding="utf-8") == "<h1>CLI</h1>"


def test_cli_build_failure(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path, template="{{ nobody }}"))
    result = CliRunner().invoke(cli, ["build", "--silent"])
    assert result.exit_code == 1
    assert "Build failed" in result.output
    assert "nobody" in result.output


def test_cli_missing_site_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code != 0
    assert "Site file not found" in result.output


def test_cli_app_must_define_a_site(monkeypatch, tmp_path):
    (tmp_path / "other.py").write_text("site = 42\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["--app", "other.py", "build"])
    assert result.exit_code != 0
    assert "does not define a Site" in result.output


def test_cli_serve_runs_under_supervisor(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    monkeypatch.delenv("GORGON_SUPERVISED", raising=False)
    called = {}

    def fake_supervise(command):
        called["command"] = command
        return 0

    monkeypatch.setattr("gorgon.cli.supervise", fake_supervise)
    result = CliRunner().invoke(cli, ["serve"])
    assert result.exit_code == 0
    assert called["command"][1:3] == ["-m", "gorgon"]


def test_cli_serve_in_process(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    called = {}

    def fake_serve(self, host, port):
        called["args"] = (host, port)
        return RELOAD_EXIT_CODE

    monkeypatch.setattr(Site, "serve", fake_serve)
    result = CliRunner().invoke(cli, ["serve", "--no-supervise", "--port", "5050"])
    assert result.exit_code == RELOAD_EXIT_CODE
    assert called["args"] == ("127.0.0.1", 5050)


def test_module_main_entrypoint():
    from gorgon.__main__ import main

    assert callable(main)
