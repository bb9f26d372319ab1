import json

from gorgon import Site
from gorgon.data import load_data


def write_data(root):
    data_dir = root / "data"
    data_dir.mkdir()
    (data_dir / "results.json").write_text(
        json.dumps({"county": {"name": "Cook", "votes": 10}}), encoding="utf-8"
    )
    (data_dir / "nav.yaml").write_text("- label: Home\n  url: /\n", encoding="utf-8")
    (data_dir / "notes.txt").write_text("ignored", encoding="utf-8")
    return data_dir


def test_load_data_reads_json_and_yaml(tmp_path, capsys):
    data_dir = write_data(tmp_path)
    data = load_data(data_dir)
    assert set(data) == {"results", "nav"}
    assert data["results"]["county"]["votes"] == 10
    assert data["nav"][0]["label"] == "Home"
    out = capsys.readouterr().out
    assert "Loading data[results]" in out
    assert "Loading data[nav]" in out


def test_load_data_missing_directory(tmp_path):
    assert load_data(tmp_path / "data") == {}


def test_reload_merges_top_level_bags(tmp_path):
    data_dir = write_data(tmp_path)
    site = Site(
        setup=lambda config: config.add_data("extra", {"kept": True}).add_data("nav", []),
        root=tmp_path,
    ).configure()
    # setup ran after the first load, so its nav replaced the file's
    assert site.data["nav"] == []
    assert site.data["extra"]["kept"] is True

    (data_dir / "results.json").write_text(json.dumps({"state": "IL"}), encoding="utf-8")
    site.reload_data()
    assert site.data["results"] == {"state": "IL"}
    assert site.data["nav"][0]["url"] == "/"
    assert site.data["extra"]["kept"] is True


def test_after_load_data_hooks_rerun_on_every_reload(tmp_path):
    write_data(tmp_path)
    calls = []

    def setup(config):
        @config.after_load_data
        def count(cfg):
            calls.append(dict(cfg.data))

    site = Site(setup=setup, root=tmp_path).configure()
    assert len(calls) == 1

    site.reload_data()
    snapshot = dict(site.data)
    site.reload_data()
    assert dict(site.data) == snapshot
    assert len(calls) == 3


def test_hooks_can_derive_state_from_data(tmp_path):
    write_data(tmp_path)

    def setup(config):
        config.after_load_data(
            lambda cfg: cfg.set("county_name", cfg.data["results"]["county"]["name"])
        )

    site = Site(setup=setup, root=tmp_path).configure()
    assert site.config["county_name"] == "Cook"
