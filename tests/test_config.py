import pytest

from gorgon import ConfigurationError, HelperSet, Mode, Site, Target, UnresolvedNameError
from gorgon.config import Config
from gorgon.indifferent import IndifferentDict


def test_site_construction(tmp_path):
    site = Site(root=tmp_path)
    assert isinstance(site.config, Config)
    assert len(site.sitemap) == 0
    assert isinstance(site.data, IndifferentDict)
    assert site.config.root == tmp_path
    assert site.config.build_dir == tmp_path / "build"
    assert site.config.prebuild_dir == tmp_path / "prebuild"
    assert site.config.data_dir == tmp_path / "data"


def test_initial_and_setup_settings(tmp_path):
    site = Site({"thing1": "foo", "thing2": "bar"}, root=tmp_path)
    assert site.config["thing1"] == "foo"
    assert site.config.get("thing2") == "bar"

    def setup(config):
        config.set("thing1", "baz").set_default("thing2", "ignored").set_default("thing3", "new")

    site = Site({"thing2": "bar"}, setup=setup, root=tmp_path).configure()
    assert site.config["thing1"] == "baz"
    assert site.config["thing2"] == "bar"
    assert site.config["thing3"] == "new"


def test_configure_runs_once(tmp_path):
    calls = []
    site = Site(root=tmp_path)

    @site.setup
    def configure(config):
        calls.append(config)

    assert site.configure(mode=Mode.BUILD) is site
    site.configure(mode=Mode.SERVER)
    assert calls == [site.config]
    assert site.configured
    assert site.config["mode"] == Mode.BUILD


def test_add_data_makes_nested_mappings_indifferent(tmp_path):
    site = Site(
        setup=lambda config: config.add_data("foo", {"thing1": "foo", "thing2": {"x": 1}}),
        root=tmp_path,
    ).configure()
    assert site.data["foo"]["thing1"] == "foo"
    assert site.data.dig("foo", "thing2", "x") == 1
    assert isinstance(site.data["foo"], IndifferentDict)


def test_add_page_copies_attributes_and_last_write_wins():
    config = Config()
    attrs = {"template": "a.html", "meta": {"title": "A"}}
    config.add_page("index.html", attrs)
    attrs["template"] = "changed.html"
    page = config.sitemap["index.html"]
    assert page["template"] == "a.html"
    assert page["meta"]["title"] == "A"
    assert page.path == "index.html"

    config.add_page("about.html", template="about.html").add_page("index.html", json=[1])
    assert list(config.sitemap) == ["index.html", "about.html"]
    assert config.sitemap["index.html"].get("template") is None
    assert config.sitemap["index.html"]["json"] == [1]


def test_hook_registration_forms():
    config = Config()
    seen = []

    config.hook("after_load_data", lambda c: seen.append("plain"))

    @config.after_load_data
    def decorated(c):
        seen.append("decorated")

    config.after_load_data(lambda c: seen.append("chained")).hook("other", lambda c: seen.append("other"))
    config.hooks.run("after_load_data", config)
    assert seen == ["plain", "decorated", "chained"]
    assert "other" in config.hooks


class Shouting(HelperSet):
    def shout(self, ctx, text):
        return f"{text.upper()}!"


def test_helpers_are_bound_per_scope():
    config = Config({"title": "Site"})
    config.helpers(Shouting, scope="config")
    assert config.helper("shout")("hi") == "HI!"
    assert config.template_helpers == []

    config.helpers(HelperSet.of(title_of=lambda ctx: ctx.settings["title"]), scope="template")
    assert len(config.template_helpers) == 1
    with pytest.raises(UnresolvedNameError):
        config.helper("title_of")


def test_helpers_reject_non_helper_sets():
    config = Config()
    with pytest.raises(ConfigurationError):
        config.helpers(object())
    with pytest.raises(ConfigurationError):
        config.helpers(lambda ctx: None)
    with pytest.raises(ConfigurationError):
        config.helpers(Shouting, scope="everywhere")


def test_mode_helpers_available_in_config(tmp_path):
    site = Site(root=tmp_path).configure(mode=Mode.BUILD, target=Target.PRODUCTION)
    assert site.config.helper("is_build")() is True
    assert site.config.helper("is_server")() is False
    assert site.config.helper("is_production")() is True
    assert site.config.helper("is_development")() is False


def test_settings_accept_plain_strings_for_modes(tmp_path):
    site = Site({"mode": "server", "target": "development"}, root=tmp_path)
    assert site.config.helper("is_server")()
    assert site.config.helper("is_development")()


def test_add_page_does_not_share_nested_attributes():
    config = Config()
    meta = IndifferentDict(title="A")
    config.add_page("index.html", template="a.html", meta=meta)
    meta["title"] = "changed"
    assert config.sitemap["index.html"]["meta"]["title"] == "A"
