"""Tests for settings loading and precedence."""

import pytest

from pr_opener.config import (
    DEFAULT_INDENT,
    ConfigError,
    build_settings,
    load_config_file,
    load_settings,
    resolve_output_modes,
)


@pytest.fixture(autouse=True)
def no_env_token(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


def file_values(**overrides):
    values = {
        "org": "acme",
        "repos": ["web", "api"],
        "authors": [" Bob", "alice "],
        "auth_token": "secret",
    }
    values.update(overrides)
    return values


class TestLoadConfigFile:
    def test_reads_github_section(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("github:\n  org: acme\n  repos: [web]\n  authors: [alice]\n")
        assert load_config_file(path) == {"org": "acme", "repos": ["web"], "authors": ["alice"]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="doesn't exist"):
            load_config_file(tmp_path / "nope.yml")

    def test_missing_section(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("other: 1\n")
        with pytest.raises(ConfigError, match="'github' section"):
            load_config_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("github: [unclosed\n")
        with pytest.raises(ConfigError, match="not valid YAML"):
            load_config_file(path)


class TestBuildSettings:
    def test_file_values_and_defaults(self):
        settings = build_settings({}, file_values())
        assert settings.org == "acme"
        assert settings.repos == ["api", "web"]
        assert settings.authors == ["alice", "bob"]
        assert settings.indent == DEFAULT_INDENT
        assert settings.interface == "terminal"
        assert settings.uses_token
        assert not settings.auto_open
        assert not settings.show_link

    def test_cli_overrides_file(self):
        settings = build_settings(
            {"org": "other", "repos": ["cli"], "show_link": True, "indent": "\t", "username": None},
            file_values(show_link=False),
        )
        assert settings.org == "other"
        assert settings.repos == ["cli"]
        assert settings.show_link is True
        assert settings.indent == "\t"

    def test_missing_required(self):
        values = file_values()
        del values["authors"]
        with pytest.raises(ConfigError, match="Missing required config param 'authors'"):
            build_settings({}, values)

    def test_wrong_type(self):
        with pytest.raises(ConfigError, match="Param 'repos' is of the wrong type"):
            build_settings({}, file_values(repos="web"))

    def test_requires_credentials(self):
        with pytest.raises(ConfigError, match="username/password combo or an auth token"):
            build_settings({}, file_values(auth_token=None, username="me"))

    def test_basic_auth(self):
        settings = build_settings({}, file_values(auth_token=None, username="me", password="pw"))
        assert not settings.uses_token
        assert settings.username == "me"

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        settings = build_settings({}, file_values(auth_token=None))
        assert settings.auth_token == "from-env"

    def test_with_repos(self):
        settings = build_settings({}, file_values(repos=["all"]))
        assert settings.wants_all_repos
        expanded = settings.with_repos(["zeta", "alpha"])
        assert expanded.repos == ["alpha", "zeta"]
        assert not expanded.wants_all_repos
        assert settings.repos == ["all"]


class TestOutputModes:
    @pytest.mark.parametrize(
        "cli_verbose, file_verbose, cli_quiet, file_quiet, expected",
        [
            (None, None, None, None, (False, False)),
            (True, None, True, True, (True, False)),
            (None, True, True, None, (True, False)),
            (False, True, True, None, (False, True)),
            (None, None, None, True, (False, True)),
            (None, None, False, True, (False, False)),
        ],
    )
    def test_precedence(self, cli_verbose, file_verbose, cli_quiet, file_quiet, expected):
        assert resolve_output_modes(cli_verbose, file_verbose, cli_quiet, file_quiet) == expected

    def test_verbose_in_file_turns_quiet_off(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(
            "github:\n"
            "  org: acme\n"
            "  repos: [web]\n"
            "  authors: [alice]\n"
            "  auth_token: abc\n"
            "  verbose_mode: true\n"
            "  quiet_mode: true\n"
        )
        settings = load_settings(path, {"quiet": True})
        assert settings.verbose
        assert not settings.quiet


def test_duplicate_authors_collapse():
    settings = build_settings({}, file_values(authors=["Alice", "alice ", "bob"]))
    assert settings.authors == ["alice", "bob"]
