"""End-to-end tests for the command line entry point with a stubbed API."""

import logging
from unittest import mock

import pytest

from pr_opener import cli
from pr_opener.github_api import InvalidCredentialsError
from pr_opener.models import FetchErrorKind, FetchFailure, FetchSuccess, PullRequestRecord

CONFIG = """\
github:
  auth_token: abc
  org: acme
  repos: [web, api]
  authors: [Alice, bob]
  interface: none
"""


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    path = tmp_path / "prs.yml"
    path.write_text(CONFIG)
    return str(path)


@pytest.fixture
def client():
    with mock.patch.object(cli, "GitHubClient") as factory:
        yield factory.return_value


class TestParser:
    def test_lists(self):
        args = cli.build_parser().parse_args(["-c", "x.yml", "-r", "a, b,,", "-a", "Alice"])
        options = cli._options(args)
        assert options["repos"] == ["a", "b"]
        assert options["authors"] == ["Alice"]
        assert options["quiet"] is None

    def test_help_command(self, capsys):
        assert cli.main(["help"]) == 0
        assert "usage: pr-opener" in capsys.readouterr().out

    def test_config_is_required(self, capsys):
        assert cli.main([]) == 2
        assert "No config file specified" in capsys.readouterr().out


class TestMain:
    def test_summary(self, config_path, client, capsys):
        client.fetch_open_prs.side_effect = lambda org, repo: FetchSuccess(
            [PullRequestRecord("alice", f"Change in {repo}", 5, f"http://x/{repo}/5")]
        ) if repo == "web" else FetchFailure(FetchErrorKind.REPO_NOT_FOUND, "Not Found")

        assert cli.main(["-c", config_path]) == 0
        out = capsys.readouterr().out
        assert "5: Change in web" in out
        assert "No repo called api found in acme" in out
        assert "NOTE: bob has no open prs" in out
        assert "No output to display." in out
        assert out.rstrip().endswith("Done.")

    def test_missing_repo_reported_once(self, config_path, client, capsys, caplog):
        client.fetch_open_prs.return_value = FetchFailure(FetchErrorKind.REPO_NOT_FOUND, "Not Found")
        assert cli.main(["-c", config_path]) == 0
        out = capsys.readouterr().out
        assert out.count("No repo called api found in acme") == 1
        assert out.count("not found") == 0
        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []

    def test_bad_config(self, tmp_path, capsys):
        path = tmp_path / "prs.yml"
        path.write_text("github:\n  org: acme\n")
        assert cli.main(["-c", str(path)]) == 2
        assert "Missing required config param" in capsys.readouterr().out

    def test_invalid_credentials(self, config_path, client, capsys):
        client.fetch_open_prs.return_value = FetchFailure(
            FetchErrorKind.INVALID_CREDENTIALS, "Bad credentials"
        )
        assert cli.main(["-c", config_path]) == 1
        assert client.fetch_open_prs.call_count == 1
        assert "Invalid auth token used" in capsys.readouterr().out

    def test_all_repos_expanded(self, config_path, client):
        client.list_org_repos.return_value = ["zeta", "alpha"]
        client.fetch_open_prs.return_value = FetchSuccess()
        assert cli.main(["-c", config_path, "-r", "all", "-q"]) == 0
        assert [c.args for c in client.fetch_open_prs.call_args_list] == [
            ("acme", "alpha"),
            ("acme", "zeta"),
        ]

    def test_invalid_credentials_while_listing_repos(self, config_path, client, capsys):
        client.list_org_repos.side_effect = InvalidCredentialsError("Bad credentials")
        assert cli.main(["-c", config_path, "-r", "all"]) == 1
        assert "Invalid auth token used" in capsys.readouterr().out
