"""Command-line entry point."""

import json

from click.testing import CliRunner

import main
from tests.conftest import BASE_URL, TOKEN


def test_missing_arguments_is_a_usage_error():
    result = CliRunner().invoke(main.cli, [])
    assert result.exit_code == 2
    assert "BASE_URL" in result.output


def test_missing_token_is_a_usage_error():
    result = CliRunner().invoke(main.cli, [BASE_URL])
    assert result.exit_code == 2
    assert "TOKEN" in result.output


def test_empty_token_is_rejected():
    result = CliRunner().invoke(main.cli, [BASE_URL, "  "])
    assert result.exit_code == 1
    assert "GOALSTORY_API_TOKEN argument is required" in result.output


def test_non_http_base_url_is_rejected():
    result = CliRunner().invoke(main.cli, ["api.example.test", TOKEN])
    assert result.exit_code == 1
    assert "http(s) URL" in result.output


def test_list_tools_prints_the_catalog():
    result = CliRunner().invoke(main.cli, ["--list-tools"])
    assert result.exit_code == 0
    tools = json.loads(result.output)
    assert len(tools) == 25
    assert tools[0]["name"] == "goalstory_about"


def test_valid_arguments_start_the_server(monkeypatch):
    started = {}

    class FakeServer:
        def run(self):
            started["ran"] = True

    def fake_create_server(config):
        started["config"] = config
        return FakeServer()

    monkeypatch.setattr(main, "create_server", fake_create_server)
    result = CliRunner().invoke(main.cli, [BASE_URL + "/", TOKEN])

    assert result.exit_code == 0
    assert started["ran"]
    assert started["config"].base_url == BASE_URL
    assert started["config"].token == TOKEN
