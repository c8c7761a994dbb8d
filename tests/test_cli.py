"""
Tests for the command-line client

The CLI builds its own Database; these tests swap in one wired to the
fake shard.

Run with: python -m pytest tests/test_cli.py -v
"""

import json

import httpx
import pytest

from hexodb import cli
from hexodb.client.database import Database


@pytest.fixture
def run(shard, monkeypatch, capsys):
    """Run the CLI against the fake shard and return (exit code, stdout, stderr)."""
    def factory(url, timeout=None):
        return Database(url, timeout=timeout, transport=httpx.MockTransport(shard.handle))

    monkeypatch.setattr(cli, "Database", factory)

    def invoke(*argv):
        code = cli.main(["--url", "https://shard.test", *argv])
        captured = capsys.readouterr()
        return code, captured.out.strip(), captured.err.strip()

    return invoke


class TestCommands:
    """Test each subcommand."""

    def test_set_and_get(self, run, shard):
        assert run("set", "foo", "bar") == (0, '"success"', "")
        assert shard.peek("foo") == "bar"
        code, out, _ = run("get", "foo")
        assert code == 0
        assert json.loads(out) == "bar"

    def test_set_parses_json_values(self, run, shard):
        run("set", "count", "42")
        run("set", "profile", '{"a": 1}')
        assert shard.peek("count") == "42"
        assert shard.peek("profile") == '{"a":1}'

    def test_get_missing(self, run):
        assert run("get", "nothing")[1] == "null"

    def test_delete_and_exists(self, run):
        run("set", "foo", "bar")
        assert run("exists", "foo")[1] == "true"
        run("delete", "foo")
        assert run("exists", "foo")[1] == "false"

    def test_all(self, run, shard):
        shard.seed("a", 1)
        code, out, _ = run("all")
        assert json.loads(out) == [{"key": "a", "data": 1}]

    def test_math(self, run, shard):
        run("set", "items", "10")
        run("math", "items", "+", "5")
        assert shard.peek("items") == "15"

    def test_starts_with(self, run, shard, sample_snapshot):
        for key, data in sample_snapshot.items():
            shard.seed(key, data)
        code, out, _ = run("starts-with", "a", "--sort", ".data.score", "--limit", "2")
        assert [entry["key"] for entry in json.loads(out)] == ["avocado", "apple"]

    def test_ping(self, run):
        code, out, _ = run("ping")
        assert code == 0
        assert int(out) >= 0


class TestErrors:
    """Test error reporting."""

    def test_hexo_error_exit_status(self, run, shard):
        run("set", "name", "ana")
        code, out, err = run("math", "name", "+", "1")
        assert code == 1
        assert out == ""
        assert err == "ERROR Target is not a number!"

    def test_shard_error(self, run, shard):
        shard.fail_status = 503
        code, _, err = run("get", "foo")
        assert code == 1
        assert err.startswith("ERROR")

    def test_non_numeric_math_argument(self, run):
        with pytest.raises(SystemExit):
            run("math", "items", "+", "abc")

    def test_missing_url(self, monkeypatch):
        monkeypatch.setattr(cli.settings, "URL", "")
        with pytest.raises(SystemExit):
            cli.main(["get", "foo"])
