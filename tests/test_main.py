import json

import httpx

from webprobe import main as cli
from webprobe.core.engine import Scanner

from conftest import hardened_handler


def test_invalid_url_exit_code(capsys):
    assert cli.main(["--url", "ftp://example.com"]) == 2
    assert "only HTTP/HTTPS" in capsys.readouterr().out


def test_parser_defaults():
    args = cli.build_parser().parse_args(["--url", "https://example.com"])
    assert args.profile == "extended"
    assert args.timeout == 10.0
    assert not args.insecure and not args.as_json


def test_json_output(monkeypatch, capsys):
    original = Scanner.__init__

    def with_mock_transport(self, *args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(hardened_handler)
        original(self, *args, **kwargs)

    monkeypatch.setattr(Scanner, "__init__", with_mock_transport)
    code = cli.main(["--url", "https://target.test", "--profile", "legacy", "--json"])

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert list(out) == ["ssl", "headers", "xss", "sql"]
    assert out["ssl"]["valid"] is True


def test_malformed_ipv6_url_exit_code(capsys):
    assert cli.main(["--url", "http://[::1"]) == 2
    assert "Invalid target" in capsys.readouterr().out
