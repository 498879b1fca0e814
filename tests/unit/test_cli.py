"""Tests for the relay CLI entry point."""

import logging

import pytest

from relay.cli import build_parser, main
from relay.client import RelayClient
from relay.providers.base import JSON_INSTRUCTION


@pytest.fixture(autouse=True)
def relay_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "GROQ_API_KEY", "RELAY_TIMEOUT_SECONDS", "RELAY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    logger = logging.getLogger("relay")
    for handler in list(logger.handlers):
        if getattr(handler, "_relay_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _use_transport(monkeypatch, transport):
    original = RelayClient.from_model.__func__

    def from_model(cls, *args, **kwargs):
        kwargs["transport"] = transport
        return original(cls, *args, **kwargs)

    monkeypatch.setattr(RelayClient, "from_model", classmethod(from_model))


class TestParser:
    def test_prompt_words_collected(self):
        args = build_parser().parse_args(["gpt-4o", "What", "is", "Python?"])
        assert args.model == "gpt-4o"
        assert args.prompt == ["What", "is", "Python?"]
        assert args.json is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "orion-relay 1.0.0" in capsys.readouterr().out


class TestMain:
    def test_prints_content(self, relay_env, transport_factory, openai_ok, capsys):
        relay_env.setenv("OPENAI_API_KEY", "sk-test")
        t = transport_factory(body=openai_ok)
        _use_transport(relay_env, t)

        code = main(["openai/gpt-4o-mini", "--system", "Be brief", "--json", "Say", "hi"])

        assert code == 0
        assert capsys.readouterr().out.strip() == "hello"
        body = t.last_json()
        assert body["model"] == "gpt-4o-mini"
        assert body["response_format"] == {"type": "json_object"}
        assert body["messages"][0]["content"] == f"Be brief\n\n{JSON_INSTRUCTION}"
        assert body["messages"][1] == {"role": "user", "content": "Say hi"}

    def test_generation_flags(self, relay_env, transport_factory, openai_ok):
        relay_env.setenv("GROQ_API_KEY", "gsk")
        t = transport_factory(body=openai_ok)
        _use_transport(relay_env, t)

        main(["llama-3.1-8b-instant", "--max-tokens", "64", "--temperature", "0.2", "Hi"])

        body = t.last_json()
        assert body["max_tokens"] == 64
        assert body["temperature"] == 0.2
        assert str(t.last.url).startswith("https://api.groq.com/openai/v1")

    def test_unknown_model(self, capsys):
        assert main(["mistral-large", "Hi"]) == 1
        assert "error:" in capsys.readouterr().err

    def test_missing_key_after_empty_prompt(self, relay_env, capsys):
        relay_env.setattr("relay.credentials.getpass.getpass", lambda prompt: "")
        assert main(["gpt-4o", "Hi"]) == 1
        assert "OPENAI_API_KEY" in capsys.readouterr().err

    def test_provider_error(self, relay_env, transport_factory, capsys):
        relay_env.setenv("OPENAI_API_KEY", "sk-test")
        _use_transport(relay_env, transport_factory(status=429, body={"error": {"message": "Slow down"}}))
        assert main(["gpt-4o", "Hi"]) == 1
        err = capsys.readouterr().err
        assert "Slow down" in err
        assert "429" in err

    def test_invalid_temperature_is_reported(self, relay_env, transport_factory, capsys):
        relay_env.setenv("OPENAI_API_KEY", "sk-test")
        t = transport_factory()
        _use_transport(relay_env, t)
        assert main(["gpt-4o", "--temperature", "3", "Hi"]) == 1
        assert t.calls == 0

    def test_bad_settings(self, relay_env, capsys):
        relay_env.setenv("RELAY_TIMEOUT_SECONDS", "soon")
        assert main(["gpt-4o", "Hi"]) == 2
        assert "RELAY_TIMEOUT_SECONDS" in capsys.readouterr().err
