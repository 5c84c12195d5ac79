import json

import pytest

from helpers import signal_obj, signals_text
from jigoor import cli
from jigoor.app import create_session
from jigoor.signals import GroundedResponse, Source, StaticGroundedModel


@pytest.fixture
def no_keys(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY", "JIGOOR_DATA_SOURCE"):
        monkeypatch.delenv(name, raising=False)


def _use_model(monkeypatch, model):
    def fake_create_session(config, logger):
        return create_session(config, logger, model=model)

    monkeypatch.setattr(cli, "create_session", fake_create_session)


def test_missing_key_exits_with_configuration_error(no_keys, capsys):
    assert cli.main(["BTC"]) == 2
    assert "Application Configuration Error" in capsys.readouterr().err


def test_one_shot_search_with_news(no_keys, monkeypatch, capsys):
    model = StaticGroundedModel(
        replies=[
            GroundedResponse(
                text=signals_text(signal_obj("Ethereum (ETH)", signal="Sell"), signal_obj("Bitcoin (BTC)", signal="Buy")),
                sources=[Source("https://src.example/1", "Source One")],
            ),
            GroundedResponse(text=json.dumps({"summary": "Inflows rising.", "outlook": "Bullish"})),
        ]
    )
    _use_model(monkeypatch, model)

    assert cli.main(["btc", "eth", "--news", "btc"]) == 0

    out = capsys.readouterr().out
    assert out.index("Bitcoin (BTC)") < out.index("Ethereum (ETH)")
    assert "Inflows rising." in out
    assert "Source One" in out
    assert "BTC, ETH" in model.prompts[0]


def test_one_shot_failure_returns_1(no_keys, monkeypatch, capsys):
    _use_model(monkeypatch, StaticGroundedModel(replies=[GroundedResponse(text="nope")]))
    assert cli.main(["BTC"]) == 1
    assert "Failed to fetch signals from Gemini AI." in capsys.readouterr().out


def test_interactive_session(no_keys, monkeypatch, capsys):
    model = StaticGroundedModel(
        replies=[
            GroundedResponse(text=signals_text(signal_obj("Solana (SOL)"))),
            GroundedResponse(text=json.dumps({"summary": "Quiet.", "outlook": "Neutral"})),
        ]
    )
    _use_model(monkeypatch, model)
    lines = iter([":clear", "sol", ":news 1", ":news 9", ":quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    assert cli.main(["--interactive"]) == 0

    out = capsys.readouterr().out
    assert "Solana (SOL)" in out
    assert "Quiet." in out
    assert "No card #9." in out
    assert "for the following assets: SOL." in model.prompts[0]


def test_invalid_data_source_env_is_a_configuration_error(no_keys, monkeypatch, capsys):
    monkeypatch.setenv("JIGOOR_DATA_SOURCE", "rest")
    assert cli.main(["BTC"]) == 2
    err = capsys.readouterr().err
    assert "Application Configuration Error" in err
    assert "rest" in err


def test_invalid_mock_delay_env_is_a_configuration_error(no_keys, monkeypatch, capsys):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.delenv("THIRD_PARTY_SIGNALS_URL", raising=False)
    monkeypatch.setenv("THIRD_PARTY_MOCK_DELAY_SECONDS", "fast")
    assert cli.main(["--source", "api", "BTC"]) == 2
    assert "THIRD_PARTY_MOCK_DELAY_SECONDS" in capsys.readouterr().err


def test_failed_news_does_not_fail_the_search(no_keys, monkeypatch, capsys):
    model = StaticGroundedModel(
        replies=[
            GroundedResponse(text=signals_text(signal_obj("Bitcoin (BTC)"))),
            GroundedResponse(text="no json here"),
        ]
    )
    _use_model(monkeypatch, model)

    assert cli.main(["BTC", "--news", "btc"]) == 0
    out = capsys.readouterr().out
    assert "Failed to fetch news analysis." in out
    assert "Bitcoin (BTC)" in out
