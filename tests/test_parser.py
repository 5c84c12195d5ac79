import json

import pytest

from helpers import FIB, signal_obj, signals_text
from jigoor.signals import MalformedResponseError, parse_news, parse_signals, strip_code_fences


def test_strip_code_fences_handles_language_tag_and_plain_fence():
    assert strip_code_fences("```json\n{\"a\": 1}\n```") == '{"a": 1}'
    assert strip_code_fences("```\n[1]\n```  ") == "[1]"
    assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


def test_fenced_and_unfenced_parse_identically():
    obj = signal_obj(fibonacciLevels=FIB)
    plain = parse_signals(signals_text(obj))
    fenced = parse_signals(signals_text(obj, fenced=True))
    assert [s.to_dict() for s in plain] == [s.to_dict() for s in fenced]


def test_bare_array_is_accepted():
    objs = [signal_obj("Bitcoin (BTC)"), signal_obj("EUR/USD", asset_type="forex", signal="Sell")]
    from_obj = parse_signals(json.dumps({"signals": objs}))
    from_list = parse_signals(json.dumps(objs))
    assert [s.to_dict() for s in from_obj] == [s.to_dict() for s in from_list]
    assert from_list[1].asset_type == "forex"


def test_fields_are_mapped():
    [sig] = parse_signals(signals_text(signal_obj(fibonacciLevels=FIB)))
    assert sig.asset_name == "Bitcoin (BTC)"
    assert sig.entry_price == "$95 - $100"
    assert sig.stop_loss == "$90"
    assert sig.fibonacci_levels is not None
    assert sig.fibonacci_levels.level_0 == "$73,777"
    assert sig.fibonacci_levels.level_100 == "$58,623"
    assert sig.news_analysis is None


def test_optional_fields_may_be_missing_or_null():
    obj = signal_obj()
    del obj["currentPrice"]
    obj["stopLoss"] = None
    obj["fibonacciLevels"] = None
    [sig] = parse_signals(signals_text(obj))
    assert sig.current_price is None
    assert sig.stop_loss is None
    assert sig.fibonacci_levels is None


def test_unknown_signal_label_is_kept():
    [sig] = parse_signals(signals_text(signal_obj(signal="Moon")))
    assert sig.signal == "Moon"


def test_each_parse_assigns_distinct_ids():
    objs = [signal_obj("A (A)"), signal_obj("A (A)")]
    a, b = parse_signals(json.dumps(objs))
    assert a.signal_id != b.signal_id


def test_invalid_json_raises():
    with pytest.raises(MalformedResponseError):
        parse_signals('{"signals": [ {"assetName": ')


def test_prose_around_json_is_rejected():
    with pytest.raises(MalformedResponseError):
        parse_signals("Here are your signals: " + signals_text(signal_obj()))


@pytest.mark.parametrize("payload", ['{"results": []}', '"signals"', "42", '{"signals": "none"}', "null"])
def test_wrong_shape_raises(payload):
    with pytest.raises(MalformedResponseError):
        parse_signals(payload)


def test_miscounted_response_is_tolerated():
    text = signals_text(signal_obj("A (A)"), signal_obj("B (B)"), signal_obj("C (C)"))
    assert len(parse_signals(text)) == 3


@pytest.mark.parametrize(
    "mutate",
    [
        lambda o: o.pop("assetName"),
        lambda o: o.update(assetType="stock"),
        lambda o: o.update(entryPrice=100),
        lambda o: o.update(currentPrice=69123.45),
        lambda o: o.update(fibonacciLevels={"level_0": "$1"}),
        lambda o: o.update(fibonacciLevels=["$1"]),
    ],
)
def test_invalid_signal_entries_are_rejected(mutate):
    obj = signal_obj()
    mutate(obj)
    with pytest.raises(MalformedResponseError):
        parse_signals(signals_text(obj))


def test_non_object_entry_is_rejected():
    with pytest.raises(MalformedResponseError):
        parse_signals('{"signals": ["BTC"]}')


def test_user_message_does_not_contain_raw_text():
    raw = "totally not json SECRET-RAW"
    with pytest.raises(MalformedResponseError) as exc:
        parse_signals(raw)
    assert "SECRET-RAW" not in str(exc.value)


def test_parse_news_ok_with_fences():
    news = parse_news('```json\n{"summary": "Calm week.", "outlook": "Neutral"}\n```')
    assert news.summary == "Calm week."
    assert news.outlook == "Neutral"


@pytest.mark.parametrize(
    "payload",
    [
        '{"summary": "x"}',
        '{"outlook": "Bullish"}',
        '{"summary": 1, "outlook": "Bullish"}',
        '[{"summary": "x", "outlook": "Bullish"}]',
        "not json",
    ],
)
def test_parse_news_rejects_bad_shapes(payload):
    with pytest.raises(MalformedResponseError):
        parse_news(payload)
