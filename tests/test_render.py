from jigoor.signals import FibonacciLevels, NewsAnalysis, Source, TradingSignal
from jigoor.ui import outlook_tone, render_signal, render_sources, signal_tone
from jigoor.ui.render import fibonacci_percentage, fibonacci_zone

from helpers import FIB


def _signal(**kwargs):
    base = dict(
        asset_name="Bitcoin (BTC)",
        asset_type="crypto",
        signal="Strong Buy",
        analysis="Breakout.",
        current_price="$69,123.45",
        entry_price="$68,500 - $69,200",
        exit_price="$74,000",
        stop_loss="N/A",
        timeline="1-2 weeks",
    )
    base.update(kwargs)
    return TradingSignal(**base)


def test_tones():
    assert signal_tone("Accumulate") == "bullish"
    assert signal_tone("Strong Sell") == "bearish"
    assert signal_tone("Hold") == "neutral"
    assert signal_tone("Moon") == "neutral"
    assert outlook_tone("Slightly Bullish") == "bullish"
    assert outlook_tone("Bearish") == "bearish"
    assert outlook_tone("Neutral") == "neutral"


def test_fibonacci_helpers():
    assert fibonacci_percentage("level_23_6") == 23.6
    assert fibonacci_percentage("level_0") == 0.0
    assert fibonacci_percentage("level_100") == 100.0
    assert fibonacci_zone(38.2) == "resistance"
    assert fibonacci_zone(50.0) == "pivot"
    assert fibonacci_zone(61.8) == "support"


def test_render_signal_with_conversion_and_levels():
    text = render_signal(_signal(fibonacci_levels=FibonacciLevels(**FIB)), usd_to_cad_rate=1.37, index=1)
    assert text.startswith("#1 Bitcoin (BTC) [crypto]")
    assert "Strong Buy" in text
    assert "$69,123.45 (94,699.13 $CAD)" in text
    assert "93,845.00 - 94,804.00 $CAD" in text
    # N/A prices print without a conversion
    assert "N/A\n" in text
    assert "(High)" in text and "(Low)" in text
    assert text.index("$73,777") < text.index("$58,623")


def test_render_signal_hides_fibonacci_on_request():
    text = render_signal(_signal(fibonacci_levels=FibonacciLevels(**FIB)), show_fibonacci=False)
    assert "Fibonacci" not in text


def test_render_signal_with_news():
    sig = _signal(
        news_analysis=NewsAnalysis(summary="ETF inflows.", outlook="Bullish"),
        news_sources=[Source("https://news.example.com/a", "Flows")],
    )
    text = render_signal(sig)
    assert "Live News Outlook" in text
    assert "ETF inflows." in text
    assert "news.example.com" in text


def test_render_sources():
    assert render_sources([]) == []
    lines = render_sources([Source("https://www.example.org/x", "Example")])
    assert lines[0] == "Analysis Sources:"
    assert "Example (www.example.org)" in lines[1]


def test_forex_card_has_no_cad_conversion():
    sig = _signal(
        asset_name="EUR/USD",
        asset_type="forex",
        signal="Sell",
        current_price="1.0845",
        entry_price="1.0830 - 1.0850",
        exit_price="1.0720",
        stop_loss="1.0890",
    )
    text = render_signal(sig, usd_to_cad_rate=1.37)
    assert "$CAD" not in text
    assert "Current Price: 1.0845" in text
    assert "1.0830 - 1.0850" in text


def test_empty_entry_and_exit_show_na():
    text = render_signal(_signal(entry_price="", exit_price="", current_price=None, stop_loss=None), 1.37)
    assert "Entry:         N/A" in text
    assert "Exit:          N/A" in text
    assert "Current Price" not in text
    assert "Stop Loss" not in text
