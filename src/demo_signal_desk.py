from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from jigoor.app import AppConfig, create_session
from jigoor.cli import print_results
from jigoor.signals import GroundedResponse, Source, StaticGroundedModel


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logger = logging.getLogger("Jigoor")

    signals_body = {
        "signals": [
            {
                "assetName": "EUR/USD",
                "assetType": "forex",
                "signal": "Sell",
                "analysis": "Hawkish Fed commentary keeps the dollar bid while the pair stalls under 1.0850.",
                "currentPrice": "1.0845",
                "entryPrice": "1.0830 - 1.0850",
                "exitPrice": "1.0720",
                "stopLoss": "1.0890",
                "timeline": "3-5 days",
            },
            {
                "assetName": "Bitcoin (BTC)",
                "assetType": "crypto",
                "signal": "Strong Buy",
                "analysis": "Breakout above resistance with steady ETF inflows.",
                "currentPrice": "$69,123.45",
                "entryPrice": "$68,500 - $69,200",
                "exitPrice": "$74,000",
                "stopLoss": "$66,500",
                "timeline": "1-2 weeks",
                "fibonacciLevels": {
                    "level_0": "$73,777",
                    "level_23_6": "$70,100",
                    "level_38_2": "$67,950",
                    "level_50": "$66,200",
                    "level_61_8": "$64,450",
                    "level_78_6": "$62,100",
                    "level_100": "$58,623",
                },
            },
        ]
    }
    news_body = {"summary": "ETF inflows hit a weekly record; social sentiment is upbeat.", "outlook": "Slightly Bullish"}

    model = StaticGroundedModel(
        replies=[
            GroundedResponse(
                text="```json\n" + json.dumps(signals_body) + "\n```",
                sources=[
                    Source(uri="https://example.com/btc", title="BTC breaks out"),
                    Source(uri="https://example.com/fx", title="Fed minutes"),
                    Source(uri="https://example.com/btc", title="BTC breaks out (updated)"),
                ],
            ),
            GroundedResponse(
                text=json.dumps(news_body),
                sources=[Source(uri="https://example.com/etf", title="ETF flows")],
            ),
        ]
    )

    config = AppConfig(api_key="demo", default_tags=["btc", "eurusd"])
    session = create_session(config, logger, model=model)
    session.search()

    btc = next(s for s in session.signals if "BTC" in s.asset_name)
    session.analyze_news(btc.signal_id)
    print_results(session)


if __name__ == "__main__":
    main()
