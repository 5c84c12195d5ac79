"""Prompt builders for the grounded Gemini calls.

Both prompts embed a worked JSON example. Search grounding rules out a JSON
response mime type, so the example is what steers the model toward a
parseable reply.
"""

from __future__ import annotations

from typing import Sequence

from .types import AssetType

_SIGNALS_EXAMPLE = """{
  "signals": [
    {
      "assetName": "Bitcoin (BTC)",
      "assetType": "crypto",
      "signal": "Strong Buy",
      "analysis": "Bitcoin is showing strong bullish momentum after breaking a key resistance level. Increased institutional inflow supports a continued upward trend.",
      "currentPrice": "$69,123.45",
      "entryPrice": "$68,500 - $69,200",
      "exitPrice": "$74,000",
      "stopLoss": "$66,500",
      "timeline": "1-2 weeks",
      "fibonacciLevels": { "level_0": "$73,777", "level_23_6": "$70,100", "level_38_2": "$67,950", "level_50": "$66,200", "level_61_8": "$64,450", "level_78_6": "$62,100", "level_100": "$58,623" }
    },
    {
      "assetName": "EUR/USD",
      "assetType": "forex",
      "signal": "Sell",
      "analysis": "The EUR/USD is facing strong resistance at the 1.0850 level. Hawkish comments from the Federal Reserve are strengthening the USD.",
      "currentPrice": "1.0845",
      "entryPrice": "1.0830 - 1.0850",
      "exitPrice": "1.0720",
      "stopLoss": "1.0890",
      "timeline": "3-5 days",
      "fibonacciLevels": { "level_0": "1.0916", "level_23_6": "1.0855", "level_38_2": "1.0818", "level_50": "1.0788", "level_61_8": "1.0758", "level_78_6": "1.0718", "level_100": "1.0660" }
    }
  ]
}"""

_NEWS_EXAMPLE = """{
  "summary": "Recent positive developments regarding a partnership with a major tech firm have boosted investor confidence. Social media sentiment is overwhelmingly positive, pointing towards a potential short-term price increase.",
  "outlook": "Bullish"
}"""


def build_signals_prompt(symbols: Sequence[str]) -> str:
    count = len(symbols)
    return f"""You are an expert financial analyst specializing in both cryptocurrency and Forex markets.
The user wants a detailed trading signal analysis for the following assets: {', '.join(symbols)}.

For each of the {count} assets requested, perform the following steps:
1. Identify whether the asset is a 'crypto' or 'forex' pair.
2. Provide a single, detailed trading signal analysis based on its type.

For each signal you identify, provide:
1. The asset name (e.g., "Bitcoin (BTC)" for crypto, "EUR/USD" for forex).
2. The asset type, which MUST be either "crypto" or "forex".
3. The signal type, one of: "Strong Buy", "Buy", "Accumulate", "Hold", "Sell", "Strong Sell".
4. A concise, data-driven analysis (2-3 sentences) explaining the reason for the signal. Use your web search capabilities to find the most up-to-date information, including economic data for forex and on-chain metrics for crypto.
5. The asset's current price.
6. A target entry price range.
7. A target exit price for taking profit.
8. A stop loss price for risk management.
9. An estimated trade timeline (e.g., "1-3 days", "2 weeks", "Intraday").
10. Key Fibonacci Retracement Levels based on the most recent significant swing high and swing low.

Your final output MUST be a single, valid JSON object with a single key "signals" which is an array of signal objects. Do not include any other text or formatting.
The number of objects in the "signals" array should be exactly {count}.
The JSON object for each signal must contain these exact keys: "assetName", "assetType", "signal", "analysis", "currentPrice", "entryPrice", "exitPrice", "stopLoss", "timeline", and "fibonacciLevels".
The "fibonacciLevels" object must contain keys for the 0% (swing high), 23.6%, 38.2%, 50%, 61.8%, 78.6%, and 100% (swing low) levels, with keys like "level_0", "level_23_6", etc.

Example JSON structure for a mixed request of "BTC" and "EURUSD":
{_SIGNALS_EXAMPLE}
"""


def build_news_prompt(asset_name: str, asset_type: AssetType) -> str:
    specialization = "cryptocurrency" if asset_type == "crypto" else "Forex markets"
    return f"""You are a financial analyst specializing in {specialization}. Your task is to analyze the absolute latest news and market sentiment for {asset_name}.
Use your web search capabilities to find breaking news, economic data releases, central bank statements, and social media sentiment from the last 24-48 hours.

Based on your findings, provide:
1. A "summary": A concise 2-3 sentence summary of the key news and sentiment drivers affecting {asset_name}.
2. An "outlook": A revised outlook based on the news. The outlook must be one of the following: "Bullish", "Slightly Bullish", "Neutral", "Slightly Bearish", "Bearish".

Your final output MUST be a single, valid JSON object with two keys: "summary" and "outlook". Do not include any other text or formatting.

Example JSON structure:
{_NEWS_EXAMPLE}
"""
