import json

FIB = {
    "level_0": "$73,777",
    "level_23_6": "$70,100",
    "level_38_2": "$67,950",
    "level_50": "$66,200",
    "level_61_8": "$64,450",
    "level_78_6": "$62,100",
    "level_100": "$58,623",
}


def signal_obj(name="Bitcoin (BTC)", signal="Buy", asset_type="crypto", **extra):
    obj = {
        "assetName": name,
        "assetType": asset_type,
        "signal": signal,
        "analysis": f"{name} analysis.",
        "currentPrice": "$100",
        "entryPrice": "$95 - $100",
        "exitPrice": "$120",
        "stopLoss": "$90",
        "timeline": "1-2 weeks",
    }
    obj.update(extra)
    return obj


def signals_text(*objs, fenced=False):
    text = json.dumps({"signals": list(objs)})
    if fenced:
        return "```json\n" + text + "\n```"
    return text
