"""Terminal presentation layer: tag input, price conversion, card rendering."""

from .currency import DEFAULT_USD_TO_CAD_RATE, convert_price_to_cad
from .render import outlook_tone, render_signal, render_sources, signal_tone
from .tag_input import TagInput, split_tags

__all__ = [
    "DEFAULT_USD_TO_CAD_RATE",
    "convert_price_to_cad",
    "outlook_tone",
    "render_signal",
    "render_sources",
    "signal_tone",
    "TagInput",
    "split_tags",
]
