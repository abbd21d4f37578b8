from __future__ import annotations
"""XFDF document builder for the mcpdf filler.

build_xfdf(text_values, button_values, order) -> bytes
"""
import html
from typing import Dict, Iterable, List, Optional

XFDF_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="no"?><xfdf><fields>'
XFDF_FOOTER = '</fields></xfdf>'

BUTTON_ON = "Yes"
BUTTON_OFF = "Off"


def _ordered_keys(keys: Iterable[str], order: Optional[List[str]]) -> List[str]:
    keys = list(keys)
    if not order:
        return keys
    rank = {name: i for i, name in enumerate(order)}
    # Unranked keys go last, in the caller's insertion order
    return sorted(keys, key=lambda k: rank.get(k, len(rank)))


def _field(name: str, value: str) -> str:
    return f'<field name="{html.escape(name)}"><value>{html.escape(value)}</value></field>'


def build_xfdf(text_values: Dict[str, str], button_values: Dict[str, bool],
               order: Optional[List[str]] = None) -> bytes:
    """Serialize fill values as a minimal XFDF document.

    Text entries come first, then buttons (True -> Yes, False -> Off). Within
    each group, keys follow `order` when given. Names and values are markup
    escaped.
    """
    parts = [XFDF_HEADER, "\n"]
    for key in _ordered_keys(text_values, order):
        parts.append(_field(key, text_values[key]))
    for key in _ordered_keys(button_values, order):
        parts.append(_field(key, BUTTON_ON if button_values[key] else BUTTON_OFF))
    parts.append(XFDF_FOOTER)
    parts.append("\n")
    return "".join(parts).encode("utf-8")
