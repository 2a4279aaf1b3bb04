"""
Minimal media query evaluation against a device profile (type + width).

Only the media type and width features are known to the profile; any other
feature evaluates to false. Queries this module cannot read raise ValueError
so callers can decide what a broken query means for them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

BASE_FONT_PX = 16.0

QUERY_RE = re.compile(r"^(?:(only|not)\s+)?([a-z][a-z0-9-]*)?\s*(.*)$", re.I | re.S)
EXPR_RE = re.compile(r"\(\s*([_a-z-]+)\s*(?::\s*([^()]+?))?\s*\)", re.I)
LENGTH_RE = re.compile(r"^(-?\d*\.?\d+)\s*(px|em|rem)?$", re.I)


@dataclass
class MediaQuery:
    inverse: bool = False
    type: Optional[str] = None
    expressions: List[Tuple[Optional[str], str, Optional[str]]] = field(default_factory=list)


def to_px(length: str) -> float:
    m = LENGTH_RE.match(length.strip())
    if not m:
        raise ValueError(f"unsupported length: {length!r}")
    number = float(m.group(1))
    unit = (m.group(2) or "px").lower()
    if unit in ("em", "rem"):
        return number * BASE_FONT_PX
    return number


def split_query_list(text: str) -> List[str]:
    parts = []
    depth = 0
    buf = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(buf).strip())
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf).strip())
    return parts


def parse_query(text: str) -> MediaQuery:
    m = QUERY_RE.match(text.strip())
    if not m:
        raise ValueError(f"invalid media query: {text!r}")
    modifier, mtype, rest = m.group(1), m.group(2), m.group(3).strip()
    if mtype and mtype.lower() == "and":
        raise ValueError(f"invalid media query: {text!r}")

    expressions = []
    for expr in EXPR_RE.finditer(rest):
        feature = expr.group(1).lower()
        prefix = None
        if feature.startswith(("min-", "max-")):
            prefix, feature = feature[:3], feature[4:]
        expressions.append((prefix, feature, expr.group(2)))

    # whatever is left between the expressions must be "and" joiners
    joiners = EXPR_RE.sub(" ", rest).split()
    if any(j.lower() != "and" for j in joiners):
        raise ValueError(f"invalid media query: {text!r}")
    expected = len(expressions) if mtype else max(len(expressions) - 1, 0)
    if len(joiners) != expected or (mtype is None and not expressions):
        raise ValueError(f"invalid media query: {text!r}")

    return MediaQuery(
        inverse=(modifier or "").lower() == "not",
        type=mtype.lower() if mtype else None,
        expressions=expressions,
    )


def _expression_matches(prefix: Optional[str], feature: str, value: Optional[str], width_px: float) -> bool:
    if feature != "width":
        return False
    if value is None:
        return width_px > 0
    wanted = to_px(value)
    if prefix == "min":
        return width_px >= wanted
    if prefix == "max":
        return width_px <= wanted
    return width_px == wanted


def query_matches(query: MediaQuery, device_type: str, width_px: float) -> bool:
    type_match = query.type in (None, "all") or query.type == device_type.lower()
    result = type_match and all(_expression_matches(p, f, v, width_px) for p, f, v in query.expressions)
    return not result if query.inverse else result


def media_matches(media: str, device_type: str = "screen", device_width: str = "1024px") -> bool:
    """True when any query of the comma separated list matches. Raises ValueError on unreadable input."""
    media = (media or "").strip()
    if not media:
        return True
    width_px = to_px(str(device_width))
    queries = [parse_query(q) for q in split_query_list(media)]
    return any(query_matches(q, device_type, width_px) for q in queries)
