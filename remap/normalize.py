"""
Canonical comparison keys for CSS declaration values.

Two declarations match a mapping row when their values normalize to the same
string. The steps below run strictly in order, each one on the output of the
previous step:

 1. drop a trailing !important and collapse whitespace
 2. drop the redundant zero in 0.5 -> .5 (also inside function arguments)
 3. drop whitespace after commas inside function calls
 4. named colors -> hex
 5. hex colors -> #rrggbbaa
 6. lower-case everything except url(...) bodies (content keeps its case)
 7. sort the tokens of shorthand values

Step 7 is a heuristic: comma separated multi-layer values (several
backgrounds or transitions) are not order-normalized correctly.
"""
from __future__ import annotations

import re
from typing import List

from tinycss2.color3 import parse_color

from remap.shorthands import is_shorthand

IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.I)
LEADING_ZERO_RE = re.compile(r"(?<![\w.])0(\.[0-9])")
HEX_RE = re.compile(r"#[0-9a-fA-F]+")
NAME_RE = re.compile(r"[a-zA-Z]+")
URL_RE = re.compile(r"url\((.*?)\)", re.I | re.S)


def strip_important(value: str) -> str:
    value = IMPORTANT_RE.sub("", value or "")
    return re.sub(r"\s+", " ", value).strip()


def strip_leading_zeros(value: str) -> str:
    return LEADING_ZERO_RE.sub(lambda m: m.group(1), value)


def tighten_function_args(value: str) -> str:
    """rgba(0, 0, 0, .5) -> rgba(0,0,0,.5); commas outside parentheses keep their spacing."""
    out = []
    depth = 0
    i = 0
    n = len(value)
    while i < n:
        ch = value[i]
        out.append(ch)
        if ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        elif ch == "," and depth:
            while i + 1 < n and value[i + 1].isspace():
                i += 1
        i += 1
    return "".join(out)


def split_tokens(value: str) -> List[str]:
    """Split on spaces outside parentheses and quotes; url(...) and calc(...) stay whole."""
    tokens = []
    buf = []
    depth = 0
    quote = None
    for ch in value:
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        elif ch == " " and depth == 0:
            tokens.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    tokens.append("".join(buf))
    return tokens


def named_color_hex(value: str) -> str | None:
    if not NAME_RE.fullmatch(value):
        return None
    color = parse_color(value.lower())
    # currentColor comes back as a plain string
    if color is None or isinstance(color, str):
        return None
    r, g, b, a = (int(round(c * 255)) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def normalize_hex_color(value: str) -> str:
    digits = value[1:]
    if len(digits) in (3, 4):
        alpha = digits[3] if len(digits) == 4 else "f"
        return "#" + "".join(c * 2 for c in digits[:3] + alpha)
    if len(digits) == 6:
        return f"{value}ff"
    return value


def lower_outside_urls(value: str) -> str:
    parts = []
    pos = 0
    for m in URL_RE.finditer(value):
        parts.append(value[pos:m.start()].lower())
        parts.append(f"url({m.group(1)})")
        pos = m.end()
    parts.append(value[pos:].lower())
    return "".join(parts)


def normalize(value: str, prop: str) -> str:
    prop = (prop or "").strip().lower()
    value = strip_important(value)
    value = strip_leading_zeros(value)
    value = tighten_function_args(value)

    named = named_color_hex(value)
    if named:
        value = named

    if HEX_RE.fullmatch(value):
        value = normalize_hex_color(value)

    if prop != "content":
        value = lower_outside_urls(value)

    if is_shorthand(prop):
        value = " ".join(sorted(split_tokens(value)))

    return value
