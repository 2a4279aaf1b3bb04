from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Tuple, Union

STRING_RE = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"", re.S)
PSEUDO_ELEMENT_RE = re.compile(r"(?<![:\\]):(before|after)(?![\w-])", re.I)
VENDOR_RE = re.compile(r"::?-(moz|webkit|ms)-", re.I)
VENDORS = ("moz", "webkit", "ms")

PatternLike = Union[str, Pattern[str]]


def _split_strings(selector: str) -> List[Tuple[bool, str]]:
    """(is_string, text) segments, in order."""
    parts = []
    pos = 0
    for m in STRING_RE.finditer(selector):
        if m.start() > pos:
            parts.append((False, selector[pos:m.start()]))
        parts.append((True, m.group(0)))
        pos = m.end()
    if pos < len(selector):
        parts.append((False, selector[pos:]))
    return parts


def _double_quoted(text: str) -> str:
    if text.startswith("'") and '"' not in text[1:-1]:
        return '"' + text[1:-1].replace("\\'", "'") + '"'
    return text


def _space_combinators(text: str, depth: int) -> Tuple[str, int]:
    out = []
    for i, ch in enumerate(text):
        escaped = i > 0 and text[i - 1] == "\\"
        if ch == "[" and not escaped:
            depth += 1
        elif ch == "]" and depth and not escaped:
            depth -= 1
        combinator = ch in "+>" or (ch == "~" and text[i + 1:i + 2] != "=")
        if combinator and depth == 0 and not escaped:
            out.append(f" {ch} ")
        else:
            out.append(ch)
    return "".join(out), depth


def stylize_selector(selector: str) -> str:
    """Cosmetic canonicalization: spaced combinators, double quotes, ::before/::after."""
    out = []
    depth = 0
    for is_string, text in _split_strings(selector):
        if is_string:
            out.append(_double_quoted(text))
            continue
        text, depth = _space_combinators(text, depth)
        if depth == 0:
            text = PSEUDO_ELEMENT_RE.sub(r"::\1", text)
        out.append(re.sub(r" {2,}", " ", text))
    return re.sub(r" {2,}", " ", "".join(out)).strip()


def is_exempt(selector: str, exemptions: Iterable[str]) -> bool:
    parts = selector.split()
    first = parts[0] if parts else ""
    for match in exemptions or ():
        if not match:
            continue
        if first == match:
            return True
        if match[0] in ".#" and first.startswith(match):
            return True
    return False


def add_prefix(selector: str, prefix: str, exemptions: Iterable[str] = ()) -> str:
    if is_exempt(selector, exemptions):
        return selector
    # "html :root .x" never matches anything
    if prefix.startswith("html"):
        if selector == ":root":
            return prefix
        if selector.startswith(":root "):
            return f"{prefix} {selector[len(':root '):]}"
    return f"{prefix} {selector}"


def is_ignored(selector: str, ignore: Iterable[PatternLike]) -> bool:
    return any(re.search(pattern, selector) for pattern in ignore or ())


def rewrite_selector(
    selector: str,
    prefix: Optional[str] = None,
    exemptions: Iterable[str] = (),
    ignore: Iterable[PatternLike] = (),
    stylistic: bool = False,
) -> Optional[str]:
    """Selector to emit for a matched rule, or None when an ignore pattern excludes it."""
    if is_ignored(selector, ignore):
        return None
    if stylistic:
        selector = stylize_selector(selector)
    if prefix:
        selector = add_prefix(selector, prefix, exemptions)
    return selector


def vendor_of(selector: str) -> Optional[str]:
    m = VENDOR_RE.search(selector)
    return m.group(1).lower() if m else None
