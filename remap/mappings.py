"""
Compile the user mapping table into a flat lookup of canonical declarations.

Rows look like {"color: #333": "color: #ddd"}. Keys starting with a macro
marker ("$border: ", "$background: ") expand into every longhand/shorthand
declaration that can carry that value; see MACROS.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import tinycss2

from remap.errors import MappingError
from remap.normalize import IMPORTANT_RE, normalize, strip_important

logger = logging.getLogger(__name__)

DEFAULT_LIMIT_SPECIAL = 25


@dataclass(frozen=True)
class Declaration:
    property: str
    value: str
    important: bool = False
    text: str = ""

    def render(self, important: bool = False) -> str:
        """The replacement as the user wrote it, plus !important for the important variant."""
        text = self.text or f"{self.property}: {self.value}"
        if important and not self.important:
            text += " !important"
        return text


@dataclass(frozen=True)
class MappingEntry:
    property: str
    canonical: str
    important: bool
    display_from: str
    to_text: str
    to_declarations: Tuple[Declaration, ...]

    @property
    def key(self) -> str:
        return f"{self.display_from} !important" if self.important else self.display_from

    def declarations(self) -> List[str]:
        return [d.render(self.important) for d in self.to_declarations]


@dataclass(frozen=True)
class MacroTemplate:
    source: str
    target: str
    per_width: bool = False

    def expand(self, old: str, new: str, width: int = 0) -> Tuple[str, str]:
        return (self.source.format(old=old, n=width), self.target.format(new=new))


def _border_templates() -> List[MacroTemplate]:
    rows = [
        MacroTemplate("border-color: {old}", "border-color: {new}"),
        MacroTemplate("border: solid {old}", "border-color: {new}"),
        MacroTemplate("border: dashed {old}", "border-color: {new}"),
    ]
    for side in ("top", "bottom", "left", "right"):
        rows.append(MacroTemplate(f"border-{side}-color: {{old}}", f"border-{side}-color: {{new}}"))
    for side in ("", "-top", "-bottom", "-left", "-right"):
        for style in ("solid", "dashed"):
            rows.append(MacroTemplate(
                f"border{side}: {{n}}px {style} {{old}}", f"border{side}-color: {{new}}", per_width=True))
    return rows


def _background_templates() -> List[MacroTemplate]:
    rows = []
    for prop in ("background", "background-color", "background-image"):
        rows.append(MacroTemplate(f"{prop}: {{old}}", f"{prop}: {{new}}"))
        if prop != "background-color":
            rows.append(MacroTemplate(f"{prop}: {{old}} none", f"{prop}: {{new}}"))
            rows.append(MacroTemplate(f"{prop}: none {{old}}", f"{prop}: {{new}}"))
    return rows


# macro marker -> declaration templates; a new shorthand family is a new row
MACROS: Dict[str, List[MacroTemplate]] = {
    "$border: ": _border_templates(),
    "$background: ": _background_templates(),
}


def macro_for(key: str) -> Optional[str]:
    for marker in MACROS:
        if key.startswith(marker):
            return marker
    return None


def expand_macro(marker: str, old: str, new: str, limit_special: int = DEFAULT_LIMIT_SPECIAL) -> List[Tuple[str, str]]:
    """Concrete (from, to) rows for one macro key. Per-width rows run 1..limit_special."""
    templates = MACROS[marker]
    rows = [t.expand(old, new) for t in templates if not t.per_width]
    per_width = [t for t in templates if t.per_width]
    for n in range(1, limit_special + 1):
        rows.extend(t.expand(old, new, n) for t in per_width)
    return rows


def split_declaration_text(text: str) -> List[str]:
    """Top-level ";" split; semicolons inside parentheses or quotes (data: URLs) stay put."""
    parts = []
    buf = []
    depth = 0
    quote = None
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        elif ch == ";" and depth == 0:
            parts.append("".join(buf).strip())
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf).strip())
    return [p for p in parts if p]


def parse_declarations(text: str) -> Tuple[Declaration, ...]:
    """Split a replacement like "color: #fff; background: none" into declarations, keeping each one's text."""
    out = []
    for part in split_declaration_text(text):
        nodes = tinycss2.parse_declaration_list(part, skip_comments=True, skip_whitespace=True)
        for node in nodes:
            if node.type == "error":
                raise MappingError(f"invalid replacement declaration {part!r}: {node.message}")
            if node.type != "declaration":
                continue
            value = tinycss2.serialize(node.value).strip()
            if value:
                out.append(Declaration(node.name, value, bool(node.important), part))
    return tuple(out)


class MappingTable:
    """Compiled mapping rows in table order, indexed for matching."""

    def __init__(self):
        self.entries: List[MappingEntry] = []
        self._by_property: Dict[str, Dict[Tuple[str, bool], MappingEntry]] = {}
        self._by_key: Dict[str, MappingEntry] = {}

    def add(self, entry: MappingEntry) -> None:
        self.entries.append(entry)
        # later rows win on collisions
        self._by_property.setdefault(entry.property, {})[(entry.canonical, entry.important)] = entry
        self._by_key[entry.key] = entry

    def has_property(self, prop: str) -> bool:
        return prop in self._by_property

    def lookup(self, prop: str, canonical: str, important: bool = False) -> Optional[MappingEntry]:
        return self._by_property.get(prop, {}).get((canonical, important))

    def get(self, key: str) -> Optional[MappingEntry]:
        return self._by_key.get(key)

    def keys(self) -> List[str]:
        seen = set()
        out = []
        for entry in self.entries:
            if entry.key not in seen:
                seen.add(entry.key)
                out.append(entry.key)
        return out

    def __iter__(self) -> Iterator[MappingEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _add_row(table: MappingTable, from_text: str, to_text: str) -> None:
    prop, sep, value = from_text.partition(":")
    prop = prop.strip().lower()
    if not sep or not prop or not strip_important(value):
        raise MappingError(f"mapping key {from_text!r} is not a 'property: value' declaration")
    to_declarations = parse_declarations(to_text)
    if not to_declarations:
        logger.debug("skip mapping %r: empty replacement", from_text)
        return

    important = bool(IMPORTANT_RE.search(value))
    canonical = normalize(value, prop)
    display = f"{prop}: {strip_important(value)}"
    table.add(MappingEntry(prop, canonical, important, display, to_text, to_declarations))
    if not important:
        table.add(MappingEntry(prop, canonical, True, display, to_text, to_declarations))


def compile_mappings(raw: Mapping[str, str], limit_special: int = DEFAULT_LIMIT_SPECIAL) -> MappingTable:
    table = MappingTable()
    for from_text, to_text in raw.items():
        to_text = (to_text or "").strip()
        marker = macro_for(from_text)
        if marker:
            old = from_text[len(marker):].strip()
            if not old:
                raise MappingError(f"macro {from_text!r} has no value to match")
            if not to_text:
                logger.debug("skip macro %r: empty replacement", from_text)
                continue
            for src, dst in expand_macro(marker, old, to_text.rstrip(";").strip(), limit_special):
                _add_row(table, src, dst)
            continue
        if not to_text:
            logger.debug("skip mapping %r: empty replacement", from_text)
            continue
        _add_row(table, from_text, to_text)
    logger.debug("compiled %d mapping entries from %d rows", len(table), len(raw))
    return table
