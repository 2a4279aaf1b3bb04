"""
Turn merged match associations into the final override stylesheet.

Rules are built as plain objects first (one group per mapping key, or per
selector when combine is off), cleaned up, then unparsed by format_rule.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from remap.config import RemapOptions
from remap.mappings import MappingTable
from remap.matcher import MatchAssociation
from remap.selectors import VENDORS, vendor_of

COMMENT_BEGIN = "/* begin remap rules */"
COMMENT_END = "/* end remap rules */"


@dataclass
class RenderedRule:
    selectors: List[str]
    declarations: List[str]


@dataclass
class RuleGroup:
    origins: List[str]
    rules: List[RenderedRule] = field(default_factory=list)

    def selectors(self) -> List[str]:
        return [s for rule in self.rules for s in rule.selectors]


def vendor_split(selectors: List[str]) -> List[List[str]]:
    """Plain selectors first, then one list per vendor (-moz-, -webkit-, -ms-)."""
    buckets = [[s for s in selectors if vendor_of(s) is None]]
    for vendor in VENDORS:
        buckets.append([s for s in selectors if vendor_of(s) == vendor])
    return [b for b in buckets if b]


def build_groups(assoc: MatchAssociation, table: MappingTable, options: RemapOptions) -> List[RuleGroup]:
    keys = table.keys() if options.order == "mappings" else list(assoc)
    groups = []
    for key in keys:
        entry = table.get(key)
        selectors = sorted(assoc.get(key) or ())
        if entry is None or not selectors:
            continue
        declarations = entry.declarations()
        if options.combine:
            rules = [RenderedRule(chunk, declarations) for chunk in vendor_split(selectors)]
            groups.append(RuleGroup([key], rules))
        else:
            for selector in selectors:
                groups.append(RuleGroup([key], [RenderedRule([selector], declarations)]))
    return groups


def postprocess(groups: List[RuleGroup]) -> List[RuleGroup]:
    out: List[RuleGroup] = []
    previous: Optional[RenderedRule] = None
    for group in groups:
        rules = []
        for rule in group.rules:
            if not rule.selectors:
                continue
            if rule == previous:
                continue
            rules.append(rule)
            previous = rule
        if not rules:
            # still name the mapping on the group that produced the output
            if out and set(group.selectors()) == set(out[-1].selectors()):
                _add_origins(out[-1], group.origins)
            continue
        group = RuleGroup(list(group.origins), rules)
        if out and set(out[-1].selectors()) == set(group.selectors()):
            _add_origins(out[-1], group.origins)
            out[-1].rules.extend(group.rules)
        else:
            out.append(group)
    return out


def _add_origins(group: RuleGroup, origins: List[str]) -> None:
    for origin in origins:
        if origin not in group.origins:
            group.origins.append(origin)


def wrap_selectors(selectors: List[str], line_length: int) -> List[str]:
    """Greedily pack "a, b, c" per line; a selector that would overflow starts a new line."""
    lines: List[str] = []
    current = ""
    for i, selector in enumerate(selectors):
        # a line that is followed by another one ends with ","
        comma = 0 if i == len(selectors) - 1 else 1
        if not current:
            current = selector
        elif len(current) + 2 + len(selector) + comma > line_length:
            lines.append(current + ",")
            current = selector
        else:
            current = f"{current}, {selector}"
    lines.append(current)
    return lines


def format_rule(rule: RenderedRule, options: RemapOptions) -> List[str]:
    lines = wrap_selectors(rule.selectors, options.line_length)
    lines[-1] += " {"
    pad = " " * options.indent_declaration
    lines.extend(f"{pad}{decl};" for decl in rule.declarations)
    lines.append("}")
    return lines


def provenance_comment(origins: List[str]) -> str:
    names = ", ".join('"{}"'.format(o.replace("*/", "* /")) for o in origins)
    noun = "rule" if len(origins) == 1 else "rules"
    return f"/* remap {noun} for {names} */"


def render(assoc: MatchAssociation, table: MappingTable, options: Optional[RemapOptions] = None) -> str:
    options = options or RemapOptions()
    groups = postprocess(build_groups(assoc, table, options))
    if not groups:
        return ""

    lines = [COMMENT_BEGIN] if options.comments else []
    for group in groups:
        if options.comments:
            lines.append(provenance_comment(group.origins))
        for rule in group.rules:
            lines.extend(format_rule(rule, options))
    if options.comments:
        lines.append(COMMENT_END)

    indent = " " * options.indent_css
    return "\n".join(f"{indent}{line}" for line in lines if line.strip())
