"""
Match source stylesheet declarations against a compiled mapping table.

The result of one source is a MatchAssociation: an insertion-ordered dict from
mapping key ("color: red" or "color: red !important") to the set of selectors
whose rules carried a matching declaration.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Set, Tuple

import tinycss2

from remap.config import RemapOptions, SourceSpec
from remap.errors import StylesheetError
from remap.mappings import MappingTable
from remap.media import media_matches
from remap.normalize import normalize
from remap.selectors import rewrite_selector

logger = logging.getLogger(__name__)

MatchAssociation = Dict[str, Set[str]]

# at-rules whose body is a list of style rules; only @media is filtered
CONTAINER_AT_RULES = ("media", "supports", "layer")


def split_selectors(prelude) -> List[str]:
    """Top-level comma split of a rule prelude; commas inside :is(...) etc. stay put."""
    groups: List[list] = [[]]
    for token in prelude:
        if token.type == "comment":
            continue
        if token.type == "literal" and token.value == ",":
            groups.append([])
            continue
        groups[-1].append(token)
    selectors = []
    for tokens in groups:
        text = " ".join(tinycss2.serialize(tokens).split())
        if text:
            selectors.append(text)
    return selectors


def rule_declarations(content) -> List[Tuple[str, str, bool]]:
    """(property, value, important) of a rule body; a repeated property keeps only its last value."""
    decls: Dict[str, Tuple[str, bool]] = {}
    for node in tinycss2.parse_declaration_list(content or [], skip_comments=True, skip_whitespace=True):
        if node.type != "declaration":
            continue
        value = tinycss2.serialize(node.value).strip()
        decls.pop(node.lower_name, None)
        decls[node.lower_name] = (value, bool(node.important))
    return [(prop, value, important) for prop, (value, important) in decls.items()]


def _media_applies(query: str, device_type: str, device_width: str) -> bool:
    try:
        return media_matches(query, device_type, device_width)
    except ValueError as e:
        # a query we cannot evaluate keeps its rules
        logger.info("media query %r could not be evaluated (%s); including its rules", query, e)
        return True


def iter_rules(nodes, device_type: str, device_width: str) -> Iterator[Tuple[List[str], List[Tuple[str, str, bool]]]]:
    for node in nodes:
        if node.type == "error":
            raise StylesheetError(f"line {node.source_line}: {node.message}")
        if node.type == "at-rule":
            if node.lower_at_keyword not in CONTAINER_AT_RULES or node.content is None:
                continue
            if node.lower_at_keyword == "media":
                query = " ".join(tinycss2.serialize(node.prelude).split())
                if not _media_applies(query, device_type, device_width):
                    logger.debug("skip @media %s", query)
                    continue
            inner = tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True)
            yield from iter_rules(inner, device_type, device_width)
        elif node.type == "qualified-rule":
            yield split_selectors(node.prelude), rule_declarations(node.content)


def parse_stylesheet(css_text: str, device_type: str = "screen", device_width: str = "1024px"):
    """(selectors, declarations) of every rule that applies to the device, in source order."""
    nodes = tinycss2.parse_stylesheet(css_text or "", skip_comments=True, skip_whitespace=True)
    return list(iter_rules(nodes, device_type, device_width))


def match_source(source: SourceSpec, table: MappingTable, options: RemapOptions) -> MatchAssociation:
    device_type = source.device_type or options.device_type
    device_width = source.device_width or options.device_width
    assoc: MatchAssociation = {}
    for selectors, declarations in parse_stylesheet(source.css, device_type, device_width):
        for prop, value, important in declarations:
            if not value or not table.has_property(prop):
                continue
            entry = table.lookup(prop, normalize(value, prop), important)
            if entry is None:
                continue
            bucket = assoc.setdefault(entry.key, set())
            for selector in selectors:
                rewritten = rewrite_selector(
                    selector,
                    prefix=source.prefix,
                    exemptions=source.match,
                    ignore=options.ignore_selectors,
                    stylistic=options.stylistic,
                )
                if rewritten is not None:
                    bucket.add(rewritten)
    logger.debug("source %s: %d mapping keys matched", source.name or "<inline>", len(assoc))
    return assoc


def merge_associations(assocs: Iterable[MatchAssociation]) -> MatchAssociation:
    merged: MatchAssociation = {}
    for assoc in assocs:
        for key, selectors in assoc.items():
            merged.setdefault(key, set()).update(selectors)
    return merged
