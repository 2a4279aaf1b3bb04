from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from remap.config import RemapOptions, SourceSpec
from remap.mappings import compile_mappings
from remap.matcher import match_source, merge_associations
from remap.render import render

logger = logging.getLogger(__name__)


def remap_css(
    sources: Iterable[Union[SourceSpec, Mapping[str, Any]]],
    mappings: Mapping[str, str],
    options: Optional[Union[RemapOptions, Mapping[str, Any]]] = None,
) -> str:
    """Override stylesheet for every declaration in `sources` matched by `mappings`."""
    if options is None:
        options = RemapOptions()
    elif not isinstance(options, RemapOptions):
        options = RemapOptions(**options)

    table = compile_mappings(mappings, options.limit_special)
    specs = [s if isinstance(s, SourceSpec) else SourceSpec.from_dict(s) for s in sources]
    assoc = merge_associations(match_source(spec, table, options) for spec in specs)
    logger.info("matched %d mapping keys across %d sources", len(assoc), len(specs))
    return render(assoc, table, options)
