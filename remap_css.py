#!/usr/bin/env python3
"""
Generate an override stylesheet from source stylesheets and a mapping table.

  python remap_css.py --mappings mappings.json --source https://example.com/site.css --prefix "html.dark"
  python remap_css.py --mappings mappings.json --sources sources.json --output dark.css --comments

Options fall back to REMAP_* variables (a .env file is honoured), then defaults.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from remap.config import SourceSpec, options_from_env
from remap.errors import RemapError
from remap.pipeline import remap_css
from remap.sources import load_mappings_file, load_sources_file, load_text


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Build an override stylesheet from CSS sources and declaration mappings.")
    p.add_argument("--mappings", required=True, help="JSON object of 'property: value' -> replacement declaration(s)")
    p.add_argument("--source", action="append", default=[], help="Stylesheet path or URL (repeatable)")
    p.add_argument("--sources", help="JSON list of sources with url/path, prefix, match")
    p.add_argument("--prefix", help="Selector prefix for --source stylesheets (e.g. 'html.dark')")
    p.add_argument("--match", action="append", default=[], help="Selector start exempt from --prefix (repeatable)")
    p.add_argument("--output", help="Write CSS here instead of stdout")
    p.add_argument("--comments", action="store_true", default=None, help="Annotate rules with the mapping they came from (fallback: env REMAP_COMMENTS)")
    p.add_argument("--stylistic", action="store_true", default=None, help="Canonicalize selector spacing and quotes (fallback: env REMAP_STYLISTIC)")
    p.add_argument("--order", choices=["mappings", "source"], help="Rule order (fallback: env REMAP_ORDER, default: mappings)")
    p.add_argument("--no-combine", dest="combine", action="store_false", default=None, help="One rule per selector")
    p.add_argument("--indent-declaration", type=int, help="Declaration indent (default: 2)")
    p.add_argument("--indent-css", type=int, help="Indent every output line by N spaces (default: 0)")
    p.add_argument("--line-length", type=int, help="Wrap selector lists at N columns (default: 80)")
    p.add_argument("--ignore-selector", action="append", help="Regex of selectors to drop (repeatable)")
    p.add_argument("--limit-special", type=int, help="Pixel widths generated for $border macros (default: 25)")
    p.add_argument("--device-type", help="Media type for @media evaluation (default: screen)")
    p.add_argument("--device-width", help="Viewport width for @media evaluation (default: 1024px)")
    p.add_argument("--timeout", type=float, default=30, help="HTTP timeout in seconds")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv=None):
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    if not args.source and not args.sources:
        raise SystemExit("No stylesheets: pass --source and/or --sources")

    try:
        options = options_from_env(
            indent_declaration=args.indent_declaration,
            indent_css=args.indent_css,
            line_length=args.line_length,
            ignore_selectors=args.ignore_selector,
            limit_special=args.limit_special,
            device_type=args.device_type,
            device_width=args.device_width,
            comments=args.comments,
            stylistic=args.stylistic,
            order=args.order,
            combine=args.combine,
        )
        mappings = load_mappings_file(args.mappings)
        sources = []
        if args.sources:
            sources.extend(load_sources_file(args.sources, timeout=args.timeout))
        for location in args.source:
            sources.append(SourceSpec(
                css=load_text(location, timeout=args.timeout),
                prefix=args.prefix,
                match=args.match,
                name=location,
            ))
        css = remap_css(sources, mappings, options)
    except (RemapError, ValueError) as e:
        raise SystemExit(f"[REMAP] {e}")

    if args.output:
        Path(args.output).write_text(css + "\n" if css else "", encoding="utf-8")
        print(f"[REMAP] {len(sources)} sources, {len(mappings)} mappings -> {args.output}", file=sys.stderr)
    else:
        print(css)


if __name__ == "__main__":
    main()
