from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Pattern

ORDERS = ("mappings", "source")


@dataclass
class RemapOptions:
    indent_declaration: int = 2
    indent_css: int = 0
    line_length: int = 80
    ignore_selectors: List[Any] = field(default_factory=list)
    limit_special: int = 25
    device_type: str = "screen"
    device_width: str = "1024px"
    comments: bool = False
    stylistic: bool = False
    order: str = "mappings"
    combine: bool = True

    def __post_init__(self):
        if self.order not in ORDERS:
            raise ValueError(f"order must be one of {', '.join(ORDERS)}, got {self.order!r}")
        self.ignore_selectors = [compile_pattern(p) for p in self.ignore_selectors or []]


@dataclass
class SourceSpec:
    css: str
    prefix: Optional[str] = None
    match: List[str] = field(default_factory=list)
    device_type: Optional[str] = None
    device_width: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SourceSpec":
        return cls(
            css=data.get("css") or "",
            prefix=data.get("prefix") or None,
            match=list(data.get("match") or []),
            device_type=data.get("device_type") or data.get("deviceType"),
            device_width=data.get("device_width") or data.get("deviceWidth"),
            name=data.get("name"),
        )


def compile_pattern(pattern) -> Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    return environ.get(name, "true" if default else "false").lower() == "true"


def _env_list(environ: Mapping[str, str], name: str) -> List[str]:
    return [s.strip() for s in environ.get(name, "").split(",") if s.strip()]


def options_from_env(environ: Optional[Mapping[str, str]] = None, **overrides) -> RemapOptions:
    """Options from REMAP_* variables; keyword overrides (e.g. CLI flags) win when not None."""
    env = os.environ if environ is None else environ
    defaults = RemapOptions()
    values = {
        "indent_declaration": int(env.get("REMAP_INDENT_DECLARATION", defaults.indent_declaration)),
        "indent_css": int(env.get("REMAP_INDENT_CSS", defaults.indent_css)),
        "line_length": int(env.get("REMAP_LINE_LENGTH", defaults.line_length)),
        "ignore_selectors": _env_list(env, "REMAP_IGNORE_SELECTORS"),
        "limit_special": int(env.get("REMAP_LIMIT_SPECIAL", defaults.limit_special)),
        "device_type": env.get("REMAP_DEVICE_TYPE", defaults.device_type),
        "device_width": env.get("REMAP_DEVICE_WIDTH", defaults.device_width),
        "comments": _env_bool(env, "REMAP_COMMENTS", defaults.comments),
        "stylistic": _env_bool(env, "REMAP_STYLISTIC", defaults.stylistic),
        "order": env.get("REMAP_ORDER", defaults.order).lower(),
        "combine": _env_bool(env, "REMAP_COMBINE", defaults.combine),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return RemapOptions(**values)
