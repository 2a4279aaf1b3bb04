"""Load stylesheets, mapping tables and source lists from disk or over HTTP."""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from remap.config import SourceSpec
from remap.errors import SourceError

logger = logging.getLogger(__name__)

HTML_SNIFF_RE = re.compile(r"^\s*(<!doctype html|<html|<head|<style)", re.I)
HTML_SUFFIXES = {".html", ".htm"}


def is_url(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def fetch_url(url: str, timeout: float = 30) -> str:
    logger.info("GET %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"failed to fetch {url}: {e}") from e
    return resp.text


def looks_like_html(location: str, text: str) -> bool:
    suffix = Path(urlparse(location).path).suffix.lower()
    return suffix in HTML_SUFFIXES or bool(HTML_SNIFF_RE.match(text))


def extract_style_blocks(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    return "\n".join(tag.get_text() for tag in soup.find_all("style"))


def load_text(location: str, timeout: float = 30) -> str:
    """Stylesheet text from a URL or a file; HTML pages contribute their <style> blocks."""
    if is_url(location):
        text = fetch_url(location, timeout=timeout)
    else:
        path = Path(location)
        if not path.is_file():
            raise SourceError(f"source not found: {location}")
        text = path.read_text(encoding="utf-8", errors="ignore")
    if looks_like_html(location, text):
        text = extract_style_blocks(text)
    return text


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SourceError(f"file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SourceError(f"{path}: invalid JSON: {e}") from e


def load_mappings_file(path) -> Dict[str, str]:
    data = _read_json(Path(path))
    if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
        raise SourceError(f"{path}: mappings must be a JSON object of strings")
    return data


def load_sources_file(path, timeout: float = 30) -> List[SourceSpec]:
    """
    Sources list, e.g.
      [{"url": "https://example.com/site.css", "prefix": "html.dark", "match": [".btn"]},
       {"path": "local.css"}]
    Relative paths resolve against the sources file's directory.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, list):
        raise SourceError(f"{path}: sources must be a JSON list")
    specs = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise SourceError(f"{path}: entry {i} is not an object")
        location: Optional[str] = item.get("url") or item.get("path")
        if item.get("css") is None and not location:
            raise SourceError(f"{path}: entry {i} needs one of css, url or path")
        if item.get("css") is None:
            if not is_url(location) and not Path(location).is_absolute():
                location = str(path.parent / location)
            item = dict(item, css=load_text(location, timeout=timeout))
        spec = SourceSpec.from_dict(item)
        spec.name = spec.name or location or f"{path.name}[{i}]"
        specs.append(spec)
    return specs
