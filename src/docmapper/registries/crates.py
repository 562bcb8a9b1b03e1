"""crates.io handler."""

from __future__ import annotations

import requests

from .base import get_json, quote_segment

API_URL = "https://crates.io/api/v1/crates"
DOCS_URL = "https://docs.rs"


def describe(session: requests.Session, name: str, version: str) -> str | None:
    data = get_json(session, f"{API_URL}/{quote_segment(name)}", registry="Crates.io")
    crate = data.get("crate") if isinstance(data, dict) else None
    if not isinstance(crate, dict):
        return None
    return crate.get("description") or None


def docs_url(session: requests.Session, name: str, version: str) -> str | None:
    # docs.rs resolves requirement strings like "1.0" and the literal "latest".
    target = version if version and version != "*" else "latest"
    return f"{DOCS_URL}/{quote_segment(name)}/{quote_segment(target)}/"
