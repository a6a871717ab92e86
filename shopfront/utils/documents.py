"""
Local handling of documents: server-rendered invoices/receipts and the
PDFs we render ourselves (reports, statements).

Files meant only for viewing go to a per-app temp folder that is pruned of
anything older than a day; downloads go wherever the user picks.
"""
from __future__ import annotations

import logging
import mimetypes
import os
import tempfile
import time
from importlib import resources as importlib_resources
from pathlib import Path

from jinja2 import Template

_log = logging.getLogger(__name__)

TEMP_DIR_NAME = "shopfront_documents"
MAX_AGE_SECONDS = 86400
TEMPLATES_PACKAGE = "shopfront.resources.templates"


def extension_for(content_type: str) -> str:
    ctype = (content_type or "").split(";")[0].strip().lower()
    if ctype == "application/pdf":
        return ".pdf"
    if ctype in ("text/html", "application/xhtml+xml"):
        return ".html"
    return mimetypes.guess_extension(ctype) or ".pdf"


def safe_name(name: str) -> str:
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in (name or "document"))


def temp_dir() -> Path:
    d = Path(tempfile.gettempdir()) / TEMP_DIR_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def prune_temp_dir(directory: Path, max_age: float = MAX_AGE_SECONDS) -> int:
    """Delete stale files; returns how many were removed."""
    now = time.time()
    removed = 0
    for p in directory.iterdir():
        if not p.is_file():
            continue
        try:
            if now - p.stat().st_mtime > max_age:
                p.unlink()
                removed += 1
        except OSError as e:
            _log.debug("Could not prune %s: %s", p, e)
    return removed


def write_temp_document(name: str, content: bytes, content_type: str = "application/pdf") -> Path:
    d = temp_dir()
    prune_temp_dir(d)
    path = d / f"{safe_name(name)}{extension_for(content_type)}"
    path.write_bytes(content)
    return path


def save_document(path: str | os.PathLike, content: bytes) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(content)
    _log.info("Saved document to %s", p)
    return p


# ---------------- local HTML/PDF rendering ----------------

def load_template(name: str) -> Template:
    tpl_str = importlib_resources.files(TEMPLATES_PACKAGE).joinpath(name).read_text(encoding="utf-8")
    return Template(tpl_str, autoescape=True)


def render_html(template_name: str, **context) -> str:
    return load_template(template_name).render(**context)


def write_pdf(html: str, path: str | os.PathLike) -> Path:
    from weasyprint import HTML  # heavy import; only when exporting

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    HTML(string=html).write_pdf(str(p))
    return p
