"""URL slugs for articles and tags."""

import re
import unicodedata

from sqlalchemy import select
from sqlalchemy.orm import Session

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int = 255) -> str:
    """'Réglage de la suspension' -> 'reglage-de-la-suspension'."""
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_ALNUM.sub("-", ascii_text.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "untitled"


def unique_slug(
    db: Session,
    model: type,
    text: str,
    exclude_id: int | None = None,
    max_length: int = 255,
) -> str:
    """Slugify text and append -2, -3, ... until no other row of model uses it."""
    base = slugify(text, max_length=max_length - 4)
    candidate = base
    suffix = 2
    while True:
        stmt = select(model.id).where(model.slug == candidate)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        if db.scalar(stmt) is None:
            return candidate
        candidate = f"{base}-{suffix}"
        suffix += 1
