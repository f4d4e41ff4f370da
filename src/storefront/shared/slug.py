"""URL slugs for shop storefronts."""

import random
import re
import string

MAX_SLUG_LENGTH = 50
DEFAULT_SLUG = "shop"

_BASE36 = string.digits + string.ascii_lowercase


def slugify(name: str) -> str:
    """Lower-case ASCII slug: word characters, single hyphens, at most 50 characters."""
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug[:MAX_SLUG_LENGTH].strip("-")
    return slug or DEFAULT_SLUG


def random_suffix(length: int = 4, rng: random.Random | None = None) -> str:
    rng = rng or random
    return "".join(rng.choice(_BASE36) for _ in range(length))


def is_url_safe(slug: str) -> bool:
    return bool(re.fullmatch(r"[a-z0-9_]+(?:-[a-z0-9_]+)*", slug or ""))
