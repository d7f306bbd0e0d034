"""Input sanitizers for user- and admin-supplied text."""

import re
from urllib.parse import urlsplit, urlunsplit

import bleach

# Word characters, whitespace, the Arabic blocks and basic punctuation survive
_DISALLOWED_CHARS = re.compile(
    r"[^\w\s\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDCF\uFDF0-\uFDFF\uFE70-\uFEFF.,!?:;\-']"
)
_WHITESPACE = re.compile(r"\s+")
_ANGLE_BRACKETS = re.compile(r"[<>]")

# Markup allowed in article bodies; everything else is stripped
ALLOWED_TAGS = frozenset(
    {
        "p", "br", "strong", "b", "em", "i", "u", "h2", "h3", "h4",
        "ul", "ol", "li", "blockquote", "pre", "code", "a", "img", "span",
        "table", "thead", "tbody", "tr", "td", "th", "hr",
    }
)
ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "img": ["src", "alt", "title", "width", "height"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan"],
}
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})


def sanitize_string(value: str, max_length: int | None = None) -> str:
    """Strip markup characters, collapse whitespace and optionally truncate."""
    cleaned = _ANGLE_BRACKETS.sub("", value.strip())
    cleaned = _WHITESPACE.sub(" ", cleaned)
    cleaned = _DISALLOWED_CHARS.sub("", cleaned)
    if max_length:
        cleaned = cleaned[:max_length]
    return cleaned


def sanitize_email(value: str) -> str:
    return value.strip().lower()


def sanitize_url(value: str) -> str:
    """Ensure an http(s) scheme; unparsable input is returned unchanged."""
    url = value.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    try:
        parts = urlsplit(url)
    except ValueError:
        return value
    if not parts.netloc:
        return value
    return urlunsplit(parts)


def sanitize_html(value: str) -> str:
    """Keep allow-listed formatting tags and attributes; strip everything else."""
    return bleach.clean(
        value,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )


def parse_flag(value) -> bool | None:
    """Accept a real bool or the literal strings "true"/"false"; anything else is None."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None
