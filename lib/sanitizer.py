# =============================================================================
# lib/sanitizer.py - Rich-Text HTML Sanitizer
# =============================================================================
# Strips user-supplied HTML down to a fixed allow-list before it is stored.
# Stored HTML is trusted on read, so this runs on every write of a rich-text
# field and nowhere else.
# =============================================================================

import nh3

ALLOWED_TAGS = {
    "p",
    "br",
    "h2",
    "h3",
    "ul",
    "ol",
    "li",
    "strong",
    "em",
    "blockquote",
    "code",
    "pre",
    "a",
}

# rel is not listed: nh3 sets it on every link through link_rel
ALLOWED_ATTRIBUTES = {
    "a": {"href", "target"},
}

ALLOWED_SCHEMES = {"http", "https", "mailto"}

LINK_REL = "noopener noreferrer"


def sanitize_rich_html(html: str) -> str:
    """
    Sanitize an HTML fragment.

    - Tags outside ALLOWED_TAGS are removed but their text is kept
      (script/style are dropped with their contents)
    - Links keep only href/target and always get rel="noopener noreferrer"
    - URLs with schemes other than http, https and mailto are removed

    Example:
        sanitize_rich_html('<p onclick="x()">Hi <a href="https://a.dev">a</a></p>')
        # '<p>Hi <a href="https://a.dev" rel="noopener noreferrer">a</a></p>'
    """
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_SCHEMES,
        link_rel=LINK_REL,
    )
