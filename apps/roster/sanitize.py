from typing import Optional

import nh3

# Markup a goal update may keep: inline formatting, lists, quotes, links and simple tables
ALLOWED_TAGS = {
    "a", "abbr", "b", "blockquote", "br", "code", "del", "em", "h1", "h2", "h3", "h4", "h5", "h6",
    "hr", "i", "ins", "li", "ol", "p", "pre", "s", "span", "strong", "sub", "sup", "u", "ul",
    "table", "thead", "tbody", "tr", "th", "td",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "abbr": {"title"},
    "span": {"class"},
    "p": {"class"},
    "th": {"colspan", "rowspan"},
    "td": {"colspan", "rowspan"},
}

ALLOWED_URL_SCHEMES = {"http", "https", "mailto"}


def sanitize_update_content(content: Optional[str]) -> str:
    """
    Reduce user-authored update text to a safe markup subset.
    Script and style elements are dropped with their content; event handler
    attributes and non-http(s)/mailto URLs are removed.
    """
    if not content:
        return ""
    return nh3.clean(
        content,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
        link_rel="noopener noreferrer",
    )
