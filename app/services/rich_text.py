import logging
from typing import Dict, List, Optional

from markupsafe import escape

logger = logging.getLogger(__name__)

BLOCK_TAGS = {
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "paragraph": "p",
    "preformatted": "pre",
}

LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}


def as_text(body: Optional[List[Dict]], separator: str = " ") -> str:
    """Plain text of every text-bearing node, joined by ``separator``."""
    if not body:
        return ""
    return separator.join(node["text"] for node in body if node.get("text") is not None)


def as_html(body: Optional[List[Dict]]) -> str:
    """
    Render Prismic structured text to HTML.
    Consecutive list items are grouped into a single <ul>/<ol>.
    """
    if not body:
        return ""

    parts = []
    open_list = None
    for node in body:
        node_type = node.get("type")
        list_tag = LIST_TAGS.get(node_type)

        if open_list and open_list != list_tag:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and not open_list:
            parts.append(f"<{list_tag}>")
            open_list = list_tag

        if list_tag:
            parts.append(f"<li>{_render_spans(node)}</li>")
        elif node_type in BLOCK_TAGS:
            tag = BLOCK_TAGS[node_type]
            parts.append(f"<{tag}>{_render_spans(node)}</{tag}>")
        elif node_type == "image":
            parts.append(_render_image(node))
        elif node_type == "embed":
            parts.append(_render_embed(node))
        else:
            logger.debug(f"Skipping unsupported rich text node: {node_type}")

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(parts)


def _render_image(node: Dict) -> str:
    src = escape(node.get("url", ""))
    alt = escape(node.get("alt") or "")
    return f'<p class="block-img"><img src="{src}" alt="{alt}" /></p>'


def _render_embed(node: Dict) -> str:
    oembed = node.get("oembed") or {}
    # oEmbed markup comes from the repository and is rendered as-is.
    return (
        f'<div data-oembed="{escape(oembed.get("embed_url", ""))}" '
        f'data-oembed-type="{escape(oembed.get("type", ""))}">'
        f'{oembed.get("html", "")}</div>'
    )


def _open_tag(span: Dict) -> str:
    span_type = span.get("type")
    data = span.get("data") or {}
    if span_type == "strong":
        return "<strong>"
    if span_type == "em":
        return "<em>"
    if span_type == "hyperlink":
        href = escape(data.get("url", ""))
        if data.get("target"):
            return f'<a href="{href}" target="{escape(data["target"])}" rel="noopener">'
        return f'<a href="{href}">'
    if span_type == "label":
        return f'<span class="{escape(data.get("label", ""))}">'
    return ""


def _close_tag(span: Dict) -> str:
    return {
        "strong": "</strong>",
        "em": "</em>",
        "hyperlink": "</a>",
        "label": "</span>",
    }.get(span.get("type"), "")


def _escape_text(text: str) -> str:
    return str(escape(text)).replace("\n", "<br />")


def _render_spans(node: Dict) -> str:
    text = node.get("text") or ""
    unique: List[Dict] = []
    for s in node.get("spans") or []:
        if s.get("start", 0) < s.get("end", 0) and s not in unique:
            unique.append(s)
    spans = sorted(unique, key=lambda s: (s["start"], -s["end"]))
    if not spans:
        return _escape_text(text)

    boundaries = sorted({0, len(text)} | {s["start"] for s in spans} | {s["end"] for s in spans})
    out = []
    stack: List[Dict] = []
    for i, pos in enumerate(boundaries):
        # Close spans ending here; reopen anything that had to be closed above them.
        ending = [s for s in stack if s["end"] == pos]
        if ending:
            reopen = []
            while ending:
                top = stack.pop()
                out.append(_close_tag(top))
                if top in ending:
                    ending.remove(top)
                else:
                    reopen.append(top)
            for span in reversed(reopen):
                out.append(_open_tag(span))
                stack.append(span)

        for span in spans:
            if span["start"] == pos:
                out.append(_open_tag(span))
                stack.append(span)

        if i + 1 < len(boundaries):
            out.append(_escape_text(text[pos : boundaries[i + 1]]))

    while stack:
        out.append(_close_tag(stack.pop()))
    return "".join(out)
