"""Read operations over a borrowed engine handle.

Every function here takes a ``fitz.Document`` it does not own and returns an
output model. Callers are responsible for exclusive access: the session
registry on the stateful path, the single call activation on the oneshot path.
"""

import base64
import math
import re
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Tuple

import fitz  # PyMuPDF

from mupdf_mcp.exceptions import EngineFailureError, MupdfMcpError
from mupdf_mcp.validation.arguments import validate_page_index
from mupdf_mcp.validation.models import (
    IMAGE_MIME_TYPES,
    BookmarkEntry,
    ImageFormat,
    IsPdfOutput,
    IsReflowableOutput,
    MetadataOutput,
    NeedsPasswordOutput,
    OutlineNode,
    PageBoundsOutput,
    PageLink,
    PageLinksOutput,
    PageTextBlocksOutput,
    PageTextOutput,
    Point,
    Rect,
    RenderPageOutput,
    ResolveLinkOutput,
    SearchHit,
    SearchPageOutput,
    TextBlock,
    TextFormat,
    TextLine,
)

_EXTERNAL_URI = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

_TEXT_OPTIONS = {
    TextFormat.PLAIN: "text",
    TextFormat.HTML: "html",
    TextFormat.XHTML: "xhtml",
    TextFormat.XML: "xml",
    TextFormat.JSON: "json",
}

_LINK_KINDS = {
    fitz.LINK_GOTO: "goto",
    fitz.LINK_URI: "uri",
    fitz.LINK_LAUNCH: "launch",
    fitz.LINK_NAMED: "named",
    fitz.LINK_GOTOR: "gotor",
}

_METADATA_KEYS = {
    "format": "format",
    "title": "title",
    "author": "author",
    "subject": "subject",
    "keywords": "keywords",
    "creator": "creator",
    "producer": "producer",
    "creationDate": "creation_date",
    "modDate": "modification_date",
    "encryption": "encryption",
}


@contextmanager
def engine_call(operation: str) -> Iterator[None]:
    """Reclassify unexpected engine exceptions as EngineFailureError."""
    try:
        yield
    except MupdfMcpError:
        raise
    except Exception as exc:
        raise EngineFailureError(operation, exc) from exc


def _rect(value) -> Rect:
    r = fitz.Rect(value)
    return Rect(x0=r.x0, y0=r.y0, x1=r.x1, y1=r.y1)


def _point(value) -> Point:
    return Point(x=value.x, y=value.y)


def _finite(value) -> Optional[float]:
    return value if value is not None and math.isfinite(value) else None


def _load_page(doc: fitz.Document, page: int) -> fitz.Page:
    validate_page_index(page, doc.page_count)
    return doc.load_page(page)


# ---------------------------------------------------------------------------
# Document level
# ---------------------------------------------------------------------------


def read_metadata(doc: fitz.Document) -> MetadataOutput:
    with engine_call("get_metadata"):
        raw = doc.metadata or {}
        values = {field: (raw.get(key) or None) for key, field in _METADATA_KEYS.items()}
        return MetadataOutput(**values)


def read_outline(doc: fitz.Document) -> List[OutlineNode]:
    """Return the table of contents as a tree with 0-indexed target pages."""
    with engine_call("get_outlines"):
        rows = doc.get_toc(simple=False)

    roots: List[OutlineNode] = []
    # (level, node) for the open branch, shallowest first
    parents: List[Tuple[int, OutlineNode]] = []
    for level, title, page, dest in rows:
        node = OutlineNode(
            title=title or "",
            page=page - 1 if page > 0 else None,
            uri=_outline_uri(dest),
        )
        while parents and parents[-1][0] >= level:
            parents.pop()
        siblings = parents[-1][1].children if parents else roots
        siblings.append(node)
        parents.append((level, node))
    return roots


def _outline_uri(dest: Any) -> Optional[str]:
    if isinstance(dest, dict) and dest.get("kind") == fitz.LINK_URI:
        return dest.get("uri") or None
    return None


def count_outline_nodes(nodes: List[OutlineNode]) -> int:
    return sum(1 + count_outline_nodes(node.children) for node in nodes)


def flatten_outline(nodes: List[OutlineNode], level: int = 0) -> List[BookmarkEntry]:
    """Depth-first list of bookmarks, parents before their children."""
    entries = []
    for node in nodes:
        entries.append(BookmarkEntry(title=node.title, page=node.page, level=level))
        entries.extend(flatten_outline(node.children, level + 1))
    return entries


def check_needs_password(doc: fitz.Document) -> NeedsPasswordOutput:
    with engine_call("needs_password"):
        # needs_pass keeps its value after authentication; is_encrypted does not
        encryption = (doc.metadata or {}).get("encryption")
        return NeedsPasswordOutput(needs_password=bool(doc.needs_pass), is_encrypted=bool(encryption))


def check_is_pdf(doc: fitz.Document) -> IsPdfOutput:
    with engine_call("is_pdf"):
        return IsPdfOutput(is_pdf=bool(doc.is_pdf))


def check_is_reflowable(doc: fitz.Document) -> IsReflowableOutput:
    with engine_call("is_reflowable"):
        return IsReflowableOutput(is_reflowable=bool(doc.is_reflowable))


def resolve_link(doc: fitz.Document, uri: str) -> ResolveLinkOutput:
    """Resolve an internal link URI to a 0-indexed page and position."""
    if _EXTERNAL_URI.match(uri):
        return ResolveLinkOutput(uri=uri, is_external=True)
    with engine_call("resolve_link"):
        resolved = doc.resolve_link(uri)
    if not resolved:
        return ResolveLinkOutput(uri=uri)
    page, x, y = resolved
    if page is None or page < 0:
        return ResolveLinkOutput(uri=uri)
    return ResolveLinkOutput(uri=uri, page=page, x=_finite(x), y=_finite(y))


# ---------------------------------------------------------------------------
# Page level
# ---------------------------------------------------------------------------


def page_bounds(doc: fitz.Document, page: int) -> PageBoundsOutput:
    with engine_call("get_page_bounds"):
        rect = _load_page(doc, page).rect
        return PageBoundsOutput(
            page=page,
            width=rect.width,
            height=rect.height,
            x0=rect.x0,
            y0=rect.y0,
            x1=rect.x1,
            y1=rect.y1,
        )


def page_links(doc: fitz.Document, page: int) -> PageLinksOutput:
    with engine_call("get_page_links"):
        links = []
        for link in _load_page(doc, page).get_links():
            target = link.get("page")
            links.append(
                PageLink(
                    kind=_LINK_KINDS.get(link.get("kind"), "none"),
                    bounds=_rect(link["from"]),
                    uri=link.get("uri") or None,
                    target_page=target if target is not None and target >= 0 else None,
                )
            )
        return PageLinksOutput(page=page, links=links)


def search_page(doc: fitz.Document, page: int, query: str, hit_max: int) -> SearchPageOutput:
    with engine_call("search_page"):
        quads = _load_page(doc, page).search_for(query, quads=True)[:hit_max]
        hits = [
            SearchHit(ul=_point(q.ul), ur=_point(q.ur), ll=_point(q.ll), lr=_point(q.lr))
            for q in quads
        ]
        return SearchPageOutput(page=page, query=query, hit_count=len(hits), hits=hits)


def page_text(doc: fitz.Document, page: int, text_format: TextFormat) -> PageTextOutput:
    with engine_call("get_page_text"):
        text = _load_page(doc, page).get_text(_TEXT_OPTIONS[text_format])
        return PageTextOutput(page=page, format=text_format.value, text=text)


def page_text_blocks(doc: fitz.Document, page: int) -> PageTextBlocksOutput:
    """Text blocks and lines with their bounding boxes. Image blocks are skipped."""
    with engine_call("get_page_text_blocks"):
        layout = _load_page(doc, page).get_text("dict")
        blocks = []
        for block in layout.get("blocks", []):
            if block.get("type") != 0:
                continue
            lines = [
                TextLine(
                    bounds=_rect(line["bbox"]),
                    text="".join(span.get("text", "") for span in line.get("spans", [])),
                )
                for line in block.get("lines", [])
            ]
            blocks.append(TextBlock(bounds=_rect(block["bbox"]), lines=lines))
        return PageTextBlocksOutput(page=page, blocks=blocks)


def render_page(
    doc: fitz.Document, page: int, scale: float, image_format: ImageFormat
) -> RenderPageOutput:
    """Rasterise (or vectorise, for svg) one page at ``scale`` x 72 DPI."""
    with engine_call("render_page"):
        page_obj = _load_page(doc, page)
        matrix = fitz.Matrix(scale, scale)
        if image_format is ImageFormat.SVG:
            payload = page_obj.get_svg_image(matrix=matrix).encode("utf-8")
            target = page_obj.rect * matrix
            width, height = round(target.width), round(target.height)
        else:
            pixmap = page_obj.get_pixmap(matrix=matrix, alpha=False)
            payload = pixmap.tobytes(image_format.value)
            width, height = pixmap.width, pixmap.height

    return RenderPageOutput(
        page=page,
        format=image_format.value,
        mime_type=IMAGE_MIME_TYPES[image_format],
        scale=scale,
        width=width,
        height=height,
        size_bytes=len(payload),
        image=base64.b64encode(payload).decode("ascii"),
    )
