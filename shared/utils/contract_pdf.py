from io import BytesIO
from html import escape

from bs4 import BeautifulSoup, NavigableString, Tag
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

BLOCK_TAGS = {"p", "div", "h1", "h2", "h3", "h4", "li", "blockquote", "section"}
INLINE_MARKUP = {
    "b": "b", "strong": "b",
    "i": "i", "em": "i",
    "u": "u",
    "sub": "sub", "sup": "super",
}
ALIGN_CLASSES = {
    "ql-align-center": TA_CENTER,
    "ql-align-right": TA_RIGHT,
    "ql-align-justify": TA_JUSTIFY,
}


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="Contract", parent=styles["Normal"],
        fontName="Helvetica", fontSize=11, leading=15,
        alignment=TA_JUSTIFY, spaceAfter=6))
    styles.add(ParagraphStyle(
        name="ContractHeading", parent=styles["Heading2"],
        alignment=TA_CENTER, spaceAfter=10))
    return styles


def _inline(node) -> str:
    """Reduce rich-text HTML to the tag subset reportlab paragraphs accept."""
    if isinstance(node, NavigableString):
        return escape(str(node), quote=False)
    if not isinstance(node, Tag):
        return ""
    if node.name == "br":
        return "<br/>"

    inner = "".join(_inline(child) for child in node.children)
    markup = INLINE_MARKUP.get(node.name)
    if markup and inner:
        return f"<{markup}>{inner}</{markup}>"
    return inner


def _alignment(node: Tag, default):
    for css_class in node.get("class") or []:
        if css_class in ALIGN_CLASSES:
            return ALIGN_CLASSES[css_class]
    style = (node.get("style") or "").replace(" ", "")
    if "text-align:center" in style:
        return TA_CENTER
    if "text-align:right" in style:
        return TA_RIGHT
    if "text-align:left" in style:
        return TA_LEFT
    return default


def _text_paragraphs(text: str, style):
    story = []
    for line in text.split("\n"):
        if line.strip():
            story.append(Paragraph(escape(line.strip(), quote=False), style))
    return story


def _block_flowables(node, styles):
    if isinstance(node, NavigableString):
        return _text_paragraphs(str(node), styles["Contract"])
    if not isinstance(node, Tag):
        return []

    has_blocks = any(isinstance(child, Tag) and child.name in BLOCK_TAGS
                     for child in node.children)
    if has_blocks or node.name in ("ul", "ol", "body", "html", "[document]"):
        story = []
        for child in node.children:
            story.extend(_block_flowables(child, styles))
        return story

    markup = _inline(node).strip()
    if not markup:
        # empty editor paragraphs are vertical spacing
        return [Spacer(1, 6)] if node.name == "p" else []

    if node.name in ("h1", "h2", "h3", "h4"):
        style = styles["ContractHeading"]
    else:
        style = styles["Contract"]
    alignment = _alignment(node, style.alignment)
    if alignment != style.alignment:
        style = ParagraphStyle(
            name=f"{style.name}-{alignment}", parent=style, alignment=alignment)

    if node.name == "li":
        markup = "&bull; " + markup
    return [Paragraph(markup, style)]


def html_to_story(content: str):
    styles = _styles()
    soup = BeautifulSoup(content or "", "html.parser")
    story = []
    for node in soup.children:
        story.extend(_block_flowables(node, styles))
    return story


def generate_contract_pdf(content: str, title: str) -> BytesIO:
    """Lay a processed contract out on A4 pages and return the PDF buffer."""
    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=1.5 * cm,
        leftMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=title,
    )

    story = html_to_story(content)
    if not story:
        story = [Spacer(1, 1)]

    doc.build(story)
    buffer.seek(0)
    return buffer
