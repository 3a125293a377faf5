import csv
import io
import re
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    KeepTogether,
    ListFlowable,
    ListItem,
)

from .models import ProductListing, CategoryMapping

CSV_COLUMNS = [
    "Product Name Input",
    "Website Title",
    "Amazon Title",
    "Bullet Points",
    "SEO Description",
    "Technical Specs",
    "Search Keywords",
    "Meta Title",
    "Meta Description",
    "Suggested Tags",
]

_NON_ALNUM = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def export_stem(product_name: str) -> str:
    """'Ai-WB2 Kit' -> 'ai_wb2_kit' (every non-alphanumeric character becomes '_')."""
    return _NON_ALNUM.sub("_", product_name).lower()


def export_filename(product_name: str, extension: str) -> str:
    return f"{export_stem(product_name)}_listing.{extension}"


def _join(sep: str, items) -> str:
    return sep.join(str(item) for item in items or [])


def _specs_text(listing: ProductListing) -> str:
    return _join("; ", (f"{s.name}: {s.value}" for s in listing.technical_specifications))


def listing_to_csv(product_name: str, listing: ProductListing) -> str:
    """Header line plus a single fully quoted data row, no trailing newline."""
    row = [
        product_name,
        listing.product_title_website,
        listing.product_title_amazon,
        _join("\n", listing.bullet_points),
        listing.seo_description,
        _specs_text(listing),
        _join(", ", listing.search_keywords),
        listing.meta_title,
        listing.meta_description,
        _join(", ", listing.suggested_tags),
    ]

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="")
    writer.writerow(["" if v is None else str(v) for v in row])

    return ",".join(CSV_COLUMNS) + "\n" + buf.getvalue()


def _styles() -> dict:
    sheet = getSampleStyleSheet()
    return {
        "title": sheet["Title"],
        "subtitle": sheet["Italic"],
        "heading": ParagraphStyle("FieldHeading", parent=sheet["Heading2"], spaceBefore=10),
        "body": sheet["BodyText"],
        "mono": ParagraphStyle("Mono", parent=sheet["Code"], fontName="Courier", fontSize=9, leading=12),
    }


def _section(heading: str, body: list, styles: dict) -> KeepTogether:
    # Heading moves to the next page together with its body
    return KeepTogether([Paragraph(escape(heading), styles["heading"])] + body)


def listing_to_pdf(product_name: str, listing: ProductListing) -> bytes:
    """Render the listing as a paginated PDF and return its bytes."""
    styles = _styles()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=18 * mm,
        rightMargin=18 * mm,
        topMargin=18 * mm,
        bottomMargin=18 * mm,
        title=f"{product_name} listing",
    )

    def para(text, style="body"):
        return Paragraph(escape("" if text is None else str(text)), styles[style])

    bullet_items = [ListItem(para(bp), leftIndent=12) for bp in listing.bullet_points or []]
    bullets = ListFlowable(bullet_items, bulletType="bullet", start="•") if bullet_items else para("-")
    spec_lines = [para(f"{s.name}: {s.value}", "mono") for s in listing.technical_specifications]

    story = [
        Paragraph("Product Listing", styles["title"]),
        para(product_name, "subtitle"),
        Spacer(1, 12),
        _section("Website Title", [para(listing.product_title_website)], styles),
        _section("Amazon Title", [para(listing.product_title_amazon)], styles),
        _section("Bullet Points", [bullets], styles),
        _section("SEO Description", [para(listing.seo_description)], styles),
        _section("Technical Specifications", spec_lines or [para("-")], styles),
        _section("Meta Title", [para(listing.meta_title)], styles),
        _section("Meta Description", [para(listing.meta_description)], styles),
        _section("Keywords", [para(_join(", ", listing.search_keywords))], styles),
    ]

    doc.build(story)
    return buf.getvalue()


def categories_to_text(mappings: list[CategoryMapping]) -> str:
    return "\n".join(f"{m.product_name} -> {m.assigned_category}" for m in mappings)
