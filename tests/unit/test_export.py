from __future__ import annotations

import csv
import io

from studio.export import (
    CSV_COLUMNS,
    categories_to_text,
    export_filename,
    export_stem,
    listing_to_csv,
    listing_to_pdf,
)
from studio.generator import generate_product_listing
from studio.models import CategoryMapping, ProductListing, TechnicalSpec


def _listing(**overrides) -> ProductListing:
    values = dict(
        product_title_website="Website title",
        product_title_amazon='Amazon "Pro" title',
        bullet_points=["A", "B"],
        seo_description="Description",
        technical_specifications=[TechnicalSpec(name="X", value='1"in')],
        search_keywords=["k1", "k2"],
        meta_title="Meta",
        meta_description="Meta description",
        suggested_tags=["t1", "t2"],
    )
    values.update(overrides)
    return ProductListing(**values)


def test_csv_has_header_and_single_quoted_row():
    content = listing_to_csv("Widget", _listing())

    rows = list(csv.reader(io.StringIO(content)))
    assert len(rows) == 2
    assert rows[0] == CSV_COLUMNS
    assert rows[1] == [
        "Widget",
        "Website title",
        'Amazon "Pro" title',
        "A\nB",
        "Description",
        'X: 1"in',
        "k1, k2",
        "Meta",
        "Meta description",
        "t1, t2",
    ]


def test_csv_escapes_quotes_and_wraps_every_field():
    content = listing_to_csv("Widget", _listing())
    header, row = content.split("\n", 1)

    assert header == ",".join(CSV_COLUMNS)
    assert '"X: 1""in"' in row
    assert row.startswith('"Widget","Website title","Amazon ""Pro"" title","A\nB",')
    assert not content.endswith("\n")


def test_csv_joins_multiple_specs_with_semicolon():
    listing = _listing(
        technical_specifications=[TechnicalSpec("Voltage", "3.3V"), TechnicalSpec("Flash", "4MB")]
    )
    rows = list(csv.reader(io.StringIO(listing_to_csv("Widget", listing))))
    assert rows[1][5] == "Voltage: 3.3V; Flash: 4MB"


def test_export_stem_replaces_each_non_alphanumeric():
    assert export_stem("Ai-WB2 32S Kit") == "ai_wb2_32s_kit"
    assert export_stem("Ai-WB2 32S! Kit") == "ai_wb2_32s__kit"
    assert export_stem("XR2206 Signal Generator") == "xr2206_signal_generator"


def test_export_filename():
    assert export_filename("Li-Ion 18650", "csv") == "li_ion_18650_listing.csv"
    assert export_filename("Li-Ion 18650", "pdf") == "li_ion_18650_listing.pdf"


def test_pdf_bytes():
    data = listing_to_pdf("Widget <v2> & co", _listing())
    assert data.startswith(b"%PDF")
    assert b"%%EOF" in data[-64:]


def test_pdf_long_listing_spans_pages():
    short = listing_to_pdf("Widget", _listing())
    long_listing = _listing(
        bullet_points=[f"Bullet point {i}" for i in range(8)],
        seo_description="Long description sentence. " * 400,
        technical_specifications=[TechnicalSpec(f"Spec {i}", f"{i} units") for i in range(80)],
    )
    long = listing_to_pdf("Widget", long_listing)
    assert long.startswith(b"%PDF")
    assert len(long) > len(short)


def test_pdf_handles_empty_listing():
    empty = _listing(bullet_points=[], technical_specifications=[], search_keywords=[], meta_title="")
    assert listing_to_pdf("Widget", empty).startswith(b"%PDF")


def test_categories_to_text():
    mappings = [
        CategoryMapping("Li-Ion 18650 Cell", "Batteries & Chargers / Li-Ion"),
        CategoryMapping("DIY Paper Foldscope", "DIY Kits / STEM Education", "Educational kit"),
    ]
    assert categories_to_text(mappings) == (
        "Li-Ion 18650 Cell -> Batteries & Chargers / Li-Ion\n"
        "DIY Paper Foldscope -> DIY Kits / STEM Education"
    )


def test_export_stem_keeps_one_underscore_per_character():
    assert export_stem("Ai-WB2 32S!! Kit") == "ai_wb2_32s___kit"


def test_null_and_non_string_list_items_still_export(fake_client):
    response = '{"productTitleWebsite": "W", "bulletPoints": null, "searchKeywords": ["a", 5]}'
    listing = generate_product_listing(fake_client(response), "Widget")

    rows = list(csv.reader(io.StringIO(listing_to_csv("Widget", listing))))
    assert rows[1][3] == "Could not generate details."
    assert rows[1][6] == "a, 5"
    assert listing_to_pdf("Widget", listing).startswith(b"%PDF")


def test_csv_stringifies_non_string_items():
    listing = _listing(bullet_points=["A", 2], suggested_tags=[1.5, "t"])
    rows = list(csv.reader(io.StringIO(listing_to_csv("Widget", listing))))
    assert rows[1][3] == "A\n2"
    assert rows[1][9] == "1.5, t"
