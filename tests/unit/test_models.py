from __future__ import annotations

from studio.generator import listing_fallback
from studio.models import CategoryMapping, CompetitorAnalysis, ProductListing, TechnicalSpec


def test_listing_from_dict_keeps_present_values():
    data = {
        "productTitleWebsite": "W",
        "productTitleAmazon": "A",
        "bulletPoints": ["one"],
        "seoDescription": "S",
        "technicalSpecifications": [{"name": "N", "value": "V"}, "not a spec"],
        "searchKeywords": ["k"],
        "metaTitle": "MT",
        "metaDescription": "MD",
        "suggestedTags": ["t"],
    }
    listing = ProductListing.from_dict(data, listing_fallback("Widget"))

    assert listing.product_title_website == "W"
    assert listing.technical_specifications == [TechnicalSpec("N", "V")]
    assert listing.to_dict()["technical_specifications"] == [{"name": "N", "value": "V"}]


def test_listing_from_dict_non_list_specs_use_fallback():
    listing = ProductListing.from_dict({"technicalSpecifications": "3.3V"}, listing_fallback("Widget"))
    assert listing.technical_specifications == []
    assert listing.bullet_points == ["Could not generate details."]


def test_competitor_missing_price_is_none():
    assert CompetitorAnalysis.from_dict({"competitorName": "Robu.in"}).price is None
    assert CompetitorAnalysis.from_dict({"competitorName": "Robu.in", "price": ""}).price is None


def test_category_reasoning_defaults_to_empty():
    mapping = CategoryMapping.from_dict({"productName": "P", "assignedCategory": "C"})
    assert mapping.reasoning == ""
    assert mapping.to_dict() == {"product_name": "P", "assigned_category": "C", "reasoning": ""}


def test_listing_from_dict_null_values_use_fallback():
    data = {"productTitleWebsite": "W", "bulletPoints": None, "searchKeywords": ["a", 5], "metaTitle": None}
    listing = ProductListing.from_dict(data, listing_fallback("Widget"))

    assert listing.product_title_website == "W"
    assert listing.bullet_points == ["Could not generate details."]
    assert listing.meta_title == ""
    assert listing.search_keywords == ["a", 5]


def test_null_fields_in_rows_default_to_empty():
    assert TechnicalSpec.from_dict({"name": None, "value": "3.3V"}) == TechnicalSpec("", "3.3V")
    mapping = CategoryMapping.from_dict({"productName": "P", "assignedCategory": "C", "reasoning": None})
    assert mapping.reasoning == ""
