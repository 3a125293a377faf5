from dataclasses import dataclass, field, asdict
from typing import Optional


def _value(data: dict, key: str, default):
    # JSON null counts as missing
    value = data.get(key)
    return default if value is None else value


@dataclass
class TechnicalSpec:
    name: str
    value: str

    @classmethod
    def from_dict(cls, data: dict) -> "TechnicalSpec":
        return cls(name=_value(data, "name", ""), value=_value(data, "value", ""))


@dataclass
class ProductListing:
    product_title_website: str
    product_title_amazon: str
    bullet_points: list[str]
    seo_description: str
    technical_specifications: list[TechnicalSpec]
    search_keywords: list[str]
    meta_title: str
    meta_description: str
    suggested_tags: list[str]

    @classmethod
    def from_dict(cls, data: dict, fallback: "ProductListing") -> "ProductListing":
        """Build a listing from the generator's camelCase JSON object.

        Missing or null keys take the value from ``fallback``; other values are kept as given.
        """
        specs = data.get("technicalSpecifications")
        if isinstance(specs, list):
            technical_specifications = [
                TechnicalSpec.from_dict(s) for s in specs if isinstance(s, dict)
            ]
        else:
            technical_specifications = list(fallback.technical_specifications)

        return cls(
            product_title_website=_value(data, "productTitleWebsite", fallback.product_title_website),
            product_title_amazon=_value(data, "productTitleAmazon", fallback.product_title_amazon),
            bullet_points=_value(data, "bulletPoints", fallback.bullet_points),
            seo_description=_value(data, "seoDescription", fallback.seo_description),
            technical_specifications=technical_specifications,
            search_keywords=_value(data, "searchKeywords", fallback.search_keywords),
            meta_title=_value(data, "metaTitle", fallback.meta_title),
            meta_description=_value(data, "metaDescription", fallback.meta_description),
            suggested_tags=_value(data, "suggestedTags", fallback.suggested_tags),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CompetitorAnalysis:
    competitor_name: str
    product_url: str
    eye_catching_details: str
    price: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CompetitorAnalysis":
        return cls(
            competitor_name=_value(data, "competitorName", ""),
            product_url=_value(data, "productUrl", ""),
            eye_catching_details=_value(data, "eyeCatchingDetails", ""),
            price=data.get("price") or None,
        )

    def to_dict(self) -> dict:
        return asdict(self)


# CompetitorSearch.status values
STATUS_FOUND = "found"
STATUS_NONE_FOUND = "none_found"
STATUS_UNPARSED = "unparsed"


@dataclass
class CompetitorSearch:
    product_name: str
    competitors: list[CompetitorAnalysis] = field(default_factory=list)
    status: str = STATUS_NONE_FOUND
    raw_response: str = ""


@dataclass
class CategoryMapping:
    product_name: str
    assigned_category: str
    reasoning: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryMapping":
        return cls(
            product_name=_value(data, "productName", ""),
            assigned_category=_value(data, "assignedCategory", ""),
            reasoning=_value(data, "reasoning", ""),
        )

    def to_dict(self) -> dict:
        return asdict(self)
