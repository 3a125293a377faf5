import json
import logging
from .llm_client import GeneratorClient
from .models import (
    ProductListing,
    CompetitorAnalysis,
    CompetitorSearch,
    CategoryMapping,
    STATUS_FOUND,
    STATUS_NONE_FOUND,
    STATUS_UNPARSED,
)
from .parsing import extract_json

logger = logging.getLogger(__name__)

COMPETITOR_STORES = ["Robu.in", "ThinkRobotics", "ThingBits", "Robocraze"]

TAXONOMY_EXAMPLES = [
    "Batteries & Chargers / Li-Ion",
    "Drone Parts / Transmitters & Receivers",
    "DIY Kits / STEM Education",
    "Tools & Measuring Instruments / Strippers & Cutters",
    "Development Boards",
]

CATEGORY_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "productName": {"type": "string"},
            "assignedCategory": {"type": "string"},
            "reasoning": {"type": "string"},
        },
        "required": ["productName", "assignedCategory"],
    },
}

_UNPARSED = object()


def split_product_lines(text: str) -> list[str]:
    """Split textarea input into product names, dropping blank lines."""
    return [line for line in text.split("\n") if line.strip()]


def listing_fallback(product_name: str) -> ProductListing:
    return ProductListing(
        product_title_website=product_name,
        product_title_amazon=product_name,
        bullet_points=["Could not generate details."],
        seo_description="Error generating content. Please try again.",
        technical_specifications=[],
        search_keywords=[],
        meta_title="",
        meta_description="",
        suggested_tags=[],
    )


def _build_listing_prompt(
    product_name: str, reference_url: str, store_name: str, market: str
) -> str:
    context_line = f"Context/Reference URL: {reference_url}" if reference_url else ""

    prompt = f"""You are a Senior SEO Content Writer for {store_name} (a robotics and electronics store in {market}).
Create a comprehensive product listing for: "{product_name}".
{context_line}

Use web search to verify technical details, features, and specs if you don't have exact knowledge.

Requirements:
1. **Website Title**: Clear, descriptive, includes key specs.
2. **Amazon Title**: Keyword stuffed but readable, includes Brand, Model, Key Features.
3. **5 Bullet Points**: Highlight features, use cases, and benefits.
4. **SEO Description**: 150-200 words, engaging, technically accurate.
5. **Technical Specs**: Extract plausible specs. Return as a list of name/value pairs.
6. **Keywords**: 10-15 high volume keywords for the {market} market.
7. **Meta Tags**: Optimized for click-through rate.
8. **Tags**: Relevant collections (e.g., Arduino, Sensors, Wireless).

IMPORTANT: Output ONLY valid JSON. No markdown, no explanations.
Structure:
{{
  "productTitleWebsite": "string",
  "productTitleAmazon": "string",
  "bulletPoints": ["string"],
  "seoDescription": "string",
  "technicalSpecifications": [{{"name": "string", "value": "string"}}],
  "searchKeywords": ["string"],
  "metaTitle": "string",
  "metaDescription": "string",
  "suggestedTags": ["string"]
}}"""
    return prompt


def _build_competitor_prompt(product_name: str, market: str) -> str:
    stores = ", ".join(f'"{s}"' for s in COMPETITOR_STORES)
    return f"""Find competitors selling "{product_name}" in {market}.
Specifically look for {stores} or similar {market} robotics stores.

1. Find exact product matches.
2. Extract the URL.
3. Analyze their listing: What specific detail (images, description formatting, video, docs) makes it "eye-catching" or better than a standard listing?
4. Provide the Price if visible.

IMPORTANT: Output ONLY valid JSON Array. No markdown.
Structure:
[
  {{
    "competitorName": "string",
    "productUrl": "string",
    "price": "string",
    "eyeCatchingDetails": "string"
  }}
]"""


def _build_category_prompt(product_names: list[str], store_name: str) -> str:
    taxonomy = "\n".join(f"- {c}" for c in TAXONOMY_EXAMPLES)
    return f"""Assign the correct website category for the following products on the {store_name} website structure.
Products: {json.dumps(product_names, ensure_ascii=False)}

Choose from typical categories like:
{taxonomy}

Provide the most accurate hierarchical path."""


def generate_product_listing(
    client: GeneratorClient, product_name: str, reference_url: str = ""
) -> ProductListing:
    """Draft a full product listing, grounded with web search.

    Malformed responses degrade to ``listing_fallback``; transport errors propagate.
    """
    if not product_name.strip():
        raise ValueError("product_name must not be empty")

    settings = client.settings
    prompt = _build_listing_prompt(
        product_name, reference_url.strip(), settings.store_name, settings.market
    )
    response_text = client.generate(prompt, web_search=True)

    fallback = listing_fallback(product_name)
    data = extract_json(response_text, fallback)
    if data is fallback:
        return fallback
    if not isinstance(data, dict):
        logger.error("Listing response is %s, not an object; using fallback", type(data).__name__)
        return fallback
    return ProductListing.from_dict(data, fallback)


def search_competitors(client: GeneratorClient, product_name: str) -> CompetitorSearch:
    """
    Find listings of the same product on competitor storefronts.

    ``status`` tells an empty answer (``none_found``) apart from a response
    that could not be read (``unparsed``).
    """
    if not product_name.strip():
        raise ValueError("product_name must not be empty")

    prompt = _build_competitor_prompt(product_name, client.settings.market)
    response_text = client.generate(prompt, web_search=True)

    data = extract_json(response_text, _UNPARSED)
    if data is _UNPARSED or not isinstance(data, list):
        return CompetitorSearch(
            product_name=product_name, status=STATUS_UNPARSED, raw_response=response_text
        )

    competitors = [CompetitorAnalysis.from_dict(item) for item in data if isinstance(item, dict)]
    return CompetitorSearch(
        product_name=product_name,
        competitors=competitors,
        status=STATUS_FOUND if competitors else STATUS_NONE_FOUND,
        raw_response=response_text,
    )


def find_competitors(client: GeneratorClient, product_name: str) -> list[CompetitorAnalysis]:
    return search_competitors(client, product_name).competitors


def assign_categories(client: GeneratorClient, product_names: list[str]) -> list[CategoryMapping]:
    """Map each product name onto the store taxonomy using schema-constrained output."""
    products = [p for p in product_names if p.strip()]
    if not products:
        return []

    prompt = _build_category_prompt(products, client.settings.store_name)
    response_text = client.generate(prompt, response_schema=CATEGORY_SCHEMA)

    data = json.loads(response_text or "[]")
    return [CategoryMapping.from_dict(item) for item in data if isinstance(item, dict)]
