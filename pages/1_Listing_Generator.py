import streamlit as st
import pandas as pd
import logging
from datetime import datetime
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from studio.config import get_settings
from studio.export import export_filename, listing_to_csv, listing_to_pdf
from studio.generator import generate_product_listing
from studio.llm_client import GeneratorClient
from studio.log import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

PRESETS = [
    {
        "name": "Ai-WB2-32S-Kit",
        "url": "https://www.amazon.in/REES52-Ai-WB2-32S-Ai-Thinker-NODEMCU-AI-WB2-32S-kit/dp/B0D233BJFB",
    },
    {
        "name": "XR2206 Signal Generator",
        "url": "https://www.alibaba.com/product-detail/High-Precision-Xr2206-Signal-Generator-DIY_1601473560924.html",
    },
]

st.set_page_config(page_title="Listing Generator", page_icon="✍️", layout="wide")
st.title("1. Generate Website Listing")

if not settings.has_api_key:
    st.warning("No API key configured. Requests will fail until ANTHROPIC_API_KEY is set.")

if "listing_results" not in st.session_state:
    st.session_state.listing_results = {}
if "activity_history" not in st.session_state:
    st.session_state.activity_history = []
if "listing_product_name" not in st.session_state:
    st.session_state.listing_product_name = ""
if "listing_reference_url" not in st.session_state:
    st.session_state.listing_reference_url = ""

# Presets
st.caption("Quick presets")
preset_cols = st.columns(len(PRESETS))
for col, preset in zip(preset_cols, PRESETS):
    with col:
        if st.button(preset["name"], use_container_width=True):
            st.session_state.listing_product_name = preset["name"]
            st.session_state.listing_reference_url = preset["url"]
            st.rerun()

product_name = st.text_input(
    "Product name", key="listing_product_name", placeholder="e.g., Ai-WB2-32S NodeMCU Kit"
)
reference_url = st.text_input(
    "Reference URL (optional)", key="listing_reference_url", placeholder="https://amazon.in/..."
)

generate_clicked = st.button(
    "Generate listing",
    type="primary",
    use_container_width=True,
    disabled=not product_name.strip(),
)

if generate_clicked and product_name.strip():
    client = GeneratorClient(settings)
    with st.spinner(f"Drafting listing for '{product_name}'..."):
        try:
            listing = generate_product_listing(client, product_name, reference_url)
            st.session_state.listing_results[product_name] = listing
            st.session_state["listing_current"] = product_name
            st.session_state.activity_history.append(
                {
                    "kind": "Listing",
                    "subject": product_name,
                    "time": datetime.now().strftime("%H:%M"),
                }
            )
        except Exception as e:
            logger.exception("Listing generation failed for %s", product_name)
            st.error(f"Failed to generate listing. Check API Key. ({e})")

# Results (previous result stays visible when a new request fails)
current = st.session_state.get("listing_current")
if current and current in st.session_state.listing_results:
    listing = st.session_state.listing_results[current]

    st.divider()

    dl1, dl2 = st.columns(2)
    with dl1:
        st.download_button(
            "Download CSV",
            data=listing_to_csv(current, listing).encode("utf-8"),
            file_name=export_filename(current, "csv"),
            mime="text/csv",
            use_container_width=True,
        )
    with dl2:
        st.download_button(
            "Download PDF",
            data=listing_to_pdf(current, listing),
            file_name=export_filename(current, "pdf"),
            mime="application/pdf",
            use_container_width=True,
        )

    # Titles
    st.subheader("Titles")
    t1, t2 = st.columns(2)
    with t1:
        st.markdown("**Website format**")
        st.info(listing.product_title_website or "-")
    with t2:
        st.markdown("**Amazon format**")
        st.info(listing.product_title_amazon or "-")

    # Features & description
    col_bullets, col_desc = st.columns(2)
    with col_bullets:
        st.subheader("Key features")
        st.markdown("\n".join(f"- {bp}" for bp in listing.bullet_points) or "-")
    with col_desc:
        st.subheader("SEO description")
        st.write(listing.seo_description or "-")

    # Specs
    st.subheader("Technical specifications")
    if listing.technical_specifications:
        df_specs = pd.DataFrame(
            [{"Specification": s.name, "Value": s.value} for s in listing.technical_specifications]
        )
        st.dataframe(df_specs, use_container_width=True, hide_index=True)
    else:
        st.caption("No specifications returned.")

    # SEO metadata
    st.subheader("SEO metadata")
    m1, m2 = st.columns(2)
    with m1:
        st.markdown("**Meta title**")
        st.code(listing.meta_title or "", language=None)
        st.caption(f"{len(listing.meta_title or '')} characters")
    with m2:
        st.markdown("**Meta description**")
        st.code(listing.meta_description or "", language=None)
        st.caption(f"{len(listing.meta_description or '')} characters")

    k1, k2 = st.columns(2)
    with k1:
        st.markdown("**Search keywords**")
        st.markdown(" ".join(f"`{k}`" for k in listing.search_keywords) or "-")
    with k2:
        st.markdown("**Suggested tags**")
        st.markdown(" ".join(f"`#{t}`" for t in listing.suggested_tags) or "-")
