import streamlit as st
import pandas as pd
import logging
from datetime import datetime
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from studio.config import get_settings
from studio.generator import COMPETITOR_STORES, search_competitors
from studio.llm_client import GeneratorClient
from studio.log import configure_logging
from studio.models import STATUS_NONE_FOUND, STATUS_UNPARSED

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

PRESETS = ["Ai-WB2-32S NodeMCU", "XR2206 Signal Generator DIY Kit"]

st.set_page_config(page_title="Competitor Analysis", page_icon="📈", layout="wide")
st.title("2. Competitor Intelligence")
st.markdown(
    f"Analyze listings from {', '.join(s for s in COMPETITOR_STORES if s != settings.store_name)} "
    "and others to find what makes them stand out."
)

if "competitor_results" not in st.session_state:
    st.session_state.competitor_results = {}
if "activity_history" not in st.session_state:
    st.session_state.activity_history = []
if "competitor_term" not in st.session_state:
    st.session_state.competitor_term = ""

preset_cols = st.columns(len(PRESETS))
for col, preset in zip(preset_cols, PRESETS):
    with col:
        if st.button(preset, use_container_width=True):
            st.session_state.competitor_term = preset
            st.rerun()

col_input, col_btn = st.columns([4, 1])
with col_input:
    search_term = st.text_input(
        "Product name", key="competitor_term", placeholder="Enter product name for analysis..."
    )
with col_btn:
    st.markdown("<br>", unsafe_allow_html=True)
    search_clicked = st.button(
        "Analyze", type="primary", use_container_width=True, disabled=not search_term.strip()
    )

if search_clicked and search_term.strip():
    client = GeneratorClient(settings)
    with st.spinner(f"Searching competitor stores for '{search_term}'..."):
        try:
            result = search_competitors(client, search_term)
            st.session_state.competitor_results[search_term] = result
            st.session_state["competitor_current"] = search_term
            st.session_state.activity_history.append(
                {
                    "kind": "Competitors",
                    "subject": search_term,
                    "time": datetime.now().strftime("%H:%M"),
                }
            )
        except Exception as e:
            logger.exception("Competitor search failed for %s", search_term)
            st.error(f"Competitor search failed: {e}")

current = st.session_state.get("competitor_current")
if current and current in st.session_state.competitor_results:
    result = st.session_state.competitor_results[current]
    st.divider()

    if result.status == STATUS_UNPARSED:
        st.error("The AI response could not be read as a competitor list. Try again.")
        with st.expander("Raw response"):
            st.text(result.raw_response or "(empty)")
    elif result.status == STATUS_NONE_FOUND:
        st.warning(
            "We couldn't find exact matches on major competitor sites. Try shortening the product name."
        )
    else:
        st.subheader(f"{len(result.competitors)} competitor listings for '{current}'")

        df = pd.DataFrame(
            [
                {
                    "Store": c.competitor_name,
                    "Price": c.price or "Price N/A",
                    "Why it stands out": c.eye_catching_details,
                    "Listing": c.product_url,
                }
                for c in result.competitors
            ]
        )
        st.dataframe(
            df,
            use_container_width=True,
            hide_index=True,
            column_config={
                "Listing": st.column_config.LinkColumn("Listing", display_text="Open"),
                "Why it stands out": st.column_config.TextColumn("Why it stands out", width="large"),
            },
        )

        for c in result.competitors:
            with st.container(border=True):
                st.markdown(f"**{c.competitor_name}** · {c.price or 'Price N/A'}")
                if c.product_url:
                    st.markdown(f"[{c.product_url}]({c.product_url})")
                st.markdown(f"> {c.eye_catching_details}")
