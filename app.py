import streamlit as st
import os
from dotenv import load_dotenv

load_dotenv()

# Streamlit Cloud secrets -> environment variables (deployment support)
try:
    for key in st.secrets:
        if isinstance(st.secrets[key], str):
            os.environ.setdefault(key, st.secrets[key])
except FileNotFoundError:
    pass

from studio.config import get_settings
from studio.log import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

st.set_page_config(
    page_title=f"{settings.store_name} Listing Studio",
    page_icon="🛠️",
    layout="wide",
)

st.title(f"{settings.store_name} SEO & Content Studio")
st.markdown("Draft product listings, study competitor pages and map products onto the store taxonomy with AI.")

st.divider()

col1, col2 = st.columns(2)

with col1:
    st.subheader("API status")
    if settings.has_api_key:
        st.success(f"Claude AI API: configured (model `{settings.model}`)")
    else:
        st.error("Claude AI API: not configured → add ANTHROPIC_API_KEY (or API_KEY) to your .env file")

with col2:
    st.subheader("How to use")
    st.markdown("""
    1. **Listing Generator**: enter a product name (and optionally a reference URL) to draft a full listing, then export CSV or PDF
    2. **Competitor Analysis**: see how other stores list the same product and what makes their pages stand out
    3. **Category Manager**: paste product names, one per line, to get a category path for each
    """)

# Session state
if "listing_results" not in st.session_state:
    st.session_state.listing_results = {}
if "competitor_results" not in st.session_state:
    st.session_state.competitor_results = {}
if "category_results" not in st.session_state:
    st.session_state.category_results = []
if "activity_history" not in st.session_state:
    st.session_state.activity_history = []

if st.session_state.activity_history:
    st.divider()
    st.subheader("Recent activity")
    for item in reversed(st.session_state.activity_history[-10:]):
        st.markdown(f"- **{item['kind']}**: {item['subject']} ({item['time']})")
