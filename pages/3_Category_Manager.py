import streamlit as st
import pandas as pd
import logging
from datetime import datetime
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from studio.config import get_settings
from studio.export import categories_to_text
from studio.generator import assign_categories, split_product_lines
from studio.llm_client import GeneratorClient
from studio.log import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

DEFAULT_ITEMS = [
    "Li-Ion 18650 Cell",
    "FlySky FS-16X 2.4GHz",
    "DIY Paper Foldscope",
    "MT02DX Stripper",
]

st.set_page_config(page_title="Category Manager", page_icon="🗂️", layout="wide")
st.title("3. Bulk Categorizer")
st.markdown(
    f"Paste your product list below (one item per line). The AI will map them to the {settings.store_name} taxonomy."
)

if "category_results" not in st.session_state:
    st.session_state.category_results = []
if "activity_history" not in st.session_state:
    st.session_state.activity_history = []

col_input, col_output = st.columns([2, 3])

with col_input:
    items_text = st.text_area(
        "Products",
        value="\n".join(DEFAULT_ITEMS),
        height=260,
        placeholder="Product 1\nProduct 2\nProduct 3",
    )
    item_list = split_product_lines(items_text)
    st.caption(f"{len(item_list)} items")

    categorize_clicked = st.button(
        "Categorize", type="primary", use_container_width=True, disabled=not item_list
    )

if categorize_clicked and item_list:
    st.session_state.category_results = []
    client = GeneratorClient(settings)
    with col_output:
        with st.spinner(f"Categorizing {len(item_list)} products..."):
            try:
                st.session_state.category_results = assign_categories(client, item_list)
                st.session_state.activity_history.append(
                    {
                        "kind": "Categories",
                        "subject": f"{len(item_list)} products",
                        "time": datetime.now().strftime("%H:%M"),
                    }
                )
            except Exception as e:
                logger.exception("Category assignment failed")
                st.error(f"Category assignment failed: {e}")

with col_output:
    results = st.session_state.category_results
    if not results:
        st.info("Category suggestions will appear here.")
    else:
        df = pd.DataFrame(
            [
                {
                    "#": i,
                    "Product": r.product_name,
                    "Category": r.assigned_category,
                    "Reasoning": r.reasoning,
                }
                for i, r in enumerate(results, 1)
            ]
        )
        st.dataframe(df, use_container_width=True, hide_index=True)

        st.markdown("**Copy all results**")
        st.code(categories_to_text(results), language=None)
