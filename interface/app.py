# interface/app.py
"""
Delivery Import - Main Application

Streamlit upload page: import a courier export into the delivery table and
review what was imported.
"""

import logging

import pandas as pd
import streamlit as st

from config import DEFAULT_BATCH_SIZE, STORE_PATH
from interface.processor import process_uploaded_file, records_to_dataframe
from storage.json_store import DeliveryStoreError, JsonDeliveryStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _report_frames(report) -> tuple[pd.DataFrame, pd.DataFrame]:
    status_df = pd.DataFrame(
        sorted(report.status_counts.items(), key=lambda kv: kv[1], reverse=True),
        columns=["Status", "Records"],
    )
    drivers_df = pd.DataFrame(
        [
            {
                "Driver": d.name,
                "Deliveries": d.deliveries,
                "Completed": d.completed,
                "Completion rate": f"{d.completion_rate:.0%}",
            }
            for d in report.top_drivers
        ]
    )
    return status_df, drivers_df


# ============================================================================
# PAGE CONFIG
# ============================================================================
st.set_page_config(
    page_title="Delivery Import",
    page_icon="🚚",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# ============================================================================
# SESSION STATE INITIALIZATION
# ============================================================================
if "result" not in st.session_state:
    st.session_state.result = None
if "df" not in st.session_state:
    st.session_state.df = None

# ============================================================================
# MAIN APP FLOW
# ============================================================================
st.title("🚚 Delivery Import")
st.caption("Upload a courier export (.xlsx or .csv). Columns are matched automatically.")

batch_size = st.number_input("Batch size", min_value=1, max_value=1000, value=DEFAULT_BATCH_SIZE, step=10)
uploaded_file = st.file_uploader("Delivery export", type=["xlsx", "xlsm", "csv", "tsv", "txt"])

if uploaded_file and st.button("📥 Import", type="primary"):
    with st.spinner("🔄 Importing deliveries..."):
        success, result, df, error = process_uploaded_file(uploaded_file, batch_size=int(batch_size))

    st.session_state.result = result
    st.session_state.df = df

    if success:
        st.success(f"✅ {result.message}")
    elif result.submission is None:
        st.error(f"❌ {result.message}")
    else:
        st.warning(f"⚠️ {result.message}")

# ============================================================================
# RESULTS SECTION
# ============================================================================
result = st.session_state.result
if result is not None and result.report is not None:
    report = result.report

    if not result.header_detected:
        st.info("No header row was recognized; the first row was used as headers. Many fields may be empty.")
    if result.unidentified_count:
        st.info(f"{result.unidentified_count} rows had no job ID or reference and were not stored.")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Records", report.total_records)
    c2.metric("Total cost", f"{report.cost.total:,.2f}")
    c3.metric(
        "Avg delivery time",
        f"{report.avg_delivery_minutes:.0f} min" if report.avg_delivery_minutes is not None else "—",
    )
    c4.metric("Drivers", report.unique_drivers)

    status_df, drivers_df = _report_frames(report)
    left, right = st.columns(2)
    with left:
        st.subheader("Status")
        st.dataframe(status_df, hide_index=True)
    with right:
        st.subheader("Top drivers")
        st.dataframe(drivers_df, hide_index=True)

    if st.session_state.df is not None:
        st.subheader("Imported records")
        st.dataframe(st.session_state.df, hide_index=True)

# ============================================================================
# STORED DATA
# ============================================================================
with st.expander("Stored deliveries"):
    try:
        stored = JsonDeliveryStore(STORE_PATH).load_all()
    except DeliveryStoreError as e:
        st.error(f"❌ Error: {e}")
        stored = []

    st.write(f"{len(stored)} deliveries in {STORE_PATH.name}")
    if stored:
        st.dataframe(records_to_dataframe(stored), hide_index=True)
