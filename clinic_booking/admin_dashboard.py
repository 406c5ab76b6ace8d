from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

import pandas as pd
import plotly.express as px
import streamlit as st

from clinic_booking.booking_flow import slot_display
from clinic_booking.config import AppConfig
from clinic_booking.directory import DirectoryStore
from clinic_booking.models import Slot
from clinic_booking.seeding import AdminSeeder
from clinic_booking.slot_query import fetch_slots_for_day
from db.database import get_supabase_client

FRAME_COLUMNS = ["slot_id", "store", "staff", "date", "start", "end", "status"]


def slots_frame(slots: List[Slot], tzinfo=None, directory: Optional[DirectoryStore] = None) -> pd.DataFrame:
    store_names: Dict[str, str] = {}
    staff_names: Dict[str, str] = {}
    if directory is not None:
        store_names = {loc.id: loc.label for loc in directory.locations}
        staff_names = {member.id: member.label for member in directory.staff}

    rows = []
    for slot in slots:
        day, start, end = slot_display(slot, tzinfo)
        rows.append(
            {
                "slot_id": slot.id,
                "store": store_names.get(slot.location_id, slot.location_id),
                "staff": staff_names.get(slot.staff_id, slot.staff_id),
                "date": day,
                "start": start,
                "end": end,
                "status": slot.status.value,
            }
        )
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def slot_metrics(df: pd.DataFrame) -> Dict[str, int]:
    if df.empty:
        return {"total": 0, "open": 0, "booked": 0}
    return {
        "total": len(df),
        "open": int((df["status"] == "open").sum()),
        "booked": int((df["status"] == "booked").sum()),
    }


def render_admin_dashboard(cfg: AppConfig):
    st.title("🗓️ Admin Dashboard (Demo)")

    supabase = get_supabase_client(cfg)
    tzinfo = cfg.clinic.tzinfo

    # --- Demo Slot Generation ---
    st.subheader("Demo Slots")
    use_date = st.checkbox("Generate for a specific date", value=False)
    seed_day: Optional[date] = None
    if use_date:
        seed_day = st.date_input("Date", value=datetime.now(tzinfo).date(), key="seed-date")

    if st.button("Generate today's demo slots" if not use_date else "Generate demo slots"):
        with st.spinner("Generating..."):
            result = AdminSeeder(supabase).generate_demo_slots(seed_day)
        if result.success:
            st.success(result.message)
        else:
            st.error(result.message)

    # --- Overview ---
    st.divider()
    st.subheader("Slot Overview")

    day = st.date_input("Day", value=datetime.now(tzinfo).date(), key="overview-date")

    if "directory" not in st.session_state:
        st.session_state.directory = DirectoryStore(supabase).load()
    directory: DirectoryStore = st.session_state.directory

    df = slots_frame(fetch_slots_for_day(supabase, day, tzinfo), tzinfo, directory)
    if df.empty:
        st.info("No slots found for this day.")
        return

    metrics = slot_metrics(df)
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Slots", metrics["total"])
    col2.metric("Open", metrics["open"])
    col3.metric("Booked", metrics["booked"])

    counts = df.groupby(["staff", "status"]).size().reset_index(name="slots")
    fig = px.bar(
        counts,
        x="staff",
        y="slots",
        color="status",
        barmode="stack",
        title=f"Slots per staff on {day.isoformat()}",
    )
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(df, use_container_width=True)

    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "📥 Download as CSV",
        csv,
        f"slots_{day.isoformat()}.csv",
        "text/csv",
        key="download-csv",
    )
