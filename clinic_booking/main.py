from __future__ import annotations

import sys
import os

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

# IMPORTS
from clinic_booking.config import AppConfig, load_config
from clinic_booking.logging_config import setup_structured_logging
from clinic_booking.admin_dashboard import render_admin_dashboard
from clinic_booking.booking_page import BookingPage
from clinic_booking.directory import DirectoryStore
from clinic_booking.slot_query import SlotQuery
from clinic_booking.tools import SupabaseGateway
from clinic_booking.booking_flow import (
    ReservationWorkflow,
    WorkflowState,
    email_hint,
    generate_confirmation_text,
    slot_display,
)
from db.database import get_supabase_client

# --- CONSTANTS FOR UX ---
NAV_BOOKING = "Book an Appointment"
NAV_ADMIN = "Admin Dashboard"


def _init_app_state(cfg: AppConfig):
    if "logging_configured" not in st.session_state:
        setup_structured_logging(cfg.logging.level)
        st.session_state.logging_configured = True
    if "booking_page" not in st.session_state:
        client = get_supabase_client(cfg)
        if "directory" not in st.session_state:
            st.session_state.directory = DirectoryStore(client).load()
        st.session_state.booking_page = BookingPage(
            directory=st.session_state.directory,
            slot_query=SlotQuery(client),
            gateway=SupabaseGateway(client, cfg.clinic.notification_function),
            tzinfo=cfg.clinic.tzinfo,
        )


# --- CSS STYLING ---
def inject_custom_css():
    st.markdown("""
    <style>
        .slot-booked {
            color: #6b7280;
            font-weight: 600;
        }
        .slot-date {
            font-weight: 600;
        }

        /* --- Hide footer for clean look --- */
        footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


def main():
    st.set_page_config(
        page_title="Clinic Online Booking",
        page_icon="🗓️",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    inject_custom_css()
    try:
        cfg = load_config()
    except ValueError as e:
        st.error(f"Configuration error: {e}")
        st.stop()

    _init_app_state(cfg)

    with st.sidebar:
        st.title("Navigation")
        menu = st.radio("Go to", [NAV_BOOKING, NAV_ADMIN])

    if menu == NAV_BOOKING:
        run_booking_page(cfg)
    else:
        render_admin_dashboard(cfg)


def run_booking_page(cfg: AppConfig):
    page: BookingPage = st.session_state.booking_page

    st.title(f"🗓️ {cfg.clinic.name}")
    st.caption("Please start by choosing a store and a staff member.")
    st.markdown(
        f"After booking, please fill in our [pre-visit questionnaire]({cfg.clinic.questionnaire_url})."
    )

    # --- FILTERS ---
    st.subheader("Choose store and staff")
    col1, col2 = st.columns(2)

    location_ids = [""] + [loc.id for loc in page.locations]
    location_labels = {loc.id: loc.label for loc in page.locations}
    with col1:
        location_id = st.selectbox(
            "Store",
            location_ids,
            index=location_ids.index(page.selected_location) if page.selected_location in location_ids else 0,
            format_func=lambda v: location_labels.get(v, "Choose a store"),
            key="store-select",
        )
    page.select_location(location_id)

    staff_ids = [""] + [m.id for m in page.staff_options]
    staff_labels = {m.id: m.label for m in page.staff_options}
    with col2:
        staff_id = st.selectbox(
            "Staff",
            staff_ids,
            index=staff_ids.index(page.selected_staff) if page.selected_staff in staff_ids else 0,
            format_func=lambda v: staff_labels.get(v, "Choose a staff member"),
            disabled=not page.selected_location,
            key=f"staff-select-{page.selected_location}",
        )
        if not page.selected_location:
            st.caption("Choose a store first.")
    page.select_staff(staff_id)

    # --- RESERVATION PANEL ---
    if page.workflow is not None and page.workflow.is_open:
        render_reservation_panel(page, cfg)

    # --- SLOT LIST ---
    st.subheader("Available times")
    if not page.ready:
        st.info("Select a store and a staff member above to see the available times.")
        return
    if not page.slots:
        st.warning("There are no available times right now. Please try another store or staff member, or check back later.")
        return

    for slot in page.slots:
        day, start, end = slot_display(slot, cfg.clinic.tzinfo)
        c1, c2 = st.columns([3, 1])
        c1.markdown(f"<span class='slot-date'>{day}</span> &nbsp; {start} - {end}", unsafe_allow_html=True)
        with c2:
            if slot.is_open:
                if st.button("Reserve", key=f"reserve-{slot.id}", type="primary"):
                    page.open_reservation(slot)
                    st.rerun()
            else:
                st.markdown("<span class='slot-booked'>🔒 Booked</span>", unsafe_allow_html=True)


def render_reservation_panel(page: BookingPage, cfg: AppConfig):
    wf: ReservationWorkflow = page.workflow
    day, start, end = slot_display(wf.slot, cfg.clinic.tzinfo)

    with st.container(border=True):
        st.subheader("Enter your reservation details")
        st.markdown(f"**{day}** &nbsp; {start} - {end}", unsafe_allow_html=True)

        if wf.state is WorkflowState.COLLECTING:
            with st.form(key=f"reserve-form-{wf.slot.id}"):
                name = st.text_input("Name *", value=wf.form.customer_name, placeholder="e.g. Taro Yamada")
                phone = st.text_input("Phone (optional)", value=wf.form.phone, placeholder="e.g. 090-1234-5678")
                email = st.text_input("Email *", value=wf.form.email, placeholder="e.g. example@email.com")
                st.caption("We will send a confirmation email to this address.")
                submitted = st.form_submit_button("Confirm reservation", type="primary")

            wf.update(customer_name=name, phone=phone, email=email)
            hint = email_hint(wf.form.email)
            if hint:
                st.caption(f"⚠️ {hint}")

            st.info(
                f"After booking, please fill in the [pre-visit questionnaire]({cfg.clinic.questionnaire_url}) "
                "before your visit (1-2 minutes)."
            )

            if submitted:
                if not wf.can_submit:
                    st.warning("Please enter your name and email address.")
                else:
                    with st.spinner("Submitting..."):
                        wf.submit()
                    st.rerun()

            if st.button("Cancel", disabled=not wf.can_cancel, key=f"cancel-{wf.slot.id}"):
                page.close_reservation()
                st.rerun()
            return

        # --- TERMINAL STATES ---
        if wf.state is WorkflowState.SUCCEEDED:
            st.success(wf.message)
        elif wf.state is WorkflowState.PARTIAL_FAILURE:
            st.warning(wf.message)
        else:
            st.error(wf.message)

        if wf.booked:
            st.markdown(generate_confirmation_text(wf.slot, wf.form, cfg.clinic.tzinfo))
            st.markdown("**Please help us before your visit**")
            st.link_button("Open the pre-visit questionnaire", cfg.clinic.questionnaire_url)
            st.caption("Takes 1-2 minutes. This panel stays open until you close it.")

        if st.button("Close", key=f"close-{wf.slot.id}", type="primary"):
            page.close_reservation()
            st.rerun()


if __name__ == "__main__":
    main()
