# db/database.py

from typing import Optional

from supabase import create_client, Client
import streamlit as st

from clinic_booking.config import AppConfig, load_config


def get_supabase_client(cfg: Optional[AppConfig] = None) -> Client:
    """
    Returns a Supabase client cached for the browser session.
    Uses the anon key: reads go through RLS and every write goes
    through the reserve_slot / generate_demo_slots procedures.
    """

    if "supabase_client" not in st.session_state:
        cfg = cfg or load_config()
        st.session_state.supabase_client = create_client(cfg.supabase.url, cfg.supabase.anon_key)

    return st.session_state.supabase_client
