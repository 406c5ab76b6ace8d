from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import streamlit as st
from dateutil import tz


DEFAULT_TIMEZONE = "Asia/Tokyo"
DEFAULT_QUESTIONNAIRE_URL = "https://forms.gle/E58ZtR4J3n3pcytp7"
DEFAULT_NOTIFICATION_FUNCTION = "send-reservation-email"


# ---------------------- DATA CLASSES ----------------------

@dataclass
class SupabaseConfig:
    url: str
    anon_key: str


@dataclass
class ClinicConfig:
    name: str = "Clinic Online Booking"
    timezone: str = DEFAULT_TIMEZONE
    questionnaire_url: str = DEFAULT_QUESTIONNAIRE_URL
    notification_function: str = DEFAULT_NOTIFICATION_FUNCTION

    @property
    def tzinfo(self):
        return resolve_timezone(self.timezone)


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    supabase: SupabaseConfig
    clinic: ClinicConfig = field(default_factory=ClinicConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def resolve_timezone(name: str):
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone: {name!r}")
    return zone


# ---------------------- LOADING ----------------------

def load_config(secrets: Optional[Mapping[str, Any]] = None) -> AppConfig:
    if secrets is None:
        secrets = st.secrets

    # --- Supabase (required) ---
    try:
        has_supabase = "supabase" in secrets
    except FileNotFoundError as e:
        # st.secrets raises this when no secrets.toml exists
        raise ValueError(f"No secrets file found: {e}") from e
    if not has_supabase:
        raise ValueError("Missing [supabase] section in secrets.")
    url = str(secrets["supabase"].get("url", "") or "")
    if not url.startswith("http"):
        raise ValueError("Invalid supabaseUrl: Must be a valid HTTP or HTTPS URL.")

    supabase_cfg = SupabaseConfig(
        url=url,
        anon_key=str(secrets["supabase"].get("anon_key", "") or ""),
    )

    # --- Clinic (optional) ---
    clinic_section = secrets.get("clinic", {}) or {}
    clinic_cfg = ClinicConfig(
        name=clinic_section.get("name", ClinicConfig.name),
        timezone=clinic_section.get("timezone", DEFAULT_TIMEZONE),
        questionnaire_url=clinic_section.get("questionnaire_url", DEFAULT_QUESTIONNAIRE_URL),
        notification_function=clinic_section.get(
            "notification_function", DEFAULT_NOTIFICATION_FUNCTION
        ),
    )
    # Unknown zone names fail here
    resolve_timezone(clinic_cfg.timezone)

    # --- Logging (optional) ---
    logging_section = secrets.get("logging", {}) or {}
    logging_cfg = LoggingConfig(level=str(logging_section.get("level", "INFO")))

    return AppConfig(
        supabase=supabase_cfg,
        clinic=clinic_cfg,
        logging=logging_cfg,
    )
