import streamlit as st

from core.errors import ValidationFault


def show_field_errors(error: ValidationFault):
    """Render each invalid field inline, one message per field."""
    for field, message in error.errors.items():
        st.error(f"{field.replace('_', ' ').title()}: {message}")


def money(value) -> str:
    return f"${value:,.2f}"


LIGHT_COLORS = {
    "primary": "#2196F3",
    "background": "#F5F5F5",
    "surface": "#FFFFFF",
    "text": "#212121",
    "border": "#E0E0E0",
}

DARK_COLORS = {
    "primary": "#42A5F5",
    "background": "#121212",
    "surface": "#1E1E1E",
    "text": "#FFFFFF",
    "border": "#333333",
}


def theme_css(dark: bool) -> str:
    """Style block that recolors the main area and sidebar for the saved theme."""
    c = DARK_COLORS if dark else LIGHT_COLORS
    return f"""
        <style>
        [data-testid="stAppViewContainer"], [data-testid="stHeader"] {{
            background-color: {c["background"]}; color: {c["text"]};
        }}
        [data-testid="stSidebar"] {{
            background-color: {c["surface"]}; border-right: 1px solid {c["border"]};
        }}
        [data-testid="stAppViewContainer"] h1, [data-testid="stAppViewContainer"] h2,
        [data-testid="stAppViewContainer"] h3, [data-testid="stAppViewContainer"] p,
        [data-testid="stSidebar"] p, label {{ color: {c["text"]}; }}
        .stButton > button {{ border-color: {c["primary"]}; color: {c["primary"]}; }}
        </style>
        """


def apply_theme(dark: bool):
    st.markdown(theme_css(dark), unsafe_allow_html=True)


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def hide_sidebar_completely():
    """Hide the sidebar and its toggle (used on the lock screen)."""
    st.markdown(
        """
        <style>
        [data-testid="stSidebar"] { display: none !important; }
        [data-testid="collapsedControl"] { display: none !important; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_clinic_sidebar():
    """Render the main menu.

    Items:
    - Dashboard
    - Patients
    - Appointments
    - Treatments
    - Settings
    - Lock
    """
    from core.session_manager import get_app

    hide_default_sidebar_nav()
    apply_theme(get_app().preferences.is_dark_mode())
    with st.sidebar:
        st.markdown("### Clinic Menu")
        if st.button("Dashboard", use_container_width=True):
            st.switch_page("app.py")
        if st.button("Patients", use_container_width=True):
            st.switch_page("pages/1_Patients.py")
        if st.button("Appointments", use_container_width=True):
            st.switch_page("pages/2_Appointments.py")
        if st.button("Treatments", use_container_width=True):
            st.switch_page("pages/3_Treatments.py")
        if st.button("Settings", use_container_width=True):
            st.switch_page("pages/4_Settings.py")
        st.divider()
        if st.button("Lock", use_container_width=True):
            from core.session_manager import logout
            logout()
