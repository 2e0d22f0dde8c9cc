import streamlit as st

from core.errors import AuthFault, StorageFault
from core.helpers import hide_sidebar_completely, money, render_clinic_sidebar
from core.session_manager import get_app, init_session_state
from core.time_utils import today_str


def render_lock_screen(app):
    hide_sidebar_completely()

    st.title("Clinic Manager")
    st.write("Enter your PIN to unlock.")

    with st.form("unlock_form"):
        pin = st.text_input("PIN", type="password", max_chars=12)
        submitted = st.form_submit_button("Unlock")

    if submitted:
        try:
            app.gate.unlock(pin)
            st.rerun()
        except AuthFault:
            st.error("Incorrect PIN")

    if app.gate.biometric_enabled() and app.gate.biometric.is_available():
        if st.button("Use Biometric"):
            if app.gate.try_biometric():
                st.rerun()
            else:
                st.error("Biometric authentication failed")


def render_dashboard(app):
    render_clinic_sidebar()

    repo = app.repository
    today = today_str()

    st.title("Clinic Manager")

    for note in app.notifications.drain_inbox():
        st.toast(f"{note['title']}: {note['body']}")

    colA, colB, colC = st.columns(3)
    with colA:
        st.metric("Patients", len(repo.patients))
    with colB:
        st.metric("Appointments Today", len(repo.appointments_by_date(today)))
    with colC:
        st.metric("Revenue Today", money(repo.daily_revenue(today)))

    st.write("## Today's Appointments")
    todays = repo.appointments_by_date(today)
    if not todays:
        st.info("No appointments today.")
    for a in todays:
        st.write(f"**{a['time']}** - {a['patient_name'] or 'Unknown'} ({a['status']})")
        if a["notes"]:
            st.caption(a["notes"])

    st.write("## Status Overview")
    for status, count in repo.appointment_status_counts().items():
        st.write(f"{status.title()}: {count}")


def main():
    st.set_page_config(
        page_title="Clinic Manager",
        page_icon="🏥",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    init_session_state()

    try:
        app = get_app()
    except StorageFault as e:
        st.error(f"Failed to initialize database: {e}")
        st.stop()

    if not app.gate.is_authenticated:
        render_lock_screen(app)
        return

    render_dashboard(app)


if __name__ == "__main__":
    main()
