import streamlit as st
from core.session_manager import require_unlocked
from core.helpers import money, render_clinic_sidebar, show_field_errors
from core.errors import StorageFault, ValidationFault


app = require_unlocked()
render_clinic_sidebar()
gate = app.gate
repo = app.repository

st.title("Settings")

# Appearance
st.subheader("Appearance")
dark = st.toggle("Dark mode", value=app.preferences.is_dark_mode())
if dark != app.preferences.is_dark_mode():
    app.preferences.toggle_theme()
    st.rerun()

st.write("---")

# Security
st.subheader("Security")
if gate.has_pin():
    st.success("PIN lock is enabled.")
    if st.button("Disable PIN"):
        gate.clear_pin()
        st.rerun()

    wants_bio = st.toggle("Unlock with biometrics", value=gate.biometric_enabled())
    if wants_bio != gate.biometric_enabled():
        if gate.set_biometric_enabled(wants_bio) != wants_bio:
            st.error("Failed to enable biometric authentication")
        else:
            st.rerun()

with st.form("pin_form"):
    pin = st.text_input("New PIN", type="password")
    confirm = st.text_input("Confirm PIN", type="password")
    submitted = st.form_submit_button("Set PIN")
if submitted:
    try:
        gate.set_pin(pin, confirm)
        st.success("PIN set successfully")
    except ValidationFault as e:
        show_field_errors(e)
    except StorageFault:
        st.error("Failed to set PIN")

st.write("---")

# Data
st.subheader("Data")
st.metric("Total Revenue", money(repo.total_revenue()))
st.download_button(
    "Export Patients (JSON)",
    data=repo.export_patients(),
    file_name="patients.json",
    mime="application/json",
)

pending = app.notifications.pending()
st.caption(f"{len(pending)} reminder(s) pending")
