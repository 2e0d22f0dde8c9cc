from datetime import date

import streamlit as st
from core.config import APPOINTMENT_STATUSES
from core.session_manager import require_unlocked
from core.helpers import render_clinic_sidebar, show_field_errors
from core.errors import StorageFault, ValidationFault


app = require_unlocked()
render_clinic_sidebar()
repo = app.repository

st.title("Appointments")

patient_names = {p["id"]: p["full_name"] for p in repo.patients}


def appointment_form(key: str, appointment: dict | None = None):
    appointment = appointment or {}
    if not patient_names:
        st.info("Add a patient first.")
        return None
    ids = list(patient_names)
    current = appointment.get("patient_id")
    with st.form(key):
        patient_id = st.selectbox(
            "Patient", ids,
            index=ids.index(current) if current in ids else 0,
            format_func=lambda pid: patient_names[pid],
        )
        day = st.text_input("Date (YYYY-MM-DD)", appointment.get("date", date.today().isoformat()))
        slot = st.text_input("Time (HH:MM)", appointment.get("time", "09:00"))
        status = st.selectbox(
            "Status", APPOINTMENT_STATUSES,
            index=APPOINTMENT_STATUSES.index(appointment.get("status", "scheduled")),
        )
        notes = st.text_area("Notes", appointment.get("notes", ""))
        submitted = st.form_submit_button("Save")
    if not submitted:
        return None
    return {"patient_id": patient_id, "date": day, "time": slot, "status": status, "notes": notes}


with st.expander("New Appointment"):
    fields = appointment_form("add_appointment")
    if fields is not None:
        try:
            repo.create_appointment(fields)
            st.success("Appointment created successfully")
            st.rerun()
        except ValidationFault as e:
            show_field_errors(e)
        except StorageFault:
            st.error("Failed to save appointment. Please try again.")

selected = st.date_input("Show appointments on", value=None)
appointments = (
    repo.appointments_by_date(selected.isoformat()) if selected else repo.list_appointments()
)

if not appointments:
    st.info("No appointments found.")
    st.stop()

for a in appointments:
    with st.container():
        st.write(f"**{a['date']} {a['time']}** — {a['patient_name'] or 'Unknown'}")
        st.caption(f"Status: {a['status']}" + (f" • {a['notes']}" if a["notes"] else ""))

        col1, col2 = st.columns([1, 1])
        with col1:
            if st.button("Edit", key=f"edit_{a['id']}"):
                st.session_state["edit_id"] = ("appointment", a["id"])
        with col2:
            if st.button("Delete", key=f"del_{a['id']}"):
                try:
                    repo.delete_appointment(a["id"])
                    st.rerun()
                except StorageFault:
                    st.error("Failed to delete appointment. Please try again.")

        if st.session_state.get("edit_id") == ("appointment", a["id"]):
            fields = appointment_form(f"edit_appointment_{a['id']}", a)
            if fields is not None:
                try:
                    repo.update_appointment(a["id"], fields)
                    st.session_state["edit_id"] = None
                    st.success("Appointment updated successfully")
                    st.rerun()
                except ValidationFault as e:
                    show_field_errors(e)
                except StorageFault:
                    st.error("Failed to save appointment. Please try again.")

        st.markdown("---")
