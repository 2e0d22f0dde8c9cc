from datetime import date

import streamlit as st
from core.session_manager import require_unlocked
from core.helpers import money, render_clinic_sidebar, show_field_errors
from core.errors import StorageFault, ValidationFault


app = require_unlocked()
render_clinic_sidebar()
repo = app.repository

st.title("Treatments")

day = st.date_input("Revenue for", value=date.today())
col1, col2 = st.columns(2)
with col1:
    st.metric("Daily Revenue", money(repo.daily_revenue(day.isoformat())))
with col2:
    st.metric("Total Revenue", money(repo.total_revenue()))

appointments = {a["id"]: a for a in repo.appointments}


def treatment_form(key: str, treatment: dict | None = None):
    treatment = treatment or {}
    if not appointments:
        st.info("Create an appointment first.")
        return None
    ids = list(appointments)
    current = treatment.get("appointment_id")
    with st.form(key):
        appointment_id = st.selectbox(
            "Appointment", ids,
            index=ids.index(current) if current in ids else 0,
            format_func=lambda aid: (
                f"{appointments[aid]['patient_name']} — {appointments[aid]['date']} {appointments[aid]['time']}"
            ),
        )
        description = st.text_area("Description", treatment.get("description", ""))
        prescriptions = st.text_area("Prescriptions", treatment.get("prescriptions", ""))
        cost = st.text_input("Cost", str(treatment.get("cost", "0")))
        follow_up = st.text_input("Follow-up Date (YYYY-MM-DD, optional)", treatment.get("follow_up_date") or "")
        submitted = st.form_submit_button("Save")
    if not submitted:
        return None
    return {
        "appointment_id": appointment_id,
        "patient_id": appointments[appointment_id]["patient_id"],
        "description": description,
        "prescriptions": prescriptions,
        "cost": cost,
        "follow_up_date": follow_up,
    }


with st.expander("Add Treatment"):
    fields = treatment_form("add_treatment")
    if fields is not None:
        try:
            repo.create_treatment(fields)
            st.success("Treatment added successfully")
            st.rerun()
        except ValidationFault as e:
            show_field_errors(e)
        except StorageFault:
            st.error("Failed to save treatment. Please try again.")

treatments = repo.list_treatments()
if not treatments:
    st.info("No treatments recorded.")
    st.stop()

for t in treatments:
    with st.container():
        st.write(f"**{t['description']}** — {t['patient_name'] or 'Unknown'}")
        st.caption(
            f"Appointment: {t['appointment_date'] or '—'} {t['appointment_time'] or ''} • Cost: {money(t['cost'] or 0)}"
        )
        if t["prescriptions"]:
            st.write(f"Prescriptions: {t['prescriptions']}")
        if t["follow_up_date"]:
            st.write(f"Follow-up: {t['follow_up_date']}")

        col1, col2 = st.columns([1, 1])
        with col1:
            if st.button("Edit", key=f"edit_{t['id']}"):
                st.session_state["edit_id"] = ("treatment", t["id"])
        with col2:
            if st.button("Delete", key=f"del_{t['id']}"):
                try:
                    repo.delete_treatment(t["id"])
                    st.rerun()
                except StorageFault:
                    st.error("Failed to delete treatment. Please try again.")

        if st.session_state.get("edit_id") == ("treatment", t["id"]):
            fields = treatment_form(f"edit_treatment_{t['id']}", t)
            if fields is not None:
                try:
                    repo.update_treatment(t["id"], fields)
                    st.session_state["edit_id"] = None
                    st.success("Treatment updated successfully")
                    st.rerun()
                except ValidationFault as e:
                    show_field_errors(e)
                except StorageFault:
                    st.error("Failed to save treatment. Please try again.")

        st.markdown("---")
