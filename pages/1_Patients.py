import streamlit as st
from core.session_manager import require_unlocked
from core.helpers import render_clinic_sidebar, show_field_errors
from core.errors import StorageFault, ValidationFault

# Page config is set globally in app.py

app = require_unlocked()
render_clinic_sidebar()
repo = app.repository

st.title("Patients")


def patient_form(key: str, patient: dict | None = None):
    patient = patient or {}
    with st.form(key):
        full_name = st.text_input("Full Name", patient.get("full_name", ""))
        age = st.text_input("Age", str(patient.get("age", "")))
        phone = st.text_input("Phone Number", patient.get("phone_number", ""), placeholder="+1234567890")
        category = st.text_input("Category (optional)", patient.get("category") or "")
        notes = st.text_area("Medical Notes", patient.get("medical_notes", ""))
        submitted = st.form_submit_button("Save")
    if not submitted:
        return None
    return {
        "full_name": full_name,
        "age": age,
        "phone_number": phone,
        "category": category,
        "medical_notes": notes,
    }


with st.expander("Add Patient"):
    fields = patient_form("add_patient")
    if fields is not None:
        try:
            repo.create_patient(fields)
            st.success("Patient added successfully")
            st.rerun()
        except ValidationFault as e:
            show_field_errors(e)
        except StorageFault:
            st.error("Failed to save patient. Please try again.")

# Search bar
query = st.text_input("Search by name or phone", placeholder="e.g., Gon or 555")
patients = repo.search_patients(query)

if not patients:
    st.info("No patients found.")
    st.stop()

for p in patients:
    with st.container():
        st.write(f"**{p['full_name']}**  —  Age {p['age']}, {p['phone_number']}")
        if p["category"]:
            st.caption(p["category"])

        col1, col2, col3 = st.columns([1, 1, 1])
        with col1:
            if st.button("Details", key=f"view_{p['id']}"):
                st.session_state["edit_id"] = ("patient_view", p["id"])
        with col2:
            if st.button("Edit", key=f"edit_{p['id']}"):
                st.session_state["edit_id"] = ("patient", p["id"])
        with col3:
            if st.button("Delete", key=f"del_{p['id']}"):
                try:
                    repo.delete_patient(p["id"])
                    st.success("Patient and their records deleted")
                    st.rerun()
                except StorageFault:
                    st.error("Failed to delete patient. Please try again.")

        if st.session_state.get("edit_id") == ("patient_view", p["id"]):
            st.write(p["medical_notes"] or "No notes.")
            st.write("Appointments:")
            for a in repo.appointments_for_patient(p["id"]):
                st.write(f"- {a['date']} {a['time']} ({a['status']})")
            st.write("Treatments:")
            for t in repo.treatments_for_patient(p["id"]):
                st.write(f"- {t['description']} ({t['cost']:.2f})")

        if st.session_state.get("edit_id") == ("patient", p["id"]):
            fields = patient_form(f"edit_patient_{p['id']}", p)
            if fields is not None:
                try:
                    repo.update_patient(p["id"], fields)
                    st.session_state["edit_id"] = None
                    st.success("Patient updated successfully")
                    st.rerun()
                except ValidationFault as e:
                    show_field_errors(e)
                except StorageFault:
                    st.error("Failed to save patient. Please try again.")

        st.markdown("---")
