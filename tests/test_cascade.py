import pytest

from models.appointment import Appointment
from models.treatment import Treatment


def _treat(repo, appointment_id, patient_id, cost=10, description="Checkup"):
    return repo.create_treatment({
        "appointment_id": appointment_id,
        "patient_id": patient_id,
        "description": description,
        "cost": cost,
    })


def _counts(database):
    with database.session_scope() as db:
        return db.query(Appointment).count(), db.query(Treatment).count()


def test_delete_patient_removes_dependents(repo, database, make_patient, make_appointment):
    gon = make_patient("Gon Freecss")
    killua = make_patient("Killua Zoldyck", phone_number="+1234567891")

    a1 = make_appointment(gon, time="10:00")
    a2 = make_appointment(gon, time="11:00")
    a3 = make_appointment(killua, time="12:00")
    _treat(repo, a1, gon)
    _treat(repo, a2, gon)
    _treat(repo, a2, gon, description="Second")
    kept = _treat(repo, a3, killua)

    repo.delete_patient(gon)

    assert [p["id"] for p in repo.patients] == [killua]
    assert [a["id"] for a in repo.appointments] == [a3]
    assert [t["id"] for t in repo.treatments] == [kept]
    assert _counts(database) == (1, 1)


def test_delete_appointment_cascades_to_treatments(repo, database, make_patient, make_appointment):
    pid = make_patient()
    a1 = make_appointment(pid, time="10:00")
    a2 = make_appointment(pid, time="11:00")
    _treat(repo, a1, pid)
    other = _treat(repo, a2, pid)

    repo.delete_appointment(a1)

    assert [a["id"] for a in repo.appointments] == [a2]
    assert [t["id"] for t in repo.treatments] == [other]
    assert len(repo.patients) == 1


def test_delete_treatment_only(repo, make_patient, make_appointment):
    pid = make_patient()
    aid = make_appointment(pid)
    tid = _treat(repo, aid, pid)

    repo.delete_treatment(tid)

    assert repo.treatments == []
    assert len(repo.appointments) == 1


def test_database_cascade_without_repository(database, repo, make_patient, make_appointment):
    # ON DELETE CASCADE also holds for raw deletes against the table
    pid = make_patient()
    aid = make_appointment(pid)
    _treat(repo, aid, pid)

    with database.session_scope() as db:
        db.execute(Appointment.__table__.delete().where(Appointment.id == aid))

    assert _counts(database) == (0, 0)


def test_treatment_must_match_appointment_patient(repo, make_patient, make_appointment):
    from core.errors import ValidationFault

    gon = make_patient("Gon Freecss")
    killua = make_patient("Killua Zoldyck", phone_number="+1234567891")
    aid = make_appointment(gon)

    with pytest.raises(ValidationFault) as exc:
        _treat(repo, aid, killua)
    assert "patient_id" in exc.value.errors

    with pytest.raises(ValidationFault) as exc:
        _treat(repo, 999, gon)
    assert "appointment_id" in exc.value.errors


def test_moving_appointment_moves_its_treatments(repo, make_patient, make_appointment):
    gon = make_patient("Gon Freecss")
    killua = make_patient("Killua Zoldyck", phone_number="+1234567891")
    aid = make_appointment(gon)
    _treat(repo, aid, gon)

    repo.update_appointment(aid, {"patient_id": killua, "date": "2030-05-02", "time": "10:00"})
    repo.delete_patient(gon)

    assert len(repo.treatments) == 1
    assert repo.treatments[0]["patient_id"] == killua
