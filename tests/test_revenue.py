import json

from services import revenue_service


def _t(cost, appointment_date=None, created_at="2030-05-01T09:00:00+00:00"):
    return {"cost": cost, "appointment_date": appointment_date, "created_at": created_at}


def test_daily_revenue_counts_only_matching_dates():
    treatments = [
        _t(50, "2030-05-02"),
        _t(25.5, "2030-05-02"),
        _t(100, "2030-05-03"),
    ]
    assert revenue_service.daily_revenue(treatments, "2030-05-02") == 75.5
    assert revenue_service.daily_revenue(treatments, "2030-05-04") == 0


def test_non_numeric_cost_counts_as_zero():
    treatments = [_t("abc", "2030-05-02"), _t(None, "2030-05-02"), _t("12.5", "2030-05-02")]
    assert revenue_service.daily_revenue(treatments, "2030-05-02") == 12.5
    assert revenue_service.total_revenue(treatments) == 12.5


def test_effective_date_falls_back_to_created_day():
    orphan = _t(40, None, created_at="2030-05-01T23:10:00+00:00")
    assert revenue_service.treatment_effective_date(orphan) == "2030-05-01"
    assert revenue_service.daily_revenue([orphan], "2030-05-01") == 40


def test_total_revenue_empty():
    assert revenue_service.total_revenue([]) == 0


def test_appointments_by_date_exact_match():
    appointments = [{"date": "2030-05-02"}, {"date": "2030-05-02 "}, {"date": "2030-05-03"}]
    assert revenue_service.appointments_by_date(appointments, "2030-05-02") == [{"date": "2030-05-02"}]


def test_status_counts_include_every_status():
    counts = revenue_service.status_counts([{"status": "scheduled"}, {"status": "scheduled"}])
    assert counts == {"scheduled": 2, "completed": 0, "canceled": 0}


def test_repository_views(repo, make_patient, make_appointment):
    pid = make_patient()
    a1 = make_appointment(pid, date="2030-05-02")
    a2 = make_appointment(pid, date="2030-05-03")
    repo.create_treatment({"appointment_id": a1, "patient_id": pid, "description": "A", "cost": "50"})
    repo.create_treatment({"appointment_id": a2, "patient_id": pid, "description": "B", "cost": ""})
    repo.create_treatment({"appointment_id": a2, "patient_id": pid, "description": "C", "cost": 20})

    assert repo.daily_revenue("2030-05-02") == 50
    assert repo.daily_revenue("2030-05-03") == 20
    assert repo.total_revenue() == 70
    assert [a["id"] for a in repo.appointments_by_date("2030-05-03")] == [a2]


def test_export_patients_is_full_projection(repo, make_patient):
    make_patient("Gon Freecss")
    make_patient("Killua Zoldyck", phone_number="+1234567891")

    exported = json.loads(repo.export_patients())
    assert exported == repo.list_patients()
    assert [p["full_name"] for p in exported] == ["Killua Zoldyck", "Gon Freecss"]
