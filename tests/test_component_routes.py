import pytest


@pytest.fixture()
def configured(client, subject):
    for component, max_marks, attempts in [("A1", 10, 1), ("A2", 10, 1), ("QZ", 5, 2)]:
        resp = client.post("/marks/components/config", json={
            "subject_id": subject.subject_id,
            "component": component,
            "max_marks": max_marks,
            "attempt_count": attempts,
        })
        assert resp.status_code == 200


def test_list_components(client, subject, configured):
    resp = client.get(f"/marks/components/{subject.subject_id}")
    body = resp.get_json()
    assert [c["component"] for c in body["components"]] == ["A1", "A2", "QZ"]
    assert body["available"] == ["A1", "A2", "QZ", "SM"]


def test_config_validation(client, subject):
    resp = client.post("/marks/components/config", json={
        "subject_id": subject.subject_id, "component": "QZ", "max_marks": 5, "attempt_count": 3,
    })
    assert resp.status_code == 400

    resp = client.post("/marks/components/config", json={
        "subject_id": 999, "component": "QZ", "max_marks": 5, "attempt_count": 1,
    })
    assert resp.status_code == 404


def test_save_component_mark(client, subject, students, configured):
    resp = client.post("/marks/components/marks", json={
        "usn": students[0].usn, "subject_id": subject.subject_id,
        "component": "qz", "attempt_no": 2, "marks": 4,
    })
    assert resp.status_code == 200
    assert resp.get_json()["quiz"] == 4
    assert resp.get_json()["overall_total"] == 4


def test_save_component_mark_errors(client, subject, students, configured):
    base = {"usn": students[0].usn, "subject_id": subject.subject_id, "attempt_no": 1}

    resp = client.post("/marks/components/marks", json={**base, "component": "A1", "marks": 11})
    assert resp.status_code == 400

    resp = client.post("/marks/components/marks", json={**base, "component": "SM", "marks": 1})
    assert resp.status_code == 404

    resp = client.post("/marks/components/marks", json={**base, "component": "A1", "marks": -1})
    assert resp.status_code == 400

    resp = client.post("/marks/components/marks", json={**base, "usn": "NOPE", "component": "A1", "marks": 1})
    assert resp.status_code == 404


def test_component_grid_is_paginated(client, subject, students, configured):
    client.post("/marks/components/marks", json={
        "usn": students[2].usn, "subject_id": subject.subject_id,
        "component": "A1", "attempt_no": 1, "marks": 9,
    })

    resp = client.get(
        f"/marks/components/grid?subject_id={subject.subject_id}&component=A1&attempt_no=1&page=2&size=2"
    )
    assert resp.status_code == 200

    body = resp.get_json()
    assert body["pagination"] == {"page": 2, "size": 2, "total_count": 3, "total_pages": 2}
    assert body["data"] == [{"usn": "4CS22CS003", "name": "Chaitra M", "marks": 9, "max_marks": 10}]


def test_component_grid_for_unconfigured_component(client, subject, students):
    resp = client.get(f"/marks/components/grid?subject_id={subject.subject_id}&component=SM&attempt_no=1")
    assert resp.status_code == 404


def test_component_grid_rejects_oversized_page(client, subject, configured):
    resp = client.get(f"/marks/components/grid?subject_id={subject.subject_id}&component=A1&attempt_no=1&size=500")
    assert resp.status_code == 400


def test_overall_totals_and_recalculate(client, subject, students, configured):
    for component, marks in [("A1", 8), ("A2", 10)]:
        client.post("/marks/components/marks", json={
            "usn": students[0].usn, "subject_id": subject.subject_id,
            "component": component, "attempt_no": 1, "marks": marks,
        })

    resp = client.post("/marks/components/recalculate", json={"subject_id": subject.subject_id})
    assert resp.status_code == 200
    assert resp.get_json()["succeeded"] == 1

    resp = client.get(f"/marks/components/totals/{subject.subject_id}")
    body = resp.get_json()
    assert body["pagination"]["total_count"] == 3
    first, second = body["data"][0], body["data"][1]
    assert first["usn"] == "4CS22CS001"
    assert first["assignment"] == 18
    assert first["overall_total"] == 18
    assert second["overall_total"] == 0


def test_export_overall_totals_csv(client, subject, students, configured):
    client.post("/marks/components/marks", json={
        "usn": students[1].usn, "subject_id": subject.subject_id,
        "component": "QZ", "attempt_no": 1, "marks": 5,
    })

    resp = client.get(f"/marks/components/totals/{subject.subject_id}/export?format=csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "CS501_Overall_Totals.csv" in resp.headers["Content-Disposition"]

    lines = resp.get_data(as_text=True).splitlines()
    assert lines[0] == "CS501 - Compiler Design (Overall Totals)"
    assert lines[1] == "USN,Name,CIE Total,Assignment,Quiz,Seminar,Overall Total"
    assert lines[3].startswith("4CS22CS002,Bharath K,")
    assert len(lines) == 5


def test_export_overall_totals_pdf(client, subject, students):
    resp = client.get(f"/marks/components/totals/{subject.subject_id}/export?format=pdf")
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.get_data().startswith(b"%PDF")


def test_export_rejects_unknown_format_and_subject(client, subject):
    assert client.get(f"/marks/components/totals/{subject.subject_id}/export?format=xlsx").status_code == 400
    assert client.get("/marks/components/totals/999/export").status_code == 404
