"""Tests for the scouting entry API."""

import io
import json


def _entry(season_id, team, match, **extra):
    return {
        "teamNumber": team,
        "matchNumber": match,
        "alliance": "red",
        "scoutName": "Ada",
        "seasonId": season_id,
        **extra,
    }


def test_create_stamps_id_and_synced(client, season):
    response = client.post("/api/scouting", json=_entry(season["id"], "611", "1"))
    assert response.status_code == 200
    stored = response.get_json()
    assert stored["id"]
    assert stored["timestamp"]
    assert stored["synced"] is True


def test_create_keeps_client_id(client, season):
    stored = client.post(
        "/api/scouting", json=_entry(season["id"], "611", "1", id="abc", synced=False)
    ).get_json()
    assert stored["id"] == "abc"
    assert stored["synced"] is True


def test_create_validation_errors(client, season):
    response = client.post(
        "/api/scouting",
        json={"teamNumber": "", "matchNumber": "3", "alliance": "green"},
    )
    assert response.status_code == 400
    params = {e["param"] for e in response.get_json()["errors"]}
    assert params == {"teamNumber", "alliance", "seasonId"}


def test_bulk_is_append_only(client, season):
    batch = [_entry(season["id"], "611", "1", id="dup")]
    for _ in range(2):
        body = client.post("/api/scouting/bulk", json={"entries": batch}).get_json()
        assert body["message"] == "1 entries saved"

    stored = client.get(f"/api/scouting?seasonId={season['id']}").get_json()
    assert [e["id"] for e in stored] == ["dup", "dup"]


def test_bulk_requires_entries_list(client):
    response = client.post("/api/scouting/bulk", json={"entries": "nope"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "Entries array is required"


def test_list_filters_by_team_and_requires_season(client, season):
    for team in ("611", "254", "611"):
        client.post("/api/scouting", json=_entry(season["id"], team, "1"))

    assert client.get("/api/scouting").status_code == 400
    by_team = client.get(
        f"/api/scouting?seasonId={season['id']}&teamNumber=611"
    ).get_json()
    assert len(by_team) == 2


def test_stats(client, season):
    client.post(
        "/api/scouting",
        json=_entry(season["id"], "611", "1", timestamp="2024-03-01T10:00:00+00:00"),
    )
    client.post(
        "/api/scouting",
        json=_entry(season["id"], "254", "1", timestamp="2024-03-02T10:00:00Z"),
    )
    client.post(
        "/api/scouting",
        json=_entry(season["id"], "611", "2", timestamp="2024-03-01T12:00:00+00:00"),
    )

    stats = client.get("/api/scouting/stats").get_json()
    assert stats == {
        "totalMatches": 3,
        "totalTeams": 2,
        "dataPoints": 30,
        "lastUpdated": "2024-03-02T10:00:00+00:00",
    }


def test_delete_by_season(client, season):
    client.post("/api/scouting", json=_entry(season["id"], "611", "1"))
    client.post("/api/scouting", json=_entry("other", "611", "1"))

    assert client.delete(f"/api/scouting/{season['id']}").status_code == 200
    assert client.get(f"/api/scouting?seasonId={season['id']}").get_json() == []
    assert len(client.get("/api/scouting?seasonId=other").get_json()) == 1


def test_export_csv_attachment(client, season):
    # Posted pre-serialized so the extra columns keep their first-seen order.
    client.post(
        "/api/scouting",
        data=json.dumps(
            _entry(season["id"], "611", "1", notes='fast, "smooth"', autoNotes=3)
        ),
        content_type="application/json",
    )

    response = client.get(f"/api/scouting/export/{season['id']}?format=csv")

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert (
        response.headers["Content-Disposition"]
        == "attachment; filename=scouting-data-Crescendo.csv"
    )
    lines = response.get_data(as_text=True).splitlines()
    assert lines[0] == (
        "teamNumber,matchNumber,alliance,scoutName,timestamp,notes,autoNotes"
    )
    assert lines[1].endswith(',"fast, ""smooth""",3')


def test_export_json_and_errors(client, season):
    assert client.get(f"/api/scouting/export/{season['id']}").status_code == 404

    client.post("/api/scouting", json=_entry(season["id"], "611", "1"))
    body = client.get(f"/api/scouting/export/{season['id']}?format=json")
    assert body.mimetype == "application/json"
    assert len(json.loads(body.get_data(as_text=True))) == 1

    assert (
        client.get(f"/api/scouting/export/{season['id']}?format=xml").status_code
        == 400
    )


def test_csv_export_import_round_trip(client, season):
    for team, match in (("611", "1"), ("254", "2"), ("1678", "3")):
        client.post(
            "/api/scouting", json=_entry(season["id"], team, match, autoNotes=4)
        )
    exported = client.get(f"/api/scouting/export/{season['id']}").get_data()

    target = client.post(
        "/api/seasons",
        json={
            "name": "Offseason",
            "year": 2024,
            "startDate": "2024-09-01",
            "endDate": "2024-10-01",
            "gameName": "CRESCENDO",
        },
    ).get_json()
    response = client.post(
        "/api/scouting/import",
        data={
            "seasonId": target["id"],
            "format": "csv",
            "file": (io.BytesIO(exported), "export.csv"),
        },
        content_type="multipart/form-data",
    )

    assert response.get_json() == {
        "message": "Import complete. 3 entries imported, 0 skipped.",
        "imported": 3,
        "skipped": 0,
    }
    imported = client.get(f"/api/scouting?seasonId={target['id']}").get_json()
    assert [(e["teamNumber"], e["matchNumber"]) for e in imported] == [
        ("611", "1"),
        ("254", "2"),
        ("1678", "3"),
    ]
    assert all(e["autoNotes"] == "4" and e["synced"] is True for e in imported)


def test_json_import_skips_incomplete_rows(client, season):
    payload = json.dumps(
        [
            {"teamNumber": "611", "matchNumber": "1", "seasonId": "elsewhere"},
            {"teamNumber": "611"},
        ]
    ).encode()
    response = client.post(
        "/api/scouting/import",
        data={
            "seasonId": season["id"],
            "format": "json",
            "file": (io.BytesIO(payload), "entries.json"),
        },
        content_type="multipart/form-data",
    )

    assert response.get_json()["skipped"] == 1
    imported = client.get(f"/api/scouting?seasonId={season['id']}").get_json()
    assert len(imported) == 1
    assert imported[0]["seasonId"] == season["id"]


def test_import_errors(client, season):
    def upload(content, fmt="json", season_id=season["id"]):
        return client.post(
            "/api/scouting/import",
            data={
                "seasonId": season_id,
                "format": fmt,
                "file": (io.BytesIO(content), "upload"),
            },
            content_type="multipart/form-data",
        )

    assert upload(b"{not json").get_json()["message"] == "Invalid JSON format"
    assert upload(b"{}").status_code == 400
    assert upload(b"a,b", fmt="xml").status_code == 400
    assert upload(b"[]", season_id="missing").status_code == 404
    assert upload(b"[]", season_id="").status_code == 400
