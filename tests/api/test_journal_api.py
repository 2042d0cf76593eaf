"""
Tests for journal entry and expense API endpoints.

These test the HTTP layer: status codes, response format,
and error handling. Business logic is tested in
test_ledger_service.py.
"""

from lounge_ledger.models.audit_log import AuditLog


def entry_payload(debit=500, credit=500, reference=None, **kwargs):
    payload = {
        "entry_date": "2024-01-05",
        "description": "Cash sale",
        "lines": [
            {"account_code": "1000", "debit": debit, "description": "POS Sale Receipt"},
            {"account_code": "4000", "credit": credit, "description": "POS Sale"},
        ],
        **kwargs,
    }
    if reference is not None:
        payload["reference"] = reference
    return payload


class TestCreateEntry:

    def test_balanced_entry_returns_201(self, seeded_client):
        response = seeded_client.post("/accounting/journal-entries", json=entry_payload())
        assert response.status_code == 201

    def test_response_includes_lines(self, seeded_client):
        response = seeded_client.post("/accounting/journal-entries", json=entry_payload())
        data = response.json()

        assert data["entry_type"] == "journal"
        assert data["status"] == "posted"
        assert float(data["total_amount"]) == 500
        assert len(data["lines"]) == 2
        assert data["lines"][0]["account_name"] == "Cash"
        assert float(data["lines"][1]["credit"]) == 500

    def test_unbalanced_entry_returns_400(self, seeded_client):
        response = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload(credit=300)
        )
        assert response.status_code == 400
        assert "does not balance" in response.json()["detail"]

    def test_empty_entry_returns_400(self, seeded_client):
        response = seeded_client.post("/accounting/journal-entries", json={
            "entry_date": "2024-01-05", "lines": [],
        })
        assert response.status_code == 400

    def test_negative_amount_returns_422(self, seeded_client):
        response = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload(debit=-5, credit=-5)
        )
        assert response.status_code == 422

    def test_unknown_account_returns_404(self, seeded_client):
        payload = entry_payload()
        payload["lines"][0]["account_code"] = "9999"

        response = seeded_client.post("/accounting/journal-entries", json=payload)
        assert response.status_code == 404

    def test_duplicate_reference_returns_409(self, seeded_client):
        seeded_client.post("/accounting/journal-entries", json=entry_payload(reference="INV-7"))
        response = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload(reference="INV-7")
        )
        assert response.status_code == 409

    def test_creation_is_audited(self, seeded_client, db_session):
        seeded_client.post(
            "/accounting/journal-entries",
            json=entry_payload(reference="INV-7", created_by=5),
        )

        log = db_session.query(AuditLog).one()
        assert log.event_type == "JOURNAL_ENTRY_CREATE"
        assert log.actor_id == 5
        assert log.reference == "INV-7"


class TestReadEntries:

    def test_get_entry(self, seeded_client):
        created = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload()
        ).json()

        response = seeded_client.get(f"/accounting/journal-entries/{created['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_missing_entry_returns_404(self, seeded_client):
        response = seeded_client.get("/accounting/journal-entries/404")
        assert response.status_code == 404

    def test_list_newest_first(self, seeded_client):
        seeded_client.post("/accounting/journal-entries", json=entry_payload())
        seeded_client.post(
            "/accounting/journal-entries",
            json=entry_payload(entry_date="2024-02-01", entry_type="adjustment"),
        )

        data = seeded_client.get("/accounting/journal-entries").json()
        assert [e["entry_date"] for e in data] == ["2024-02-01", "2024-01-05"]
        assert "lines" not in data[0]

    def test_list_filters(self, seeded_client):
        seeded_client.post("/accounting/journal-entries", json=entry_payload())
        seeded_client.post(
            "/accounting/journal-entries",
            json=entry_payload(entry_date="2024-02-01", entry_type="adjustment"),
        )

        by_type = seeded_client.get(
            "/accounting/journal-entries", params={"entry_type": "adjustment"}
        ).json()
        assert len(by_type) == 1

        by_date = seeded_client.get(
            "/accounting/journal-entries",
            params={"start_date": "2024-01-01", "end_date": "2024-01-31"},
        ).json()
        assert [e["entry_date"] for e in by_date] == ["2024-01-05"]


class TestUpdateAndDelete:

    def test_patch_header(self, seeded_client):
        created = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload()
        ).json()

        response = seeded_client.patch(
            f"/accounting/journal-entries/{created['id']}",
            json={"description": "Corrected", "status": "void"},
        )
        assert response.status_code == 200
        assert response.json()["description"] == "Corrected"
        assert response.json()["status"] == "void"

    def test_patch_missing_returns_404(self, seeded_client):
        response = seeded_client.patch(
            "/accounting/journal-entries/404", json={"description": "x"}
        )
        assert response.status_code == 404

    def test_patch_reference_collision_returns_409(self, seeded_client):
        seeded_client.post("/accounting/journal-entries", json=entry_payload(reference="A"))
        second = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload(reference="B")
        ).json()

        response = seeded_client.patch(
            f"/accounting/journal-entries/{second['id']}", json={"reference": "A"}
        )
        assert response.status_code == 409

    def test_delete(self, seeded_client):
        created = seeded_client.post(
            "/accounting/journal-entries", json=entry_payload()
        ).json()

        response = seeded_client.delete(f"/accounting/journal-entries/{created['id']}")
        assert response.status_code == 204

        response = seeded_client.get(f"/accounting/journal-entries/{created['id']}")
        assert response.status_code == 404

    def test_delete_missing_returns_404(self, seeded_client):
        response = seeded_client.delete("/accounting/journal-entries/404")
        assert response.status_code == 404


class TestExpenses:

    def test_record_expense(self, seeded_client):
        response = seeded_client.post("/accounting/expenses", json={
            "entry_date": "2024-03-01",
            "description": "March rent",
            "amount": 2000,
            "account_code": "5200",
        })
        assert response.status_code == 201

        data = response.json()
        assert data["entry_type"] == "expense"
        codes = {line["account_code"] for line in data["lines"]}
        assert codes == {"5200", "1000"}

    def test_list_expenses_only(self, seeded_client):
        seeded_client.post("/accounting/journal-entries", json=entry_payload())
        seeded_client.post("/accounting/expenses", json={
            "entry_date": "2024-03-01",
            "description": "Ice delivery",
            "amount": 45.5,
            "account_code": "5400",
        })

        data = seeded_client.get("/accounting/expenses").json()
        assert len(data) == 1
        assert data[0]["description"] == "Ice delivery"

    def test_zero_amount_returns_422(self, seeded_client):
        response = seeded_client.post("/accounting/expenses", json={
            "entry_date": "2024-03-01",
            "description": "Nothing",
            "amount": 0,
            "account_code": "5400",
        })
        assert response.status_code == 422

    def test_unknown_account_returns_404(self, seeded_client):
        response = seeded_client.post("/accounting/expenses", json={
            "entry_date": "2024-03-01",
            "description": "Mystery",
            "amount": 10,
            "account_code": "8888",
        })
        assert response.status_code == 404
