"""
Tests for the business event hooks and the sync endpoints.
"""

from datetime import datetime
from decimal import Decimal

from lounge_ledger.models.audit_log import AuditLog
from lounge_ledger.models.journal_entry import JournalEntry
from lounge_ledger.models.pos import InventoryItem, InventoryMovement, Order


def completed_order(order_id="c0ffee00-1234", total=64.5, status="Completed"):
    return {
        "id": order_id,
        "status": status,
        "total": total,
        "timestamp": "2024-03-10T21:15:00",
    }


class TestOrderHook:

    def test_completed_order_is_posted(self, seeded_client):
        response = seeded_client.post("/accounting/events/orders", json=completed_order())
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "posted"
        assert data["reference"] == "c0ffee00-1234"
        assert data["entry_id"] is not None

    def test_pending_order_is_skipped(self, seeded_client):
        response = seeded_client.post(
            "/accounting/events/orders", json=completed_order(status="Pending")
        )
        assert response.json()["status"] == "skipped"

    def test_repeat_is_duplicate(self, seeded_client):
        seeded_client.post("/accounting/events/orders", json=completed_order())
        response = seeded_client.post("/accounting/events/orders", json=completed_order())

        assert response.status_code == 200
        assert response.json()["status"] == "duplicate"

    def test_ledger_failure_still_returns_200(self, client):
        # Unseeded chart: the posting fails but the POS is not bothered.
        response = client.post("/accounting/events/orders", json=completed_order())

        assert response.status_code == 200
        assert response.json()["status"] == "failed"


class TestMovementHook:

    def test_stock_usage_is_posted(self, seeded_client, db_session):
        response = seeded_client.post("/accounting/events/inventory-movements", json={
            "id": 77,
            "item_id": 4,
            "item_name": "Lime",
            "movement_type": "OUT",
            "quantity": 10,
            "unit_cost": 0.3,
            "reference_type": "SALES_ORDER",
            "movement_date": "2024-03-10T18:00:00",
        })

        assert response.json()["status"] == "posted"
        entry = db_session.query(JournalEntry).filter_by(reference="MOV-77").one()
        assert entry.total_amount == Decimal("3.0")

    def test_unknown_movement_type_returns_422(self, seeded_client):
        response = seeded_client.post("/accounting/events/inventory-movements", json={
            "id": 78, "item_id": 4, "movement_type": "SIDEWAYS", "quantity": 1,
        })
        assert response.status_code == 422


class TestSync:

    def _pos_activity(self, db_session):
        lime = InventoryItem(sku="LIME", name="Lime")
        db_session.add_all([
            lime,
            Order(id="order-1", status="Completed", timestamp=datetime(2024, 3, 1, 20),
                  total=Decimal("40")),
            Order(id="order-2", status="Cancelled", timestamp=datetime(2024, 3, 1, 21),
                  total=Decimal("15")),
            InventoryMovement(item=lime, movement_type="IN", quantity=50,
                              total_cost=Decimal("15"), reference_type="PURCHASE_ORDER",
                              movement_date=datetime(2024, 3, 1, 9)),
        ])
        db_session.commit()

    def test_status_then_sync(self, client, db_session):
        self._pos_activity(db_session)

        status = client.get("/accounting/sync").json()
        assert status == {
            "unsynced_orders": 1,
            "unsynced_inventory": 1,
            "total_unsynced": 2,
        }

        response = client.post("/accounting/sync")
        assert response.status_code == 200
        data = response.json()
        assert data["total_synced"] == 2
        assert data["sales"] == {"synced": 1, "total": 1, "failed": 0}
        assert data["inventory"] == {"synced": 1, "total": 1, "failed": 0}

        assert client.get("/accounting/sync").json()["total_unsynced"] == 0

    def test_sync_is_audited(self, client, db_session):
        self._pos_activity(db_session)
        client.post("/accounting/sync", json={"actor_id": 3})

        log = db_session.query(AuditLog).filter_by(event_type="ACCOUNTING_SYNC").one()
        assert log.actor_id == 3
        assert '"total_synced": 2' in log.details

    def test_sync_with_date_range(self, client, db_session):
        self._pos_activity(db_session)

        data = client.post("/accounting/sync", json={
            "start_date": "2024-04-01", "end_date": "2024-04-30",
        }).json()
        assert data["total_available"] == 0

    def test_reversed_range_returns_400(self, client):
        response = client.post("/accounting/sync", json={
            "start_date": "2024-04-30", "end_date": "2024-04-01",
        })
        assert response.status_code == 400
