"""
Tests for the order endpoints and the order/table lifecycle.
"""

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError

from rest_api.models import Order, Table


@pytest.fixture
def failing_table_writes():
    """Context manager that makes every UPDATE of a table fail at flush time."""
    def fail(mapper, connection, target):
        raise OperationalError("UPDATE restaurant_table", {}, Exception("disk I/O error"))

    @contextmanager
    def _failing():
        event.listen(Table, "before_update", fail)
        try:
            yield
        finally:
            event.remove(Table, "before_update", fail)

    return _failing


def get_table(client, headers, table_id):
    response = client.get(f"/api/tables/{table_id}", headers=headers)
    assert response.status_code == 200
    return response.json()["table"]


def set_status(client, headers, order_id, status):
    return client.patch(f"/api/orders/{order_id}/status", json={"status": status}, headers=headers)


class TestOrderTableLifecycle:
    """Creating an order occupies its table; completing it frees the table."""

    def test_create_then_complete_frees_table(self, client, auth_headers, make_table):
        table = make_table(auth_headers, 1)

        response = client.post(
            "/api/orders",
            json={
                "items": [{"id": "I1", "price": 100, "quantity": 2}],
                "subtotal": 200,
                "tax": 36,
                "total": 236,
                "tableId": table["id"],
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order created successfully"
        order = body["order"]
        assert order["status"] == "pending"
        assert order["tableId"] == table["id"]
        assert order["table"]["tableNumber"] == 1
        assert len(order["items"]) == 1
        line = order["items"][0]
        assert (line["id"], line["price"], line["quantity"]) == ("I1", 100, 2)
        assert order["total"] == 236
        assert get_table(client, auth_headers, table["id"])["status"] == "occupied"

        response = set_status(client, auth_headers, order["id"], "completed")
        assert response.status_code == 200
        assert response.json()["message"] == "Order status updated successfully"
        assert response.json()["order"]["status"] == "completed"
        assert get_table(client, auth_headers, table["id"])["status"] == "available"

    def test_cancel_keeps_table_occupied(self, client, auth_headers, make_table, make_order):
        table = make_table(auth_headers, 2)
        order = make_order(auth_headers, table_id=table["id"])

        assert set_status(client, auth_headers, order["id"], "cancelled").status_code == 200
        assert get_table(client, auth_headers, table["id"])["status"] == "occupied"

    def test_order_without_table_leaves_floor_alone(self, client, auth_headers, make_table, make_order):
        table = make_table(auth_headers, 3)
        order = make_order(auth_headers, orderType="takeout")

        assert order["tableId"] is None
        assert order["table"] is None
        assert order["orderType"] == "takeout"
        assert get_table(client, auth_headers, table["id"])["status"] == "available"

    def test_failed_table_write_rolls_back_new_order(
        self, client, db_session, auth_headers, make_table, failing_table_writes
    ):
        table = make_table(auth_headers, 5)

        with failing_table_writes():
            response = client.post(
                "/api/orders",
                json={
                    "items": [{"id": "I1", "price": 100, "quantity": 1}],
                    "subtotal": 100,
                    "total": 100,
                    "tableId": table["id"],
                },
                headers=auth_headers,
            )
        assert response.status_code == 500

        assert db_session.scalar(select(func.count(Order.id))) == 0
        assert client.get("/api/orders", headers=auth_headers).json()["orders"] == []
        assert get_table(client, auth_headers, table["id"])["status"] == "available"

    def test_failed_table_write_keeps_order_status(
        self, client, auth_headers, make_table, make_order, failing_table_writes
    ):
        table = make_table(auth_headers, 6)
        order = make_order(auth_headers, table_id=table["id"])
        set_status(client, auth_headers, order["id"], "served")

        with failing_table_writes():
            response = set_status(client, auth_headers, order["id"], "completed")
        assert response.status_code == 500

        current = client.get(f"/api/orders/{order['id']}", headers=auth_headers).json()["order"]
        assert current["status"] == "served"
        assert get_table(client, auth_headers, table["id"])["status"] == "occupied"

    def test_table_lists_active_orders(self, client, auth_headers, make_table, make_order):
        table = make_table(auth_headers, 4)
        active = make_order(auth_headers, table_id=table["id"])
        done = make_order(auth_headers, table_id=table["id"])
        set_status(client, auth_headers, done["id"], "completed")

        floor = get_table(client, auth_headers, table["id"])
        assert [o["id"] for o in floor["activeOrders"]] == [active["id"]]

    def test_client_cannot_choose_initial_status(self, client, auth_headers):
        response = client.post(
            "/api/orders",
            json={
                "items": [{"id": "I1", "price": 10, "quantity": 1}],
                "subtotal": 10,
                "total": 10,
                "status": "completed",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["order"]["status"] == "pending"


class TestStatusTransitions:
    """PATCH /api/orders/{id}/status"""

    def test_walks_forward_through_every_step(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        for status in ["confirmed", "preparing", "ready", "served", "completed"]:
            response = set_status(client, auth_headers, order["id"], status)
            assert response.status_code == 200, response.json()
            assert response.json()["order"]["status"] == status

    def test_same_status_is_noop(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        set_status(client, auth_headers, order["id"], "preparing")

        response = set_status(client, auth_headers, order["id"], "preparing")
        assert response.status_code == 200
        assert response.json()["order"]["status"] == "preparing"

    def test_same_status_on_terminal_is_noop(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        set_status(client, auth_headers, order["id"], "completed")
        assert set_status(client, auth_headers, order["id"], "completed").status_code == 200

    @pytest.mark.parametrize("terminal", ["completed", "cancelled"])
    def test_terminal_states_are_final(self, client, auth_headers, make_order, terminal):
        order = make_order(auth_headers)
        set_status(client, auth_headers, order["id"], terminal)

        response = set_status(client, auth_headers, order["id"], "pending")
        assert response.status_code == 400
        assert "Invalid status transition" in response.json()["message"]

    def test_backwards_move_rejected(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        set_status(client, auth_headers, order["id"], "ready")

        response = set_status(client, auth_headers, order["id"], "confirmed")
        assert response.status_code == 400
        stored = client.get(f"/api/orders/{order['id']}", headers=auth_headers).json()["order"]
        assert stored["status"] == "ready"

    def test_unknown_status_is_validation_error(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        response = set_status(client, auth_headers, order["id"], "eaten")
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    def test_missing_order_is_404(self, client, auth_headers):
        response = set_status(client, auth_headers, 424242, "confirmed")
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}


class TestOrderValidation:
    def test_empty_items_rejected(self, client, auth_headers):
        response = client.post(
            "/api/orders",
            json={"items": [], "subtotal": 0, "total": 0},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_zero_quantity_rejected(self, client, auth_headers):
        response = client.post(
            "/api/orders",
            json={"items": [{"id": "I1", "price": 5, "quantity": 0}], "subtotal": 0, "total": 0},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_unknown_table_rejected(self, client, auth_headers):
        response = client.post(
            "/api/orders",
            json={"items": [{"id": "I1", "price": 5, "quantity": 1}], "subtotal": 5, "total": 5, "tableId": 999},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Table not found"

    def test_other_tenants_table_rejected(self, client, auth_headers, other_headers, make_table):
        foreign = make_table(other_headers, 1)
        response = client.post(
            "/api/orders",
            json={
                "items": [{"id": "I1", "price": 5, "quantity": 1}],
                "subtotal": 5,
                "total": 5,
                "tableId": foreign["id"],
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert get_table(client, other_headers, foreign["id"])["status"] == "available"


class TestListOrders:
    """GET /api/orders"""

    def test_newest_first_with_pagination(self, client, auth_headers, make_order):
        created = [make_order(auth_headers) for _ in range(3)]

        response = client.get("/api/orders?page=1&limit=2", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert [o["id"] for o in body["orders"]] == [created[2]["id"], created[1]["id"]]
        assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

        page2 = client.get("/api/orders?page=2&limit=2", headers=auth_headers).json()
        assert [o["id"] for o in page2["orders"]] == [created[0]["id"]]

    def test_filters(self, client, auth_headers, make_table, make_order):
        table = make_table(auth_headers, 7)
        at_table = make_order(auth_headers, table_id=table["id"])
        takeout = make_order(auth_headers, orderType="takeout")
        set_status(client, auth_headers, takeout["id"], "confirmed")

        by_status = client.get("/api/orders?status=confirmed", headers=auth_headers).json()
        assert [o["id"] for o in by_status["orders"]] == [takeout["id"]]

        by_table = client.get(f"/api/orders?tableId={table['id']}", headers=auth_headers).json()
        assert [o["id"] for o in by_table["orders"]] == [at_table["id"]]

        by_type = client.get("/api/orders?orderType=takeout", headers=auth_headers).json()
        assert [o["id"] for o in by_type["orders"]] == [takeout["id"]]

    def test_date_filter_uses_utc_day(self, client, db_session, auth_headers, make_order):
        today = make_order(auth_headers)
        old = make_order(auth_headers)
        db_session.get(Order, old["id"]).created_at = datetime.now(timezone.utc) - timedelta(days=3)
        db_session.commit()

        day = datetime.now(timezone.utc).date().isoformat()
        body = client.get(f"/api/orders?date={day}", headers=auth_headers).json()
        assert [o["id"] for o in body["orders"]] == [today["id"]]

    def test_limit_over_maximum_rejected(self, client, auth_headers):
        assert client.get("/api/orders?limit=101", headers=auth_headers).status_code == 400


class TestUpdateAndDelete:
    def test_update_keeps_status(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        response = client.put(
            f"/api/orders/{order['id']}",
            json={"customerName": "Asha", "status": "completed"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        updated = response.json()["order"]
        assert updated["customerName"] == "Asha"
        assert updated["status"] == "pending"

    def test_delete(self, client, auth_headers, make_order):
        order = make_order(auth_headers)
        response = client.delete(f"/api/orders/{order['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get(f"/api/orders/{order['id']}", headers=auth_headers).status_code == 404


class TestOrderAnalytics:
    """GET /api/orders/analytics"""

    def test_totals_exclude_cancelled_revenue(self, client, auth_headers, make_order):
        make_order(auth_headers, items=[{"id": "A", "price": 100, "quantity": 1}])
        make_order(auth_headers, items=[{"id": "B", "price": 300, "quantity": 1}])
        cancelled = make_order(auth_headers, items=[{"id": "C", "price": 1000, "quantity": 1}])
        set_status(client, auth_headers, cancelled["id"], "cancelled")

        response = client.get("/api/orders/analytics", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["totalOrders"] == 3
        assert body["totalRevenue"] == 400
        assert body["averageOrderValue"] == 200
        assert body["statusBreakdown"] == {"pending": 2, "cancelled": 1}

    def test_date_range_is_inclusive(self, client, auth_headers, make_order):
        make_order(auth_headers)
        today = datetime.now(timezone.utc).date().isoformat()

        body = client.get(
            f"/api/orders/analytics?startDate={today}&endDate={today}", headers=auth_headers
        ).json()
        assert body["totalOrders"] == 1

    def test_empty(self, client, auth_headers):
        body = client.get("/api/orders/analytics", headers=auth_headers).json()
        assert body == {
            "totalOrders": 0,
            "totalRevenue": 0,
            "averageOrderValue": 0,
            "statusBreakdown": {},
        }
