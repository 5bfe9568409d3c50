"""
Tests for analytics reports and their aggregation helpers.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from rest_api.models import Order
from rest_api.services.domain.analytics_service import aggregate_line_items, daily_revenue
from shared.utils.schemas import OrderLineItem


def fake_order(total, created_at, items=()):
    return SimpleNamespace(
        total=total,
        created_at=created_at,
        items=[OrderLineItem.model_validate(i) for i in items],
    )


class TestDashboardAccess:
    def test_free_plan_gets_402(self, client, auth_headers):
        response = client.get("/api/analytics/dashboard", headers=auth_headers)
        assert response.status_code == 402
        assert response.json() == {
            "message": "Upgrade required",
            "currentPlan": "free",
            "requiredPlan": "basic",
        }

    def test_basic_plan_gets_dashboard(self, client, auth_headers, upgrade):
        upgrade(auth_headers, "basic")
        response = client.get("/api/analytics/dashboard", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["todayOrders"] == 0
        assert body["revenueData"] == []
        assert body["popularItems"] == []
        assert body["tableUtilization"] == []

    def test_pro_plan_also_allowed(self, client, auth_headers, upgrade):
        upgrade(auth_headers, "pro")
        assert client.get("/api/analytics/dashboard", headers=auth_headers).status_code == 200


class TestDashboardFigures:
    def test_figures(self, client, db_session, auth_headers, upgrade, make_table, make_order):
        upgrade(auth_headers, "basic")
        table = make_table(auth_headers, 1)
        make_table(auth_headers, 2)

        done = make_order(
            auth_headers,
            items=[{"id": "P1", "name": "Paneer", "price": 250, "quantity": 2}],
            table_id=table["id"],
        )
        client.patch(f"/api/orders/{done['id']}/status", json={"status": "completed"}, headers=auth_headers)
        make_order(auth_headers, items=[{"id": "S1", "name": "Samosa", "price": 50, "quantity": 3}])
        old = make_order(auth_headers, items=[{"id": "S1", "name": "Samosa", "price": 50, "quantity": 1}])
        db_session.get(Order, old["id"]).created_at = datetime.now(timezone.utc) - timedelta(days=10)
        db_session.commit()

        client.post(
            "/api/inventory",
            json={"name": "Tomatoes", "currentStock": 1, "minStock": 5, "unit": "kg"},
            headers=auth_headers,
        )

        body = client.get("/api/analytics/dashboard", headers=auth_headers).json()
        assert body["todayOrders"] == 2
        assert body["todayRevenue"] == 500
        assert body["weeklyOrders"] == 2
        assert body["monthlyRevenue"] == 500
        assert body["lowStockItems"] == 1
        assert body["activeTables"] == 0

        assert [d["revenue"] for d in body["revenueData"]] == [50, 650]
        assert [i["name"] for i in body["popularItems"]] == ["Samosa", "Paneer"]
        assert body["popularItems"][0]["quantity"] == 4

        utilization = body["tableUtilization"]
        assert utilization[0]["tableNumber"] == 1
        assert utilization[0]["totalOrders"] == 1
        assert utilization[0]["revenue"] == 500
        assert utilization[1] == {"tableId": utilization[1]["tableId"], "tableNumber": 2, "totalOrders": 0, "revenue": 0}


class TestDashboardDateRange:
    def _orders_today_and_in_2020(self, client, db_session, auth_headers, make_table, make_order):
        table = make_table(auth_headers, 1)
        make_order(
            auth_headers,
            items=[{"id": "P1", "name": "Paneer", "price": 250, "quantity": 2}],
            table_id=table["id"],
        )
        old = make_order(
            auth_headers,
            items=[{"id": "S1", "name": "Samosa", "price": 50, "quantity": 3}],
            table_id=table["id"],
        )
        db_session.get(Order, old["id"]).created_at = datetime(2020, 1, 1, 12, 0, tzinfo=timezone.utc)
        db_session.commit()

    def test_range_replaces_thirty_day_window(
        self, client, db_session, auth_headers, upgrade, make_table, make_order
    ):
        upgrade(auth_headers, "basic")
        self._orders_today_and_in_2020(client, db_session, auth_headers, make_table, make_order)

        response = client.get(
            "/api/analytics/dashboard?startDate=2020-01-01&endDate=2020-01-01", headers=auth_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["revenueData"] == [{"date": "2020-01-01", "revenue": 150, "orders": 1}]
        assert [i["name"] for i in body["popularItems"]] == ["Samosa"]
        [table] = body["tableUtilization"]
        assert (table["totalOrders"], table["revenue"]) == (1, 150)
        # Headline figures keep their fixed windows
        assert body["todayOrders"] == 1

    def test_default_window_skips_old_orders(
        self, client, db_session, auth_headers, upgrade, make_table, make_order
    ):
        upgrade(auth_headers, "basic")
        self._orders_today_and_in_2020(client, db_session, auth_headers, make_table, make_order)

        body = client.get("/api/analytics/dashboard", headers=auth_headers).json()
        assert [d["orders"] for d in body["revenueData"]] == [1]
        assert [i["name"] for i in body["popularItems"]] == ["Paneer"]
        # Utilisation counts every order unless a range is given
        assert body["tableUtilization"][0]["totalOrders"] == 2

    def test_open_ended_range(self, client, db_session, auth_headers, upgrade, make_table, make_order):
        upgrade(auth_headers, "basic")
        self._orders_today_and_in_2020(client, db_session, auth_headers, make_table, make_order)

        body = client.get("/api/analytics/dashboard?startDate=2019-12-31", headers=auth_headers).json()
        assert sum(d["orders"] for d in body["revenueData"]) == 2
        assert body["tableUtilization"][0]["totalOrders"] == 2

    def test_reversed_range_rejected(self, client, auth_headers, upgrade):
        upgrade(auth_headers, "basic")
        response = client.get(
            "/api/analytics/dashboard?startDate=2020-02-01&endDate=2020-01-01", headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "startDate must not be after endDate"

    def test_bad_date_is_validation_error(self, client, auth_headers, upgrade):
        upgrade(auth_headers, "basic")
        response = client.get("/api/analytics/dashboard?startDate=yesterday", headers=auth_headers)
        assert response.status_code == 400


class TestSales:
    def test_completed_orders_only(self, client, auth_headers, make_order):
        done = make_order(auth_headers, items=[{"id": "A", "price": 120, "quantity": 1}])
        client.patch(f"/api/orders/{done['id']}/status", json={"status": "completed"}, headers=auth_headers)
        make_order(auth_headers, items=[{"id": "B", "price": 999, "quantity": 1}])

        response = client.get("/api/analytics/sales?period=7d", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["period"] == "7d"
        assert body["totalOrders"] == 1
        assert body["totalRevenue"] == 120
        assert len(body["data"]) == 1

    def test_default_period(self, client, auth_headers):
        assert client.get("/api/analytics/sales", headers=auth_headers).json()["period"] == "30d"

    def test_invalid_period(self, client, auth_headers):
        response = client.get("/api/analytics/sales?period=1y", headers=auth_headers)
        assert response.status_code == 400


class TestPopularItems:
    def test_aggregates_line_items(self, client, auth_headers, make_order):
        make_order(auth_headers, items=[
            {"id": "1", "name": "Naan", "price": 40, "quantity": 3},
            {"id": "2", "name": "Dal", "price": 150, "quantity": 1},
        ])
        make_order(auth_headers, items=[{"id": "1", "name": "Naan", "price": 40, "quantity": 2}])
        cancelled = make_order(auth_headers, items=[{"id": "2", "name": "Dal", "price": 150, "quantity": 9}])
        client.patch(f"/api/orders/{cancelled['id']}/status", json={"status": "cancelled"}, headers=auth_headers)

        response = client.get("/api/analytics/popular-items?limit=5", headers=auth_headers)
        assert response.status_code == 200
        items = response.json()["items"]
        assert [(i["name"], i["quantity"], i["revenue"]) for i in items] == [
            ("Naan", 5, 200),
            ("Dal", 1, 150),
        ]

    def test_only_recent_orders_by_default(self, client, db_session, auth_headers, make_order):
        make_order(auth_headers, items=[{"id": "1", "name": "Naan", "price": 40, "quantity": 1}])
        old = make_order(auth_headers, items=[{"id": "2", "name": "Dal", "price": 150, "quantity": 5}])
        db_session.get(Order, old["id"]).created_at = datetime.now(timezone.utc) - timedelta(days=45)
        db_session.commit()

        items = client.get("/api/analytics/popular-items", headers=auth_headers).json()["items"]
        assert [i["name"] for i in items] == ["Naan"]

        since = (datetime.now(timezone.utc) - timedelta(days=60)).date().isoformat()
        items = client.get(
            f"/api/analytics/popular-items?startDate={since}", headers=auth_headers
        ).json()["items"]
        assert [i["name"] for i in items] == ["Dal", "Naan"]

    def test_limit_bounds(self, client, auth_headers):
        assert client.get("/api/analytics/popular-items?limit=0", headers=auth_headers).status_code == 400


class TestAggregationHelpers:
    def test_daily_revenue_oldest_first(self):
        day1 = datetime(2026, 3, 1, 23, 30, tzinfo=timezone.utc)
        day2 = datetime(2026, 3, 2, 0, 15)  # naive values are UTC
        data = daily_revenue([fake_order(10, day2), fake_order(5, day1), fake_order(2.5, day2)])
        assert [(d.date, d.revenue, d.orders) for d in data] == [
            ("2026-03-01", 5, 1),
            ("2026-03-02", 12.5, 2),
        ]

    def test_unnamed_lines_group_by_id(self):
        now = datetime.now(timezone.utc)
        orders = [
            fake_order(0, now, [{"id": "X9", "price": 2, "quantity": 1}]),
            fake_order(0, now, [{"id": "X9", "price": 2, "quantity": 4}]),
        ]
        [item] = aggregate_line_items(orders, 10)
        assert (item.name, item.quantity, item.revenue) == ("X9", 5, 10)

    def test_ties_broken_by_revenue_then_name(self):
        now = datetime.now(timezone.utc)
        orders = [fake_order(0, now, [
            {"id": "a", "name": "Chai", "price": 20, "quantity": 2},
            {"id": "b", "name": "Lassi", "price": 60, "quantity": 2},
            {"id": "c", "name": "Coffee", "price": 20, "quantity": 2},
        ])]
        names = [i.name for i in aggregate_line_items(orders, 10)]
        assert names == ["Lassi", "Chai", "Coffee"]

    def test_limit(self):
        now = datetime.now(timezone.utc)
        orders = [fake_order(0, now, [{"id": str(n), "price": 1, "quantity": n + 1} for n in range(5)])]
        assert len(aggregate_line_items(orders, 3)) == 3
