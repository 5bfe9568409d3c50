"""
Tests for table and reservation endpoints.
"""

from datetime import datetime, timedelta, timezone


def iso(dt):
    return dt.isoformat().replace("+00:00", "Z")


class TestTables:
    """CRUD on /api/tables"""

    def test_create_and_list_ordered_by_number(self, client, auth_headers, make_table):
        make_table(auth_headers, 3, capacity=6, location="Patio")
        make_table(auth_headers, 1, capacity=2)

        response = client.get("/api/tables", headers=auth_headers)
        assert response.status_code == 200
        tables = response.json()["tables"]
        assert [t["tableNumber"] for t in tables] == [1, 3]
        assert tables[1]["location"] == "Patio"
        assert tables[0]["status"] == "available"
        assert tables[0]["activeOrders"] == []
        assert tables[0]["upcomingReservations"] == []

    def test_duplicate_number_rejected(self, client, auth_headers, make_table):
        make_table(auth_headers, 5)
        response = client.post(
            "/api/tables", json={"tableNumber": 5, "capacity": 4}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Table number already exists"}
        assert len(client.get("/api/tables", headers=auth_headers).json()["tables"]) == 1

    def test_same_number_allowed_for_other_tenant(self, auth_headers, other_headers, make_table):
        make_table(auth_headers, 5)
        assert make_table(other_headers, 5)["tableNumber"] == 5

    def test_renumber_onto_existing_rejected(self, client, auth_headers, make_table):
        make_table(auth_headers, 1)
        second = make_table(auth_headers, 2)

        response = client.put(
            f"/api/tables/{second['id']}", json={"tableNumber": 1}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Table number already exists"

    def test_update_fields(self, client, auth_headers, make_table):
        table = make_table(auth_headers, 1)
        response = client.put(
            f"/api/tables/{table['id']}",
            json={"capacity": 8, "status": "cleaning", "xPosition": 120.5},
            headers=auth_headers,
        )
        assert response.status_code == 200
        updated = response.json()["table"]
        assert updated["capacity"] == 8
        assert updated["status"] == "cleaning"
        assert updated["xPosition"] == 120.5
        assert updated["tableNumber"] == 1

    def test_invalid_capacity_rejected(self, client, auth_headers):
        response = client.post(
            "/api/tables", json={"tableNumber": 1, "capacity": 0}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_delete_keeps_orders(self, client, auth_headers, make_table, make_order):
        table = make_table(auth_headers, 9)
        order = make_order(auth_headers, table_id=table["id"])

        response = client.delete(f"/api/tables/{table['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get(f"/api/tables/{table['id']}", headers=auth_headers).status_code == 404

        kept = client.get(f"/api/orders/{order['id']}", headers=auth_headers)
        assert kept.status_code == 200
        assert kept.json()["order"]["tableId"] is None


class TestReservations:
    """/api/tables/reservations"""

    def test_create_does_not_change_table_status(self, client, auth_headers, make_table):
        table = make_table(auth_headers, 1)
        when = datetime.now(timezone.utc) + timedelta(hours=2)

        response = client.post(
            "/api/tables/reservations",
            json={
                "tableId": table["id"],
                "customerName": "Priya",
                "partySize": 4,
                "reservationDate": iso(when),
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        reservation = response.json()["reservation"]
        assert reservation["status"] == "confirmed"
        assert reservation["durationMinutes"] == 120
        assert reservation["table"]["tableNumber"] == 1

        floor = client.get(f"/api/tables/{table['id']}", headers=auth_headers).json()["table"]
        assert floor["status"] == "available"
        assert [r["id"] for r in floor["upcomingReservations"]] == [reservation["id"]]

    def test_far_future_reservation_not_upcoming(self, client, auth_headers, make_table):
        table = make_table(auth_headers, 1)
        client.post(
            "/api/tables/reservations",
            json={
                "tableId": table["id"],
                "customerName": "Later",
                "partySize": 2,
                "reservationDate": iso(datetime.now(timezone.utc) + timedelta(days=3)),
            },
            headers=auth_headers,
        )
        floor = client.get(f"/api/tables/{table['id']}", headers=auth_headers).json()["table"]
        assert floor["upcomingReservations"] == []

    def test_list_in_time_order_and_filter_by_date(self, client, auth_headers):
        base = datetime.now(timezone.utc).replace(hour=12, minute=0, second=0, microsecond=0)
        for name, when in [
            ("Late", base + timedelta(hours=6)),
            ("Early", base),
            ("Tomorrow", base + timedelta(days=1)),
        ]:
            client.post(
                "/api/tables/reservations",
                json={"customerName": name, "partySize": 2, "reservationDate": iso(when)},
                headers=auth_headers,
            )

        everything = client.get("/api/tables/reservations", headers=auth_headers).json()
        assert [r["customerName"] for r in everything["reservations"]] == ["Early", "Late", "Tomorrow"]

        day = client.get(
            f"/api/tables/reservations?date={base.date().isoformat()}", headers=auth_headers
        ).json()
        assert [r["customerName"] for r in day["reservations"]] == ["Early", "Late"]

    def test_foreign_table_rejected(self, client, auth_headers, other_headers, make_table):
        foreign = make_table(other_headers, 1)
        response = client.post(
            "/api/tables/reservations",
            json={
                "tableId": foreign["id"],
                "customerName": "Sneaky",
                "partySize": 2,
                "reservationDate": iso(datetime.now(timezone.utc) + timedelta(hours=1)),
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Table not found"

    def test_update_and_delete(self, client, auth_headers):
        created = client.post(
            "/api/tables/reservations",
            json={
                "customerName": "Ravi",
                "partySize": 2,
                "reservationDate": iso(datetime.now(timezone.utc) + timedelta(hours=1)),
            },
            headers=auth_headers,
        ).json()["reservation"]

        response = client.put(
            f"/api/tables/reservations/{created['id']}",
            json={"partySize": 5, "status": "seated"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["reservation"]["partySize"] == 5
        assert response.json()["reservation"]["status"] == "seated"

        assert client.delete(
            f"/api/tables/reservations/{created['id']}", headers=auth_headers
        ).status_code == 200
        assert client.get(
            f"/api/tables/reservations/{created['id']}", headers=auth_headers
        ).status_code == 404

    def test_party_size_must_be_positive(self, client, auth_headers):
        response = client.post(
            "/api/tables/reservations",
            json={
                "customerName": "Nobody",
                "partySize": 0,
                "reservationDate": iso(datetime.now(timezone.utc)),
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
