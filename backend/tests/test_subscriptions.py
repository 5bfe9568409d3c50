"""
Tests for plans, plan changes, usage and plan limits.
"""

from datetime import datetime, timedelta, timezone

from rest_api.models import Order, Table
from shared.config.constants import SUBSCRIPTION_PLANS


class TestPlans:
    def test_plan_catalogue_is_public(self, client):
        response = client.get("/api/subscriptions/plans")
        assert response.status_code == 200
        plans = response.json()
        assert list(plans) == ["free", "basic", "pro", "enterprise"]
        assert plans["free"]["limits"] == {"recipes": 50, "tables": 10, "orders": 100}
        assert plans["pro"]["limits"]["recipes"] == -1
        assert plans["basic"]["price"] == 29

    def test_current(self, client, auth_headers):
        response = client.get("/api/subscriptions/current", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["plan"] == "free"
        assert body["status"] == "active"
        assert body["planDetails"]["name"] == "Free"


class TestChangePlan:
    def test_upgrade_sets_period(self, client, auth_headers):
        response = client.put("/api/subscriptions/plan", json={"plan": "pro"}, headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Subscription updated successfully"
        assert body["plan"] == "pro"
        assert body["status"] == "active"

        expires = datetime.fromisoformat(body["expiresAt"].replace("Z", "+00:00"))
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        remaining = expires - datetime.now(timezone.utc)
        assert timedelta(days=29) < remaining <= timedelta(days=30)

        assert client.get("/api/subscriptions/current", headers=auth_headers).json()["plan"] == "pro"

    def test_post_upgrade_alias(self, client, auth_headers):
        response = client.post("/api/subscriptions/upgrade", json={"plan": "basic"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["plan"] == "basic"

    def test_unknown_plan_rejected(self, client, auth_headers):
        response = client.put("/api/subscriptions/plan", json={"plan": "platinum"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid subscription plan"}
        assert client.get("/api/subscriptions/current", headers=auth_headers).json()["plan"] == "free"


class TestUsage:
    def test_counts_against_limits(self, client, db_session, account, auth_headers, make_table, make_order):
        make_table(auth_headers, 1)
        make_order(auth_headers)
        old = make_order(auth_headers)
        db_session.get(Order, old["id"]).created_at = datetime.now(timezone.utc) - timedelta(days=45)
        db_session.commit()
        client.post(
            "/api/recipes",
            json={"name": "Dal", "category": "main-course", "difficulty": "easy"},
            headers=auth_headers,
        )

        body = client.get("/api/subscriptions/usage", headers=auth_headers).json()
        assert body["plan"] == "free"
        assert body["tables"] == {"used": 1, "limit": 10, "unlimited": False}
        assert body["recipes"] == {"used": 1, "limit": 50, "unlimited": False}
        # Orders only count the last 30 days
        assert body["orders"]["used"] == 1

    def test_unlimited_flag(self, client, auth_headers, upgrade):
        upgrade(auth_headers, "enterprise")
        body = client.get("/api/subscriptions/usage", headers=auth_headers).json()
        assert body["recipes"]["limit"] == -1
        assert body["recipes"]["unlimited"] is True


class TestPlanLimits:
    def _fill_tables(self, db_session, tenant_id, count):
        db_session.add_all(
            Table(tenant_id=tenant_id, table_number=n, capacity=2) for n in range(1, count + 1)
        )
        db_session.commit()

    def test_table_limit_returns_402(self, client, db_session, account, auth_headers):
        limit = SUBSCRIPTION_PLANS["free"]["limits"]["tables"]
        self._fill_tables(db_session, account["user"]["id"], limit)

        response = client.post(
            "/api/tables", json={"tableNumber": limit + 1, "capacity": 2}, headers=auth_headers
        )
        assert response.status_code == 402
        assert response.json() == {
            "message": "Upgrade required",
            "currentPlan": "free",
            "requiredPlan": "basic",
        }

    def test_upgrade_lifts_table_limit(self, client, db_session, account, auth_headers, upgrade):
        limit = SUBSCRIPTION_PLANS["free"]["limits"]["tables"]
        self._fill_tables(db_session, account["user"]["id"], limit)
        upgrade(auth_headers, "basic")

        response = client.post(
            "/api/tables", json={"tableNumber": limit + 1, "capacity": 2}, headers=auth_headers
        )
        assert response.status_code == 201

    def test_recipe_limit_ignores_deleted(self, client, db_session, account, auth_headers):
        from rest_api.models import Recipe

        limit = SUBSCRIPTION_PLANS["free"]["limits"]["recipes"]
        recipes = [
            Recipe(tenant_id=account["user"]["id"], name=f"R{n}", category="main-course", difficulty="easy")
            for n in range(limit)
        ]
        db_session.add_all(recipes)
        db_session.commit()

        payload = {"name": "One more", "category": "main-course", "difficulty": "easy"}
        assert client.post("/api/recipes", json=payload, headers=auth_headers).status_code == 402

        client.delete(f"/api/recipes/{recipes[0].id}", headers=auth_headers)
        assert client.post("/api/recipes", json=payload, headers=auth_headers).status_code == 201
