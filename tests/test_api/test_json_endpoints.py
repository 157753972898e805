"""
Tests for the JSON API: CRUD per area, error statuses, user isolation
"""
from app.utils.dates import local_today


class TestBusinessesApi:
    def test_crud(self, client):
        resp = client.post("/api/v1/businesses", json={"name": "Acme", "revenue": "15000", "industry": "Technology"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["ok"] is True
        assert body["message"] == "Business created successfully"
        business_id = body["data"]["id"]

        resp = client.post("/api/v1/businesses/departments", json={"business_id": business_id, "name": "Sales"})
        assert resp.status_code == 201

        page = client.get("/api/v1/businesses").json()
        assert page["summary"]["total"] == 1
        assert page["summary"]["departments"] == 1
        assert page["total_revenue_display"] == "$15,000.00"
        assert page["businesses"][0]["department_count"] == 1

        resp = client.put(f"/api/v1/businesses/{business_id}", json={"status": "inactive"})
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "inactive"

        assert client.delete(f"/api/v1/businesses/{business_id}").status_code == 200
        page = client.get("/api/v1/businesses").json()
        assert page["businesses"] == []
        assert page["summary"]["departments"] == 0

    def test_validation_error_is_400(self, client):
        resp = client.post("/api/v1/businesses", json={"name": ""})
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "detail": "Business name is required"}

    def test_department_in_foreign_business(self, client, other_client):
        foreign = other_client.post("/api/v1/businesses", json={"name": "Theirs"}).json()["data"]
        resp = client.post("/api/v1/businesses/departments", json={"business_id": foreign["id"], "name": "Sales"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Business not found"


class TestFinanceApi:
    def test_expense_summary(self, client):
        resp = client.post("/api/v1/finance/transactions", json={
            "type": "expense", "amount": "42.50", "category": "Food", "date": "2025-01-15",
        })
        assert resp.status_code == 201
        assert resp.json()["data"]["amount"] == "42.50"

        summary = client.get("/api/v1/finance/summary").json()["summary"]
        assert summary["net_balance"] == "-42.50"
        assert summary["total_expenses"] == "42.50"

        rows = client.get("/api/v1/finance/transactions").json()
        assert rows[0]["amount_display"] == "-$42.50"

    def test_invalid_amount(self, client):
        resp = client.post("/api/v1/finance/transactions", json={
            "type": "expense", "amount": "abc", "category": "Food",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid amount"

    def test_delete_twice_is_404(self, client):
        tx = client.post("/api/v1/finance/transactions", json={
            "type": "income", "amount": 100, "category": "Salary",
        }).json()["data"]

        assert client.delete(f"/api/v1/finance/transactions/{tx['id']}").status_code == 200
        resp = client.delete(f"/api/v1/finance/transactions/{tx['id']}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Failed to delete transaction"

    def test_savings_and_investments(self, client):
        assert client.post("/api/v1/finance/savings", json={
            "name": "Car", "target_amount": "1000", "current_amount": "250",
        }).status_code == 201
        assert client.post("/api/v1/finance/investments", json={
            "name": "Index fund", "type": "Stocks", "amount": "1000", "current_value": "900",
        }).status_code == 201

        savings = client.get("/api/v1/finance/savings").json()
        assert savings[0]["progress_display"] == "25%"
        investments = client.get("/api/v1/finance/investments").json()
        assert investments[0]["gain_display"] == "-$100.00"
        assert investments[0]["is_positive"] is False

        overview = client.get("/api/v1/finance", params={"tab": "savings"}).json()
        assert overview["tab"] == "savings"
        assert overview["summary"]["total_savings"] == "250.00"


class TestPlannerApi:
    def test_day_toggle_and_dashboard(self, client):
        today = local_today().isoformat()
        event = client.post("/api/v1/planner/events", json={
            "title": "Standup", "date": today, "start_time": "09:00", "type": "meeting",
        }).json()["data"]

        day = client.get("/api/v1/planner/day", params={"day": today}).json()
        assert (day["completed"], day["total"]) == (0, 1)
        assert day["events"][0]["time_display"] == "09:00 - No end"

        resp = client.post(f"/api/v1/planner/events/{event['id']}/toggle", json={"completed": False})
        assert resp.status_code == 200
        assert resp.json()["data"]["completed"] is True
        assert resp.json()["message"] is None

        day = client.get("/api/v1/planner/day", params={"day": today}).json()
        assert (day["completed"], day["total"]) == (1, 1)
        dashboard = client.get("/api/v1/dashboard").json()
        assert (dashboard["today_completed"], dashboard["today_total"]) == (1, 1)

    def test_week(self, client):
        client.post("/api/v1/planner/events", json={"title": "Mon", "date": "2025-01-13"})
        week = client.get("/api/v1/planner/week", params={"day": "2025-01-15"}).json()
        assert week["date"] == "2025-01-15"
        assert len(week["week"]) == 7
        assert week["week"][0] == {"date": "2025-01-13", "count": 1, "selected": False}

    def test_toggle_missing(self, client):
        resp = client.post("/api/v1/planner/events/missing/toggle", json={"completed": True})
        assert resp.status_code == 404


class TestGoalsApi:
    def test_progress(self, client):
        goal = client.post("/api/v1/goals", json={"title": "Ship v1", "category": "Career"}).json()["data"]

        resp = client.put(f"/api/v1/goals/{goal['id']}/progress", json={"progress": 100})
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "completed"

        page = client.get("/api/v1/goals").json()
        assert page["counts"]["completed"] == 1
        assert page["counts"]["active"] == 0

    def test_missing_category(self, client):
        resp = client.post("/api/v1/goals", json={"title": "Ship v1"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Title and category are required"

    def test_isolation(self, client, other_client):
        goal = client.post("/api/v1/goals", json={"title": "Mine", "category": "Personal"}).json()["data"]

        assert other_client.get("/api/v1/goals").json()["goals"] == []
        assert other_client.delete(f"/api/v1/goals/{goal['id']}").status_code == 404
        assert other_client.put(f"/api/v1/goals/{goal['id']}", json={"title": "Theirs"}).status_code == 404
        assert client.get("/api/v1/goals").json()["goals"][0]["title"] == "Mine"


class TestProfileApi:
    def test_update(self, client):
        resp = client.put("/api/v1/profile", json={"full_name": "Olivia O."})
        assert resp.status_code == 200
        assert resp.json()["message"] == "Profile updated successfully"
        assert client.get("/api/v1/profile").json()["full_name"] == "Olivia O."

    def test_dashboard_cards(self, client):
        client.post("/api/v1/businesses", json={"name": "Acme", "revenue": 1200})
        cards = {c["title"]: c["value"] for c in client.get("/api/v1/dashboard").json()["cards"]}
        assert cards["Active Businesses"] == 1
        assert cards["Total Revenue"] == "$1,200.00"
