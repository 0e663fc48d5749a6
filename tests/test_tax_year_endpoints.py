from fastapi.testclient import TestClient


def test_healthz(client: TestClient):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_security_headers(client: TestClient):
    resp = client.get("/healthz")
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_current_tax_year(client: TestClient):
    resp = client.get("/tax-years/current", params={"today": "2025-01-15"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["start_year"] == 2024
    assert data["label"] == "2024/25"
    assert data["hmrc_format"] == "2024-25"
    assert data["start_date"] == "2024-04-06"
    assert data["end_date"] == "2025-04-05"
    assert data["online_filing_deadline"] == "2026-01-31"


def test_invalid_tax_year_returns_error_envelope(client: TestClient):
    resp = client.get("/tax-years/1999")
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "PER001"
    assert "1999" in error["message"]


def test_periods_for_mid_august(client: TestClient):
    resp = client.get("/tax-years/2024/periods", params={"today": "2024-08-10", "business_id": "biz-1"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["business_id"] == "biz-1"
    periods = data["periods"]
    assert [p["key"] for p in periods] == ["Q1", "Q2", "Q3", "Q4", "ANNUAL"]
    assert [p["status"] for p in periods] == ["overdue", "draft", "future", "future", "draft"]

    q1 = periods[0]
    assert q1["action"] == "Submit Now"
    assert q1["show_action"] is True
    assert q1["countdown"] == "3 days overdue"
    assert q1["deadline_label"] == "Current: Q1 (Apr-Jun) - Due by 7 Aug"
    assert q1["totals"]["income_display"] == "£0.00"

    q3 = periods[2]
    assert q3["action"] is None
    assert q3["show_action"] is False
    assert q3["totals"] is None

    annual = periods[4]
    assert annual["kind"] == "annual"
    assert annual["quarter"] is None
    assert annual["deadline"] == "2026-01-31"
    assert annual["deadline_label"] == "Annual: 2024/25 - Due by 31 Jan 2026"


def test_periods_default_business(client: TestClient):
    resp = client.get("/tax-years/2024/periods", params={"today": "2024-08-10"})
    assert resp.status_code == 200
    assert resp.json()["business_id"] == "default"


def test_periods_reflect_ledger_and_submissions(client: TestClient):
    entry = {
        "business_id": "biz-1",
        "entry_date": "2024-05-01",
        "kind": "income",
        "amount": "1250.00",
    }
    assert client.post("/ledger/entries", json=entry).status_code == 201
    expense = {**entry, "kind": "expense", "amount": "200.00"}
    assert client.post("/ledger/entries", json=expense).status_code == 201
    submission = {"business_id": "biz-1", "start_year": 2024, "period_key": "Q1"}
    assert client.post("/submissions", json=submission).status_code == 201

    resp = client.get("/tax-years/2024/periods", params={"today": "2024-08-10", "business_id": "biz-1"})
    q1 = resp.json()["periods"][0]
    assert q1["status"] == "submitted"
    assert q1["action"] is None
    assert q1["totals"]["income"] == 1250.0
    assert q1["totals"]["net_display"] == "£1,050.00"


def test_deadlines(client: TestClient):
    resp = client.get("/tax-years/2024/deadlines", params={"today": "2024-07-31"})
    assert resp.status_code == 200
    deadlines = {d["label"]: d for d in resp.json()}
    assert len(deadlines) == 7
    assert deadlines["MTD Q1 Update Due"]["date"] == "2024-08-07"
    assert deadlines["MTD Q1 Update Due"]["days_remaining"] == 7
    assert deadlines["MTD Q1 Update Due"]["countdown"] == "7 days remaining"
    assert deadlines["Payment on Account Due"]["date"] == "2026-07-31"


def test_current_quarter(client: TestClient):
    resp = client.get("/quarters/current", params={"today": "2024-11-20"})
    assert resp.status_code == 200
    assert resp.json() == {
        "quarter": "Q3",
        "months": "Oct-Dec",
        "label": "Current: Q3 (Oct-Dec) - Due by 7 Feb",
    }


def test_metrics_endpoint(client: TestClient):
    client.get("/tax-years/2024/periods", params={"today": "2024-08-10"})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "period_status_total" in resp.text
