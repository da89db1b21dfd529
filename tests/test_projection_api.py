from __future__ import annotations

from math import isclose

from flask.testing import FlaskClient

from nestegg.app import create_app


def projection_payload() -> dict:
    return {
        "accounts": [
            {"id": "1", "name": "Emergency fund", "category": "savings", "balance": 10000, "monthly_contribution": 100},
            {"id": "2", "name": "Brokerage", "category": "investment", "balance": 20000, "monthly_contribution": 200},
            {"id": "3", "name": "Work plan", "category": "401k", "balance": 30000, "monthly_contribution": 300},
            {"id": "4", "name": "Roth", "category": "roth-ira", "balance": 5000},
        ],
        "current_age": 30,
        "horizon_age": 65,
        "view_age": 90,
        "conservative_rate": 2,
        "growth_rate": 5,
        "withdrawal_rate": 4,
    }


def test_projection_endpoint_returns_summary(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    assert resp.status_code == 200
    body = resp.get_json()

    assert body["total_today"] == 65000
    assert body["totals_by_category"]["401k"] == 30000
    assert body["withdrawal_rating"] == "conservative"
    assert isclose(body["annual_withdrawal"], body["projected_total"] * 0.04)

    rows = body["rows"]
    assert rows[0]["age"] == 30
    assert rows[-1]["age"] == 100
    assert [row["year"] for row in rows] == list(range(71))

    retirement_rows = [row for row in rows if row["age"] > 65]
    assert retirement_rows and retirement_rows[0]["payout"] > 0

    assert body["curve"][-1]["age"] == 90


def test_projection_uses_configured_defaults(client: FlaskClient):
    resp = client.post("/api/projection", json={"accounts": projection_payload()["accounts"]})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["years_to_horizon"] == 35
    assert body["rows"][0]["age"] == 30
    assert body["rows"][-1]["age"] == 100


def test_unknown_category_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["accounts"][0]["category"] = "crypto"

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_duplicate_account_ids_return_422(client: FlaskClient):
    payload = projection_payload()
    payload["accounts"][1]["id"] = "1"

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422


def test_view_age_before_horizon_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["view_age"] = 60

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422


def test_end_age_before_current_age_returns_400(client: FlaskClient):
    payload = projection_payload()
    payload["end_age"] = 20

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 400
    assert "end_age must not be before current_age" in resp.get_json()["detail"]


def test_future_value_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/future-value",
        json={"principal": 1000, "monthly_contribution": 0, "annual_rate": 0.05, "years": 2},
    )

    assert resp.status_code == 200
    assert isclose(resp.get_json()["value"], 1102.5)


def test_future_value_zero_year_policy(client: FlaskClient):
    payload = {"principal": 1000, "monthly_contribution": 100, "annual_rate": 0.05, "years": 0}

    default = client.post("/api/future-value", json=payload)
    up_front = client.post("/api/future-value", json={**payload, "zero_year_policy": "principal_plus_one_year"})

    assert default.get_json()["value"] == 1000
    assert up_front.get_json()["value"] == 2200


def test_future_value_missing_fields_return_422(client: FlaskClient):
    resp = client.post("/api/future-value", json={"annual_rate": 0.05})

    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_withdrawal_endpoint_defaults_rate(client: FlaskClient):
    resp = client.post("/api/withdrawal", json={"projected_total": 500000})

    assert resp.status_code == 200
    body = resp.get_json()
    assert isclose(body["annual_withdrawal"], 20000)
    assert isclose(body["monthly_income"], 20000 / 12)
    assert body["rating"] == "conservative"


def test_withdrawal_endpoint_flags_high_rates(client: FlaskClient):
    resp = client.post("/api/withdrawal", json={"projected_total": 500000, "withdrawal_rate": 7})

    assert resp.get_json()["rating"] == "high_risk"


def test_simulate_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/simulate",
        json={
            "conservative_principal": 10000,
            "conservative_monthly": 100,
            "conservative_rate": 0.02,
            "growth_rate": 0.05,
            "current_age": 30,
            "horizon_age": 31,
            "end_age": 31,
        },
    )

    assert resp.status_code == 200
    rows = resp.get_json()["rows"]
    assert len(rows) == 2
    assert isclose(rows[1]["balance"], 11424.0, abs_tol=0.01)


def test_simulate_rejects_negative_span(client: FlaskClient):
    resp = client.post(
        "/api/simulate",
        json={"conservative_rate": 0.02, "growth_rate": 0.05, "current_age": 60, "horizon_age": 65, "end_age": 50},
    )

    assert resp.status_code == 400


def test_defaults_follow_app_config():
    app = create_app({"TESTING": True, "DEFAULT_HORIZON_AGE": 60, "DEFAULT_WITHDRAWAL_RATE": 3.5})

    with app.test_client() as client:
        body = client.get("/api/defaults").get_json()

    assert body["horizon_age"] == 60
    assert body["withdrawal_rate"] == 3.5
    assert body["current_age"] == 30


def test_cors_headers_for_front_end_origin(client: FlaskClient):
    resp = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"


def test_runaway_growth_returns_400(client: FlaskClient):
    resp = client.post(
        "/api/projection",
        json={
            "accounts": [{"id": "1", "name": "Brokerage", "category": "investment", "balance": 100000}],
            "growth_rate": 100,
            "current_age": 30,
            "horizon_age": 31,
            "end_age": 1200,
        },
    )

    assert resp.status_code == 400
    body = resp.get_data(as_text=True)
    assert "NaN" not in body
    assert "Infinity" not in body
    assert "overflowed" in resp.get_json()["detail"][0]
