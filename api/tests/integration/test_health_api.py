"""Integration tests for health checks, metrics and error rendering."""

from sqlalchemy.exc import IntegrityError

from conftest import auth_headers, create_trip, sign_up
from tripindo.main import app


async def test_health(client):
    response = await client.get("/health")

    assert response.json() == {"status": "healthy", "service": "tripindo-api"}
    assert "X-Process-Time" in response.headers


async def test_liveness(client):
    response = await client.get("/health/live")

    assert response.json() == {"status": "alive"}


async def test_readiness_pings_database(client):
    response = await client.get("/health/ready")

    assert response.json() == {"status": "ready", "checks": {"database": True}}


async def test_metrics_exposes_request_counter(client):
    await client.get("/health")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text


async def test_metrics_label_requests_by_route_template(client):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    await client.get(f"/trips/{trip['id']}", headers=auth_headers(owner["access_token"]))

    response = await client.get("/metrics")

    assert 'endpoint="/trips/{trip_id}"' in response.text
    assert trip["id"] not in response.text


async def test_database_errors_pass_driver_message_through(client):
    async def failing_route():
        raise IntegrityError("INSERT INTO trips", {}, Exception("null value in column \"title\""))

    app.add_api_route("/_test/database-error", failing_route)
    try:
        response = await client.get("/_test/database-error")
    finally:
        app.router.routes.pop()

    assert response.status_code == 500
    assert response.json() == {"error": 'null value in column "title"', "code": "BACKEND_ERROR"}
