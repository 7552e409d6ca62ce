import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_stats_empty(async_client: AsyncClient):
    response = await async_client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"totalEssays": 0, "averageScore": 0, "byLevel": []}
    }


@pytest.mark.asyncio
async def test_stats_aggregates(async_client: AsyncClient):
    # Zero noise: 80.0 for the 300-word essay, 63.0 for the five-word one
    await async_client.post("/api/essays/evaluate", json={"text": "word " * 300, "level": "undergrad"})
    await async_client.post("/api/essays/evaluate", json={"text": "I like cats and dogs", "level": "mba"})
    await async_client.post("/api/essays/evaluate", json={"text": "I like cats and birds", "level": "mba"})

    data = (await async_client.get("/api/stats")).json()["data"]

    assert data["totalEssays"] == 3
    assert data["averageScore"] == pytest.approx((80.0 + 63.0 + 63.0) / 3)
    assert data["byLevel"] == [
        {"_id": "mba", "count": 2},
        {"_id": "undergrad", "count": 1},
    ]


@pytest.mark.asyncio
async def test_stats_after_delete(async_client: AsyncClient):
    created = (await async_client.post(
        "/api/essays/evaluate", json={"text": "word " * 300}
    )).json()["data"]
    await async_client.delete(f"/api/essays/{created['id']}")

    data = (await async_client.get("/api/stats")).json()["data"]

    assert data["totalEssays"] == 0
    assert data["averageScore"] == 0


@pytest.mark.asyncio
async def test_health_check(async_client: AsyncClient):
    response = await async_client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["database"] == "Connected"
    assert "timestamp" in data
    assert "X-Request-ID" in response.headers
    assert "X-Response-Time" in response.headers


@pytest.mark.asyncio
async def test_unknown_route(async_client: AsyncClient):
    response = await async_client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}


@pytest.mark.asyncio
async def test_root(async_client: AsyncClient):
    response = await async_client.get("/")

    assert response.status_code == 200
    assert response.json()["health_check"] == "/api/health"
