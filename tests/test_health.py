from fastapi.testclient import TestClient

from levefit.api.routes import health as health_routes
from levefit.main import app


async def _ok_check() -> dict[str, object]:
    return {}


async def _failed_check() -> dict[str, object]:
    raise RuntimeError("redis down")


def _patch_checks(monkeypatch, **checks) -> None:
    for name in ("database", "redis", "celery"):
        monkeypatch.setitem(health_routes.CHECKS, name, checks.get(name, _ok_check))


def test_health_ok(monkeypatch) -> None:
    _patch_checks(monkeypatch)

    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert {name: check["status"] for name, check in payload["checks"].items()} == {
        "database": "ok",
        "redis": "ok",
        "celery": "ok",
    }
    assert "latency_ms" in payload["checks"]["database"]


def test_live_ok() -> None:
    client = TestClient(app)
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "live"}


def test_health_returns_503_when_dependency_failed(monkeypatch) -> None:
    _patch_checks(monkeypatch, redis=_failed_check)

    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 503
    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["checks"]["redis"] == {"status": "failed", "error": "redis down"}
    assert payload["checks"]["database"]["status"] == "ok"


def test_ready_reports_not_ready_when_dependency_failed(monkeypatch) -> None:
    _patch_checks(monkeypatch, database=_failed_check)

    client = TestClient(app)
    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


def test_celery_check_counts_workers(monkeypatch) -> None:
    class _Inspector:
        def ping(self) -> dict[str, object]:
            return {"worker-1": {"ok": "pong"}, "worker-2": {"ok": "pong"}}

    class _Control:
        def inspect(self, timeout: float) -> _Inspector:
            del timeout
            return _Inspector()

    monkeypatch.setattr(health_routes.celery_app, "control", _Control())

    assert health_routes._ping_celery_sync() == {"workers": 2}
