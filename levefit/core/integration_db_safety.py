from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sqlalchemy.engine import make_url

# "test" as its own token: levefit_test, test-levefit, levefit_test2 (not "latest" or "contest").
TEST_DB_NAME_RE = re.compile(r"(?:^|[_-])test(?:$|[_\-\d])", re.IGNORECASE)
LOCAL_DB_HOSTS = frozenset(
    {
        "localhost",
        "127.0.0.1",
        "::1",
        "postgres",
        "levefit_postgres",
    }
)


@dataclass(frozen=True, slots=True)
class IntegrationDbTarget:
    backend: str
    database_name: str
    host: str


@dataclass(frozen=True, slots=True)
class IntegrationDbSafetyResult:
    is_safe: bool
    reason: str
    target: IntegrationDbTarget

    @property
    def database_name(self) -> str:
        return self.target.database_name

    @property
    def host(self) -> str:
        return self.target.host


TargetCheck = Callable[[IntegrationDbTarget, frozenset[str]], bool]

SAFETY_CHECKS: tuple[tuple[str, TargetCheck], ...] = (
    (
        "Integration tests support only PostgreSQL test databases.",
        lambda target, hosts: target.backend == "postgresql",
    ),
    (
        "Database name is empty.",
        lambda target, hosts: bool(target.database_name),
    ),
    (
        "Database name must contain 'test' as a separate token (e.g. 'levefit_test').",
        lambda target, hosts: TEST_DB_NAME_RE.search(target.database_name) is not None,
    ),
    (
        "Host is not a local or explicitly allowed integration-test host.",
        lambda target, hosts: target.host in hosts,
    ),
)


def parse_host_list(raw: str) -> frozenset[str]:
    return frozenset(part.strip().lower() for part in raw.split(",") if part.strip())


def assess_integration_db_safety(
    database_url: str,
    *,
    extra_hosts: Iterable[str] = (),
) -> IntegrationDbSafetyResult:
    parsed = make_url(database_url)
    target = IntegrationDbTarget(
        backend=parsed.get_backend_name(),
        database_name=(parsed.database or "").strip(),
        host=(parsed.host or "").strip().lower(),
    )
    allowed_hosts = LOCAL_DB_HOSTS | {host.strip().lower() for host in extra_hosts}

    for reason, check in SAFETY_CHECKS:
        if not check(target, allowed_hosts):
            return IntegrationDbSafetyResult(is_safe=False, reason=reason, target=target)
    return IntegrationDbSafetyResult(is_safe=True, reason="ok", target=target)


def assert_safe_integration_db(database_url: str, *, extra_hosts: Iterable[str] = ()) -> None:
    """Guards the per-test TRUNCATE of every LeveFit table."""
    result = assess_integration_db_safety(database_url, extra_hosts=extra_hosts)
    if result.is_safe:
        return

    raise RuntimeError(
        "Refusing to run integration tests with destructive TRUNCATE.\n"
        f"Reason: {result.reason}\n"
        f"Resolved DB: name='{result.database_name}' host='{result.host}'\n"
        "Required: a dedicated PostgreSQL test DB such as 'levefit_test' on a local host, "
        "or a CI host listed in INTEGRATION_DB_EXTRA_HOSTS."
    )
