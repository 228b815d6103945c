import inspect
import os
import httpx
import pytest
from dotenv import load_dotenv

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="function")
def test_db(tmp_path):
    """
    Creates a temporary history database and initializes the schema.
    Patches DB_PATH on the cached settings object that every module shares.
    """
    db_file = tmp_path / "test_history.db"

    from bplus_research.config import get_settings
    settings = get_settings()

    original_db_path = settings.DB_PATH
    settings.DB_PATH = str(db_file)

    from bplus_research.store.db import init_db
    init_db()

    yield settings

    settings.DB_PATH = original_db_path

@pytest.fixture
def isolated_settings(tmp_path):
    """
    Points the provider file at an empty temp path and turns off the
    built-in providers so tests only see what they configure.
    """
    from bplus_research.config import get_settings
    settings = get_settings()

    saved = {
        "PROVIDERS_PATH": settings.PROVIDERS_PATH,
        "NATIVE_SEARCH_ENABLED": settings.NATIVE_SEARCH_ENABLED,
        "SEARXNG_URL": settings.SEARXNG_URL,
        "AUTH_USERNAME": settings.AUTH_USERNAME,
        "AUTH_PASSWORD": settings.AUTH_PASSWORD,
        "MAX_RESULTS": settings.MAX_RESULTS,
    }
    settings.PROVIDERS_PATH = str(tmp_path / "providers.yaml")
    settings.NATIVE_SEARCH_ENABLED = False
    settings.SEARXNG_URL = None
    settings.AUTH_USERNAME = None
    settings.AUTH_PASSWORD = None

    yield settings

    for key, value in saved.items():
        setattr(settings, key, value)

@pytest.fixture
def route_transport():
    """
    Builds an httpx.MockTransport that dispatches on request host.

    Each route is a callable taking the request and returning an
    httpx.Response (or a coroutine producing one, for slow providers).
    Unknown hosts get a 404.
    """
    def build(routes):
        async def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(request.url.host)
            if route is None:
                return httpx.Response(404)
            result = route(request)
            if inspect.isawaitable(result):
                result = await result
            return result
        return httpx.MockTransport(handler)
    return build
