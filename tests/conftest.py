from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from config import ServiceSettings
from interface.app import create_app


class FakeCompletions:
    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self.content = content
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeAIClient:
    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return self.completions.calls


class FakeStore:
    def __init__(
        self,
        tokens: Optional[Dict[str, str]] = None,
        roles: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.tokens = tokens if tokens is not None else {"staff-token": "user-staff", "viewer-token": "user-viewer"}
        self.roles = roles if roles is not None else {"user-staff": ["staff"], "user-viewer": ["viewer"]}

    def get_user_id(self, token: str) -> Optional[str]:
        return self.tokens.get(token)

    def fetch_roles(self, user_id: str, roles) -> List[str]:
        return [r for r in self.roles.get(user_id, []) if r in roles]


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(
        _env_file=None,
        AI_GATEWAY_API_KEY="test-key",
        SUPABASE_URL="https://example.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="service-key",
        AI_MODEL="test-model",
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def ai_client() -> FakeAIClient:
    return FakeAIClient(content='[{"name": "MCB 32A", "selling_price": 150}]')


@pytest.fixture
def make_client(settings: ServiceSettings, store: FakeStore):
    def _make(ai: FakeAIClient) -> TestClient:
        return TestClient(create_app(settings=settings, store=store, ai_client=ai))

    return _make


@pytest.fixture
def staff_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer staff-token"}
