from types import SimpleNamespace

import pytest

from domain.errors import AuthenticationError, AuthorizationError
from interface.auth import SupabaseStore, authenticate, authorize, bearer_token, resolve_role

from conftest import FakeStore


class _Query:
    def __init__(self, rows):
        self.rows = rows
        self.filters = []

    def select(self, columns):
        self.filters.append(("select", columns))
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, tuple(values)))
        return self

    def execute(self):
        return SimpleNamespace(data=self.rows)


class _Client:
    def __init__(self, rows, user_id="user-1"):
        self.query = _Query(rows)
        self.tables = []
        user = SimpleNamespace(id=user_id) if user_id else None
        self.auth = SimpleNamespace(get_user=lambda token: SimpleNamespace(user=user))

    def table(self, name):
        self.tables.append(name)
        return self.query


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "Bearer"])
def test_bearer_token_is_required(header):
    with pytest.raises(AuthenticationError):
        bearer_token(header)


def test_bearer_token_extracts_token():
    assert bearer_token("Bearer abc.def") == "abc.def"
    assert bearer_token("bearer  xyz ") == "xyz"


def test_resolve_role_prefers_admin():
    assert resolve_role(["viewer", "staff", "admin"]) == "admin"
    assert resolve_role(["viewer", "staff"]) == "staff"
    assert resolve_role([]) is None


def test_authenticate_and_authorize():
    store = FakeStore(tokens={"t": "u"}, roles={"u": ["admin"]})

    user_id = authenticate(store, "t")

    assert authorize(store, user_id) == "admin"
    with pytest.raises(AuthenticationError):
        authenticate(store, "other")


def test_authorize_rejects_user_without_roles():
    with pytest.raises(AuthorizationError):
        authorize(FakeStore(roles={}), "nobody")


def test_supabase_store_queries_user_roles():
    client = _Client(rows=[{"role": "staff"}])
    store = SupabaseStore(client)

    assert store.get_user_id("token") == "user-1"
    assert store.fetch_roles("user-1", ("admin", "staff")) == ["staff"]
    assert client.tables == ["user_roles"]
    assert ("eq", "user_id", "user-1") in client.query.filters
    assert ("in", "role", ("admin", "staff")) in client.query.filters


def test_supabase_store_without_user():
    assert SupabaseStore(_Client(rows=[], user_id=None)).get_user_id("token") is None
