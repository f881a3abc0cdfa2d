"""
Tests for the curriculum admin CLI.
"""

import asyncio

import pytest
from aiocache import Cache
from click.testing import CliRunner

from curriculum_backend.cli import admin
from curriculum_backend.cli.cli import cli
from curriculum_backend.model.auth import User
from curriculum_backend.model.role import Role
from curriculum_backend.search.index import SearchIndex


@pytest.fixture
def cli_env(Session, engine, monkeypatch):
    cache = Cache(Cache.MEMORY)

    async def get_cache():
        return cache

    monkeypatch.setattr(admin, "get_db", lambda: iter([Session()]))
    monkeypatch.setattr(admin, "get_engine", lambda: engine)
    monkeypatch.setattr(admin, "get_redis_client", get_cache)
    monkeypatch.setattr(admin, "encrypt_password", lambda password: f"encrypted:{password}")
    return cache


@pytest.mark.unit
class TestCli:

    def test_init_db_creates_roles(self, cli_env, session):
        result = CliRunner().invoke(cli, ["init-db"])

        assert result.exit_code == 0, result.output
        assert sorted(role.id for role in session.query(Role).all()) == ["ADMIN", "USER"]

    def test_create_user(self, cli_env, session):
        result = CliRunner().invoke(cli, [
            "create-user", "--login", "admin", "--password", "secret",
            "--role", "ADMIN", "--role", "USER",
        ])

        assert result.exit_code == 0, result.output
        user = session.query(User).filter(User.login == "admin").one()
        assert user.password == "encrypted:secret"
        assert sorted(user.role_ids) == ["ADMIN", "USER"]

    def test_create_user_twice(self, cli_env, seeded):
        result = CliRunner().invoke(cli, ["create-user", "--login", "alice", "--password", "x"])

        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_reindex(self, cli_env, seeded):
        result = CliRunner().invoke(cli, ["reindex", "--entity", "courses"])

        assert result.exit_code == 0, result.output
        assert "courses: 2 documents indexed" in result.output

        documents = asyncio.run(SearchIndex(cli_env, "courses").query("foo"))
        assert [document["description"] for document in documents] == ["foobar"]
