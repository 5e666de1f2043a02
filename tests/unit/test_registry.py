"""Tests for the per-tenant engine registry."""

import asyncio

import pytest

from src.lexdesk.core.db import ConnectionRegistry

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


class FakeEngine:
    def __init__(self, fail_dispose: bool = False):
        self.disposed = False
        self.fail_dispose = fail_dispose

    async def dispose(self) -> None:
        if self.fail_dispose:
            raise RuntimeError("dispose failed")
        self.disposed = True


class CountingFactory:
    def __init__(self):
        self.created: list[FakeEngine] = []

    def __call__(self) -> FakeEngine:
        engine = FakeEngine()
        self.created.append(engine)
        return engine


async def test_engine_created_once_per_tenant():
    factory = CountingFactory()
    registry = ConnectionRegistry(engine_factory=factory)

    first = await registry.get_or_create("acme")
    second = await registry.get_or_create("acme")

    assert first is second
    assert len(factory.created) == 1
    assert "acme" in registry
    assert len(registry) == 1


async def test_tenants_get_separate_engines():
    registry = ConnectionRegistry(engine_factory=CountingFactory())

    acme = await registry.get_or_create("acme")
    globex = await registry.get_or_create("globex")

    assert acme is not globex
    assert len(registry) == 2


async def test_concurrent_first_access_creates_one_engine():
    factory = CountingFactory()
    registry = ConnectionRegistry(engine_factory=factory)

    engines = await asyncio.gather(*(registry.get_or_create("acme") for _ in range(20)))

    assert len(factory.created) == 1
    assert all(engine is engines[0] for engine in engines)


async def test_dispose_all_disposes_and_clears():
    factory = CountingFactory()
    registry = ConnectionRegistry(engine_factory=factory)
    await registry.get_or_create("acme")
    await registry.get_or_create("globex")

    await registry.dispose_all()

    assert all(engine.disposed for engine in factory.created)
    assert len(registry) == 0


async def test_dispose_all_continues_after_failure():
    engines = iter([FakeEngine(fail_dispose=True), FakeEngine()])
    registry = ConnectionRegistry(engine_factory=lambda: next(engines))
    failing = await registry.get_or_create("acme")
    healthy = await registry.get_or_create("globex")

    await registry.dispose_all()

    assert not failing.disposed
    assert healthy.disposed
    assert len(registry) == 0


async def test_engine_recreated_after_dispose():
    factory = CountingFactory()
    registry = ConnectionRegistry(engine_factory=factory)
    before = await registry.get_or_create("acme")
    await registry.dispose_all()

    after = await registry.get_or_create("acme")

    assert after is not before
    assert len(factory.created) == 2
