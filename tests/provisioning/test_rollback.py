"""Tests for the install rollback."""

import pytest

from tenant_installer.pipeline.state import InstallRunState
from tenant_installer.provisioning.capabilities import Account, Tenant
from tenant_installer.provisioning.rollback import rollback

TENANT = Tenant(id="t1", name="master", display_name="Master")
ACCOUNT = Account(id="u1", email="admin@example.com", tenant_id="t1")


@pytest.mark.asyncio
async def test_success_skips_rollback(fake_store):
    await rollback(InstallRunState(created_tenant=TENANT, created_super_user=ACCOUNT), fake_store, 0)
    assert fake_store.calls == []


@pytest.mark.asyncio
async def test_nothing_created_is_a_no_op(fake_store):
    await rollback(InstallRunState(), fake_store, 1)
    await rollback(InstallRunState(created_tenant=TENANT), None, 1)
    assert fake_store.calls == []


@pytest.mark.asyncio
async def test_removes_tenant_then_user(fake_store):
    state = InstallRunState(created_tenant=TENANT, created_super_user=ACCOUNT)
    await rollback(state, fake_store, 1)
    assert fake_store.calls == [
        ("destroy", "tenant", {"id": "t1"}),
        ("destroy", "user", {"id": "u1"}),
    ]


@pytest.mark.asyncio
async def test_tenant_only(fake_store):
    await rollback(InstallRunState(created_tenant=TENANT), fake_store, 1)
    assert fake_store.calls == [("destroy", "tenant", {"id": "t1"})]


@pytest.mark.asyncio
async def test_user_without_tenant_is_left_alone(fake_store):
    await rollback(InstallRunState(created_super_user=ACCOUNT), fake_store, 1)
    assert fake_store.calls == []


@pytest.mark.asyncio
async def test_failed_deletion_is_logged_not_raised(fake_store, caplog):
    fake_store.failures["destroy:tenant"] = RuntimeError("db down")
    state = InstallRunState(created_tenant=TENANT, created_super_user=ACCOUNT)

    await rollback(state, fake_store, 1)

    assert ("destroy", "user", {"id": "u1"}) in fake_store.calls
    assert "Failed to remove tenant t1" in caplog.text
