"""Pytest configuration for integration tests."""

import os
import uuid

import httpx
import pytest

from gym_tracker.db import RemoteStore

EMULATOR_PROJECT = "demo-gym-tracker"


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def emulator_host():
    host = os.environ.get("FIRESTORE_EMULATOR_HOST")
    if not host:
        pytest.skip("FIRESTORE_EMULATOR_HOST is not set")
    return host


@pytest.fixture
async def emulator_store(emulator_host):
    """Remote store pointed at the Firestore emulator, wiped afterwards."""
    store = RemoteStore(
        project_id=EMULATOR_PROJECT,
        api_key="emulator",
        id_token="owner",
        base_url=f"http://{emulator_host}/v1",
    )
    yield store
    await store.aclose()
    async with httpx.AsyncClient() as client:
        await client.delete(
            f"http://{emulator_host}/emulator/v1/projects/{EMULATOR_PROJECT}"
            "/databases/(default)/documents"
        )


@pytest.fixture
def user_id():
    return f"it-{uuid.uuid4().hex[:8]}"
