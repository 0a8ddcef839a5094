"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path

import httpx
import pytest

from gym_tracker.config import Settings
from gym_tracker.db import LocalFallbackStore, RemoteStore
from gym_tracker.models.attendance import TrainingType
from gym_tracker.models.supplements import Ingredient, IngredientLine, SupplementProduct
from gym_tracker.utils.ids import IdGenerator

FAKE_BASE_URL = "https://firestore.test/v1"
FAKE_PROJECT = "demo-project"


class FakeFirestore:
    """In-memory stand-in for the Firestore REST document API.

    Documents are kept as encoded ``fields`` maps keyed by their path
    relative to the database's ``documents`` root.
    """

    def __init__(self, page_size_cap: int | None = None):
        self.prefix = f"/v1/projects/{FAKE_PROJECT}/databases/(default)/documents"
        self.docs: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_writes = False
        self.fail_reads = False
        self.page_size_cap = page_size_cap

    def _doc(self, rel: str) -> dict:
        return {"name": f"projects/{FAKE_PROJECT}/databases/(default)/documents/{rel}",
                "fields": self.docs[rel]}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if not path.startswith(self.prefix + "/"):
            return httpx.Response(400, json={"error": "bad path"})
        rel = path[len(self.prefix) + 1:]
        segments = rel.split("/")
        is_document = len(segments) % 2 == 0

        if request.method in ("PATCH", "DELETE") and self.fail_writes:
            return httpx.Response(500, json={"error": "unavailable"})
        if request.method == "GET" and self.fail_reads:
            return httpx.Response(503, json={"error": "unavailable"})

        if request.method == "GET" and is_document:
            if rel not in self.docs:
                return httpx.Response(404, json={"error": "not found"})
            return httpx.Response(200, json=self._doc(rel))

        if request.method == "GET":
            children = sorted(
                key for key in self.docs
                if key.startswith(rel + "/") and len(key.split("/")) == len(segments) + 1
            )
            size = int(request.url.params.get("pageSize", "100"))
            if self.page_size_cap:
                size = min(size, self.page_size_cap)
            offset = int(request.url.params.get("pageToken", "0"))
            page = children[offset:offset + size]
            body: dict = {}
            if page:
                body["documents"] = [self._doc(key) for key in page]
            if offset + size < len(children):
                body["nextPageToken"] = str(offset + size)
            return httpx.Response(200, json=body)

        if request.method == "PATCH":
            fields = json.loads(request.content).get("fields", {})
            mask = request.url.params.get_list("updateMask.fieldPaths")
            if mask:
                merged = dict(self.docs.get(rel, {}))
                for name in mask:
                    name = name.strip("`")
                    if name in fields:
                        merged[name] = fields[name]
                    else:
                        merged.pop(name, None)
                self.docs[rel] = merged
            else:
                self.docs[rel] = fields
            return httpx.Response(200, json=self._doc(rel))

        if request.method == "DELETE":
            self.docs.pop(rel, None)
            return httpx.Response(200, json={})

        return httpx.Response(405)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def local_store(temp_db_path):
    return LocalFallbackStore(temp_db_path)


@pytest.fixture
def fake_firestore():
    return FakeFirestore()


@pytest.fixture
async def remote_store(fake_firestore):
    store = RemoteStore(
        project_id=FAKE_PROJECT,
        api_key="test-key",
        base_url=FAKE_BASE_URL,
        transport=httpx.MockTransport(fake_firestore.handler),
    )
    yield store
    await store.aclose()


@pytest.fixture(params=["local", "remote"])
async def store(request, temp_db_path, fake_firestore):
    """Each storage backend in turn; both must behave identically."""
    if request.param == "local":
        yield LocalFallbackStore(temp_db_path)
        return
    remote = RemoteStore(
        project_id=FAKE_PROJECT,
        api_key="test-key",
        base_url=FAKE_BASE_URL,
        transport=httpx.MockTransport(fake_firestore.handler),
    )
    yield remote
    await remote.aclose()


@pytest.fixture
def local_settings(temp_db_path):
    """Settings that select the local store in a temporary directory."""
    return Settings(env={"GYM_TRACKER_DATA_DIR": str(temp_db_path.parent)})


@pytest.fixture
def remote_settings(temp_db_path):
    return Settings(
        env={
            "GYM_TRACKER_DATA_DIR": str(temp_db_path.parent),
            "FIREBASE_API_KEY": "test-key",
            "FIREBASE_PROJECT_ID": FAKE_PROJECT,
            "FIRESTORE_BASE_URL": FAKE_BASE_URL,
        }
    )


class SequentialIds(IdGenerator):
    """Predictable ids for assertions."""

    def __init__(self, prefix: str = "id"):
        super().__init__()
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count}"

    __call__ = new_id


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def training_types():
    return [
        TrainingType(id="push", name="Push", color="#f44336", icon="fitness_center"),
        TrainingType(id="pull", name="Pull", color="#2196f3"),
        TrainingType(id="legs", name="Legs", color="#4caf50"),
    ]


@pytest.fixture
def ingredient_catalog():
    return [
        Ingredient(id="vit_d3", name="Vitamin D3", default_unit="IU", category="Vitamin", aliases=["Cholecalciferol"]),
        Ingredient(id="magnesium", name="Magnesium", default_unit="mg", category="Mineral"),
        Ingredient(id="zinc", name="Zinc", default_unit="mg", category="Mineral"),
    ]


@pytest.fixture
def products():
    return [
        SupplementProduct(
            id="multi",
            name="Daily Multi",
            brand="Acme",
            ingredients=[
                IngredientLine(std_id="vit_d3", amount=1000, unit="IU"),
                IngredientLine(std_id="zinc", amount=10, unit="mg"),
            ],
        ),
        SupplementProduct(
            id="mag",
            name="Magnesium Glycinate",
            brand="Pure",
            ingredients=[IngredientLine(std_id="magnesium", amount=200, unit="mg")],
        ),
    ]
