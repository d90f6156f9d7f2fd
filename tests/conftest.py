import os
import uuid
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import httpx
import pytest

# Settings are read at import time
os.environ.setdefault("POSTGRES_SERVER", "localhost")
os.environ.setdefault("POSTGRES_USER", "focusflow")
os.environ.setdefault("POSTGRES_PASSWORD", "focusflow")
os.environ.setdefault("POSTGRES_DB", "focusflow_test")

from fastapi.testclient import TestClient

from focusflow.database import get_db
from focusflow.exceptions import GenerationError, PersistenceError
from focusflow.main import app
from focusflow.prompts.lesson import ADAPTATION_SYSTEM_PROMPT
from focusflow.utils import deps

ADAPTED_TEXT = "1. **Chunked Content**: Warm-up (10 min), fractions on a number line (15 min)."

TIPS_TEXT = """- **Tip Type**: break
- **Suggestion**: Pause every 10 minutes for a stretch.
- **Why**: Short breaks reset attention.

- **Tip Type**: visual
- **Suggestion**: Use fraction strips on the board.
- **Why**: Concrete visuals help working memory.

- **Tip Type**: movement
- **Suggestion**: Let students walk to the board to place fractions.
- **Why**: Movement channels restlessness."""

GENERATED_IMAGE_URL = "https://images.example.com/generated/abc.png"


class FakeStore:
    """In-memory stand-in for LessonStore that records every call."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str, dict]] = []
        # (table, n) -> fail the n-th insert into that table (0-based)
        self.fail_inserts: set[tuple[str, int]] = set()
        self.fail_tables: set[str] = set()
        self._insert_counts: dict[str, int] = {}

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    def calls_for(self, operation: str, table: str) -> list[dict]:
        return [data for op, t, data in self.calls if op == operation and t == table]

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        for column, value in filters.items():
            if isinstance(value, (list, tuple, set)):
                if str(row.get(column)) not in {str(v) for v in value}:
                    return False
            elif str(row.get(column)) != str(value):
                return False
        return True

    async def update(self, table, filters, fields):
        self.calls.append(("update", table, {"filters": dict(filters), **fields}))
        if table in self.fail_tables:
            raise PersistenceError("update failed", operation=f"update_{table}")
        changed = 0
        for row in self.rows(table):
            if self._matches(row, filters):
                row.update(fields)
                changed += 1
        return changed

    async def insert(self, table, fields):
        self.calls.append(("insert", table, dict(fields)))
        position = self._insert_counts.get(table, 0)
        self._insert_counts[table] = position + 1
        if table in self.fail_tables or (table, position) in self.fail_inserts:
            raise PersistenceError("insert failed", operation=f"insert_{table}")
        row = {
            "id": uuid.uuid4(),
            "created_at": datetime.now(timezone.utc),
            **fields,
        }
        self.rows(table).append(row)
        return dict(row)

    async def select(self, table, filters, order_by=None, descending=False):
        self.calls.append(("select", table, dict(filters)))
        rows = [dict(r) for r in self.rows(table) if self._matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: r[order_by], reverse=descending)
        return rows

    async def delete(self, table, filters):
        self.calls.append(("delete", table, dict(filters)))
        kept = [r for r in self.rows(table) if not self._matches(r, filters)]
        deleted = len(self.rows(table)) - len(kept)
        self.tables[table] = kept
        return deleted

    async def count(self, table, filters):
        self.calls.append(("count", table, dict(filters)))
        return len([r for r in self.rows(table) if self._matches(r, filters)])

    def add_lesson_plan(self, **overrides) -> dict[str, Any]:
        row = {
            "id": uuid.uuid4(),
            "teacher_id": "teacher-1",
            "title": "Fractions intro",
            "subject": "Math",
            "grade_level": "3rd Grade",
            "original_content": "Today we explore fractions and division.",
            "adhd_adapted_content": None,
            "file_url": None,
            "created_at": datetime.now(timezone.utc),
            "updated_at": datetime.now(timezone.utc),
            **overrides,
        }
        self.rows("lesson_plans").append(row)
        return row


class FakeTextGenerator:
    """Answers the adaptation prompt and the tips prompt with fixed text."""

    def __init__(self, adapted: str = ADAPTED_TEXT, tips: str = TIPS_TEXT):
        self.adapted = adapted
        self.tips = tips
        self.fail_adaptation = False
        self.fail_tips = False
        self.calls: list[tuple[str, str]] = []

    async def generate(self, system_prompt, user_prompt, max_tokens=1000):
        self.calls.append((system_prompt, user_prompt))
        if system_prompt == ADAPTATION_SYSTEM_PROMPT:
            if self.fail_adaptation:
                raise GenerationError("adaptation failed", service="text")
            return self.adapted
        if self.fail_tips:
            raise GenerationError("tips failed", service="text")
        return self.tips


class FakeImageGenerator:
    def __init__(self, url: str = GENERATED_IMAGE_URL):
        self.url = url
        self.fail = False
        self.calls: list[tuple[str, str]] = []

    async def generate_image(self, prompt, size):
        self.calls.append((prompt, size))
        if self.fail:
            raise GenerationError("Failed to generate visualizer image", service="image")
        return self.url


class FakeObjectStorage:
    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail = False

    async def upload(self, bucket, path, data, content_type, upsert=False):
        if self.fail:
            raise RuntimeError("bucket unavailable")
        self.objects[f"{bucket}/{path}"] = data
        return f"{bucket}/{path}"

    def get_public_url(self, bucket, path):
        return f"https://cdn.example.com/{bucket}/{path}"


def make_http_client(status_code: int = 200, content: bytes = b"\x89PNG fake") -> httpx.AsyncClient:
    """An httpx client that serves every request from memory."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeSession:
    """Just enough of AsyncSession for the health check."""

    def __init__(self, healthy: bool = True):
        self.healthy = healthy

    async def execute(self, *args, **kwargs):
        if not self.healthy:
            raise ConnectionError("database unreachable")

        class _Result:
            def scalar(self):
                return 1

        return _Result()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def fake_image_generator() -> FakeImageGenerator:
    return FakeImageGenerator()


@pytest.fixture
def fake_object_storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(
    fake_store,
    fake_generator,
    fake_image_generator,
    fake_object_storage,
    fake_session,
) -> Iterator[TestClient]:
    async def override_get_db():
        yield fake_session

    async def override_get_http_client():
        async with make_http_client() as http_client:
            yield http_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_store] = lambda: fake_store
    app.dependency_overrides[deps.get_text_generator] = lambda: fake_generator
    app.dependency_overrides[deps.get_image_generator] = lambda: fake_image_generator
    app.dependency_overrides[deps.get_object_storage] = lambda: fake_object_storage
    app.dependency_overrides[deps.get_http_client] = override_get_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
