"""In-memory stand-ins for pymongo's async collection API.

Only the calls the Mongo sources make are supported: count_documents, find
with sort/skip/limit/to_list, and aggregate with $match/$sort/$skip/$limit
and a counting $group.
"""

from __future__ import annotations

from typing import Any

import pytest
from bson import ObjectId
from pymongo import DESCENDING

from mongorelay import disable_tracing


def _matches(doc: dict[str, Any], filter: dict[str, Any] | None) -> bool:
    return all(doc.get(key) == value for key, value in (filter or {}).items())


def _sorted(docs: list[dict[str, Any]], spec: list[tuple[str, int]]) -> list[dict[str, Any]]:
    result = list(docs)
    for key, direction in reversed(spec):
        result.sort(key=lambda d: d.get(key), reverse=direction == DESCENDING)
    return result


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, spec: list[tuple[str, int]]) -> FakeCursor:
        self._docs = _sorted(self._docs, spec)
        return self

    def skip(self, n: int) -> FakeCursor:
        self._skip = n
        return self

    def limit(self, n: int) -> FakeCursor:
        self._limit = n
        return self

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        docs = self._docs[self._skip:]
        # mongo semantics: limit 0 means no limit
        if self._limit:
            docs = docs[: self._limit]
        return [dict(d) for d in docs]


class FakeCommandCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return [dict(d) for d in self._docs]


class FakeCollection:
    def __init__(self, name: str, docs: list[dict[str, Any]] | None = None) -> None:
        self.name = name
        self.docs = docs or []
        self.calls: list[tuple[str, Any]] = []

    async def count_documents(self, filter: dict[str, Any]) -> int:
        self.calls.append(("count_documents", filter))
        return sum(1 for d in self.docs if _matches(d, filter))

    def find(self, filter: dict[str, Any] | None = None, projection: dict[str, int] | None = None) -> FakeCursor:
        self.calls.append(("find", filter))
        docs = [d for d in self.docs if _matches(d, filter)]
        if projection:
            docs = [{k: v for k, v in d.items() if k in projection} for d in docs]
        return FakeCursor(docs)

    async def aggregate(self, pipeline: list[dict[str, Any]]) -> FakeCommandCursor:
        self.calls.append(("aggregate", pipeline))
        docs = list(self.docs)
        for stage in pipeline:
            (op, arg), = stage.items()
            if op == "$match":
                docs = [d for d in docs if _matches(d, arg)]
            elif op == "$sort":
                docs = _sorted(docs, list(arg.items()))
            elif op == "$skip":
                docs = docs[arg:]
            elif op == "$limit":
                if arg <= 0:
                    raise ValueError("the limit must be positive")
                docs = docs[:arg]
            elif op == "$group" and arg == {"_id": None, "count": {"$sum": 1}}:
                docs = [{"_id": None, "count": len(docs)}] if docs else []
            else:
                raise NotImplementedError(f"fake aggregate does not support {op}")
        return FakeCommandCursor(docs)

    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]


@pytest.fixture
def articles() -> FakeCollection:
    """Ten articles ranked 0-9, alternating tech/science."""
    docs = [
        {
            "_id": ObjectId(),
            "title": f"article_{i:02d}",
            "rank": i,
            "category": "tech" if i % 2 == 0 else "science",
        }
        for i in range(10)
    ]
    return FakeCollection("articles", docs)


@pytest.fixture
def empty_collection() -> FakeCollection:
    return FakeCollection("empty")


@pytest.fixture(autouse=True)
def reset_tracing():
    yield
    disable_tracing()
