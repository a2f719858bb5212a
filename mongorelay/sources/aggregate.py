from __future__ import annotations

import copy
from typing import Any

from pymongo.asynchronous.collection import AsyncCollection

from mongorelay.lifecycle.observability import track_query
from mongorelay.utils.types import FilterSpec, Pipeline, merge_filters


class MongoAggregation:
    """Pipeline-style connection source over a pymongo async collection.

    The total count runs the same pipeline followed by a ``$group`` stage, and
    the window is applied by appending ``$skip``/``$limit`` stages.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        pipeline: Pipeline | None = None,
        skip_count: int = 0,
        limit_count: int | None = None,
    ) -> None:
        self._collection = collection
        self._pipeline: Pipeline = copy.deepcopy(pipeline) if pipeline else []
        self._skip_count = skip_count
        self._limit_count = limit_count

    def _clone(self, **overrides: Any) -> MongoAggregation:
        defaults = {
            "collection": self._collection,
            "pipeline": copy.deepcopy(self._pipeline),
            "skip_count": self._skip_count,
            "limit_count": self._limit_count,
        }
        defaults.update(overrides)
        return MongoAggregation(**defaults)

    @property
    def collection_name(self) -> str:
        return self._collection.name

    @property
    def pipeline(self) -> Pipeline:
        return copy.deepcopy(self._pipeline)

    def stage(self, *stages: dict[str, Any]) -> MongoAggregation:
        """Append raw pipeline stages."""
        return self._clone(pipeline=self.pipeline + list(stages))

    def match(self, _filter: FilterSpec | None = None, **kwargs: Any) -> MongoAggregation:
        return self.stage({"$match": merge_filters(_filter, **kwargs)})

    # --- Source protocol ---

    def duplicate(self) -> MongoAggregation:
        return self._clone()

    def configure_window(self, skip: int, limit: int) -> None:
        self._skip_count = skip
        self._limit_count = limit

    def _count_pipeline(self) -> Pipeline:
        return self.pipeline + [{"$group": {"_id": None, "count": {"$sum": 1}}}]

    def _window_pipeline(self) -> Pipeline:
        stages = self.pipeline
        if self._skip_count:
            stages.append({"$skip": self._skip_count})
        if self._limit_count is not None:
            stages.append({"$limit": self._limit_count})
        return stages

    async def count(self) -> int:
        pipeline = self._count_pipeline()
        async with track_query("count", self.collection_name, pipeline=pipeline) as ctx:
            cursor = await self._collection.aggregate(pipeline)
            groups = await cursor.to_list()
            result = groups[0].get("count", 0) if groups else 0
            ctx["result_count"] = result
        return result

    async def fetch(self) -> list[dict[str, Any]]:
        # $limit must be positive
        if self._limit_count == 0:
            return []

        pipeline = self._window_pipeline()
        async with track_query(
            "aggregate",
            self.collection_name,
            pipeline=pipeline,
            skip=self._skip_count,
            limit=self._limit_count,
        ) as ctx:
            cursor = await self._collection.aggregate(pipeline)
            results = await cursor.to_list()
            ctx["result_count"] = len(results)
        return results

    def __repr__(self) -> str:
        return f"MongoAggregation(collection={self.collection_name!r}, stages={len(self._pipeline)})"
