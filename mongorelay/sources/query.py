from __future__ import annotations

from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from mongorelay.lifecycle.observability import track_query
from mongorelay.utils.types import FilterSpec, Projection, SortSpec, merge_filters


class MongoQuery:
    """Find-style connection source over a pymongo async collection.

    Chainable methods (``filter``, ``sort``, ``select``) return new instances;
    only ``configure_window`` changes an instance in place, and the connection
    builder only calls it on a duplicate.

    Example:
        query = MongoQuery(db.articles).filter(category="tech").sort("-views")
        connection = await build_connection(query, {"first": 10})
    """

    def __init__(
        self,
        collection: AsyncCollection,
        filter: FilterSpec | None = None,
        sort: SortSpec | None = None,
        projection: Projection | None = None,
        skip_count: int = 0,
        limit_count: int | None = None,
    ) -> None:
        self._collection = collection
        self._filter: FilterSpec = filter or {}
        self._sort: SortSpec = sort or []
        self._projection = projection
        self._skip_count = skip_count
        # None means unbounded; mongo treats limit 0 as unbounded too, so 0 is
        # handled separately in fetch()
        self._limit_count = limit_count

    def _clone(self, **overrides: Any) -> MongoQuery:
        defaults = {
            "collection": self._collection,
            "filter": self._filter.copy(),
            "sort": self._sort.copy(),
            "projection": self._projection.copy() if self._projection else None,
            "skip_count": self._skip_count,
            "limit_count": self._limit_count,
        }
        defaults.update(overrides)
        return MongoQuery(**defaults)

    @property
    def collection_name(self) -> str:
        return self._collection.name

    @property
    def filter_spec(self) -> FilterSpec:
        return self._filter.copy()

    @property
    def sort_spec(self) -> SortSpec:
        return self._sort.copy()

    @property
    def window(self) -> tuple[int, int | None]:
        return self._skip_count, self._limit_count

    # --- Chainable methods ---

    def filter(self, _filter: FilterSpec | str | ObjectId | None = None, **kwargs: Any) -> MongoQuery:
        """Merge conditions into the filter.

        A string or ObjectId is shorthand for an ``_id`` match.
        """
        if isinstance(_filter, str):
            _filter = {"_id": ObjectId(_filter)}
        elif isinstance(_filter, ObjectId):
            _filter = {"_id": _filter}

        return self._clone(filter=merge_filters(self._filter, _filter, **kwargs))

    def sort(self, *fields: str) -> MongoQuery:
        """Set sort order. Prefix with '-' for descending.

        Offsets in cursors are positions in this ordering, so paginate over
        a deterministic sort (end with a unique field such as ``_id``).
        """
        sort_spec: SortSpec = []
        for field in fields:
            if field.startswith("-"):
                sort_spec.append((field[1:], DESCENDING))
            else:
                sort_spec.append((field, ASCENDING))
        return self._clone(sort=sort_spec)

    def select(self, *fields: str) -> MongoQuery:
        projection = {f: 1 for f in fields}
        projection["_id"] = 1
        return self._clone(projection=projection)

    # --- Source protocol ---

    def duplicate(self) -> MongoQuery:
        return self._clone()

    def configure_window(self, skip: int, limit: int) -> None:
        self._skip_count = skip
        self._limit_count = limit

    async def count(self) -> int:
        async with track_query("count", self.collection_name, filter=self._filter) as ctx:
            result = await self._collection.count_documents(self._filter)
            ctx["result_count"] = result
        return result

    async def fetch(self) -> list[dict[str, Any]]:
        if self._limit_count == 0:
            return []

        async with track_query(
            "find",
            self.collection_name,
            filter=self._filter,
            skip=self._skip_count,
            limit=self._limit_count,
        ) as ctx:
            cursor = self._collection.find(self._filter, self._projection)
            if self._sort:
                cursor = cursor.sort(self._sort)
            if self._skip_count:
                cursor = cursor.skip(self._skip_count)
            if self._limit_count is not None:
                cursor = cursor.limit(self._limit_count)
            results = await cursor.to_list()
            ctx["result_count"] = len(results)
        return results

    def __repr__(self) -> str:
        return (
            f"MongoQuery(collection={self.collection_name!r}, filter={self._filter!r}, "
            f"sort={self._sort!r})"
        )
