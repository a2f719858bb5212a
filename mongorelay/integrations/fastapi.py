from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from fastapi import Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import to_json

from mongorelay.utils.exceptions import InvalidSource, MongoRelayError
from mongorelay.utils.pagination import Connection, ConnectionArgs

T = TypeVar("T")


def _object_id_as_str(value: Any) -> str:
    if isinstance(value, ObjectId):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class ObjectIdJSONResponse(JSONResponse):
    """JSONResponse that renders bson ObjectId values as strings.

    Raw documents fetched by MongoQuery/MongoAggregation carry ObjectId
    ``_id`` fields; this lets an endpoint return such nodes untouched.
    """

    def render(self, content: Any) -> bytes:
        return to_json(content, fallback=_object_id_as_str)


class ConnectionParams:
    """FastAPI dependency reading Relay pagination query parameters.

    ``first``/``last`` are clamped to ``[0, max_page_size]``.

    Example:
        @app.get("/articles")
        async def list_articles(params: ConnectionParams = Depends()):
            return await build_connection(query, params.to_args())
    """

    max_page_size: int = 100

    def __init__(
        self,
        after: Optional[str] = Query(default=None),
        before: Optional[str] = Query(default=None),
        first: Optional[int] = Query(default=None),
        last: Optional[int] = Query(default=None),
    ):
        self.after = after
        self.before = before
        self.first = self._clamp(first)
        self.last = self._clamp(last)

    def _clamp(self, value: int | None) -> int | None:
        if value is None:
            return None
        return min(max(0, value), self.max_page_size)

    def to_args(self) -> ConnectionArgs:
        return ConnectionArgs(after=self.after, before=self.before, first=self.first, last=self.last)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageInfoModel(_CamelModel):
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None
    has_previous_page: bool
    has_next_page: bool


class EdgeModel(_CamelModel, Generic[T]):
    cursor: str
    node: T


class ConnectionResponse(_CamelModel, Generic[T]):
    """Response model for connection endpoints, serialized with camelCase keys."""

    edges: list[EdgeModel[T]]
    page_info: PageInfoModel

    @classmethod
    def from_connection(cls, connection: Connection) -> ConnectionResponse:
        info = connection.page_info
        return cls(
            edges=[{"cursor": edge.cursor, "node": edge.node} for edge in connection.edges],
            page_info=PageInfoModel(
                start_cursor=info.start_cursor,
                end_cursor=info.end_cursor,
                has_previous_page=info.has_previous_page,
                has_next_page=info.has_next_page,
            ),
        )


def register_exception_handlers(app: Any) -> None:
    """Register mongorelay exception handlers on a FastAPI app."""

    @app.exception_handler(InvalidSource)
    async def invalid_source_handler(request: Any, exc: InvalidSource):
        return JSONResponse(status_code=500, content={"detail": f"Invalid connection source: {exc}"})

    @app.exception_handler(MongoRelayError)
    async def mongorelay_error_handler(request: Any, exc: MongoRelayError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})
