from mongorelay.utils.exceptions import MongoRelayError, InvalidSource
from mongorelay.utils.pagination import ConnectionArgs, Connection, Edge, PageInfo
from mongorelay.utils.types import (
    FilterSpec,
    SortSpec,
    Pipeline,
    Projection,
    merge_filters,
)

__all__ = [
    "MongoRelayError",
    "InvalidSource",
    "ConnectionArgs",
    "Connection",
    "Edge",
    "PageInfo",
    "FilterSpec",
    "SortSpec",
    "Pipeline",
    "Projection",
    "merge_filters",
]
