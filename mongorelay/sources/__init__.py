from mongorelay.sources.base import ConnectionSource
from mongorelay.sources.query import MongoQuery
from mongorelay.sources.aggregate import MongoAggregation
from mongorelay.sources.sequence import SequenceSource

__all__ = [
    "ConnectionSource",
    "MongoQuery",
    "MongoAggregation",
    "SequenceSource",
]
