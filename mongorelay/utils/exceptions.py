class MongoRelayError(Exception):
    """Base exception for all mongorelay errors."""


class InvalidSource(MongoRelayError):
    """Raised when an object passed as a connection source lacks the source protocol."""
