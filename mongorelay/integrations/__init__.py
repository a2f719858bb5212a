from mongorelay.integrations.fastapi import (
    ConnectionParams,
    ConnectionResponse,
    EdgeModel,
    ObjectIdJSONResponse,
    PageInfoModel,
    register_exception_handlers,
)

__all__ = [
    "ConnectionParams",
    "ConnectionResponse",
    "EdgeModel",
    "ObjectIdJSONResponse",
    "PageInfoModel",
    "register_exception_handlers",
]
