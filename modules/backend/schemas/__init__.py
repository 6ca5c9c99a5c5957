# Pydantic schemas package
from modules.backend.schemas.base import (
    CamelModel,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)

__all__ = [
    "CamelModel",
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMetadata",
]
