"""API request and response models."""

from authtree_api.models.requests import SetLeafRequest, VerifyRequest
from authtree_api.models.responses import (
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    LeafResponse,
    RootResponse,
    VerifyResponse,
)

__all__ = [
    "SetLeafRequest",
    "VerifyRequest",
    "HealthResponse",
    "RootResponse",
    "LeafResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
