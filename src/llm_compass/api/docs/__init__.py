"""API documentation package.

This package contains OpenAPI/Swagger documentation for API endpoints.
Documentation is organized by endpoint groups:
- recommend.py: Recommendation endpoint
- responses.py: Common response examples
"""

from .recommend import (
    RECOMMEND_DESCRIPTION,
    RECOMMEND_OPERATION_ID,
    RECOMMEND_RESPONSES,
    RECOMMEND_SUMMARY,
    RECOMMEND_TAGS,
)
from .responses import ERROR_RESPONSES

__all__ = [
    "ERROR_RESPONSES",
    "RECOMMEND_DESCRIPTION",
    "RECOMMEND_OPERATION_ID",
    "RECOMMEND_RESPONSES",
    "RECOMMEND_SUMMARY",
    "RECOMMEND_TAGS",
]
