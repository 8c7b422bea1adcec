"""Common response examples for API documentation."""
from typing import Any, Dict

# Common error responses
ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {
        "description": "Bad request",
        "content": {
            "application/json": {
                "example": {"error": "Invalid request: useCase is required"}
            }
        },
    },
    500: {
        "description": "Internal server error",
        "content": {
            "application/json": {
                "example": {
                    "error": "Failed to generate recommendations",
                    "details": "Generative API timed out after 60.0s",
                }
            }
        },
    },
}
