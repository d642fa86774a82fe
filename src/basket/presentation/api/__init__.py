"""REST API presentation layer for Basket.

Structure:
    api/
    ├── app.py          # FastAPI application factory
    ├── config.py       # API configuration
    ├── dependencies.py # Dependency injection and role guards
    ├── routers/        # API route handlers
    └── schemas/        # Pydantic request/response schemas
"""

from basket.presentation.api.app import create_app

__all__ = ["create_app"]
