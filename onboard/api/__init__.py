"""HTTP layer - FastAPI application, routes, models and dependencies."""
