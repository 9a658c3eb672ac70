"""FastAPI application and shared dependencies."""
