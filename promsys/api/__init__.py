"""FastAPI application assembly: app factory and exception handlers."""
