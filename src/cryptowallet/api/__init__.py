"""FastAPI API layer."""
