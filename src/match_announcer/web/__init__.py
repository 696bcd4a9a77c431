"""FastAPI transport and settings API."""
