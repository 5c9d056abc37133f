"""FastAPI service over the irrigation engine."""
