"""FastAPI interface of the service."""
