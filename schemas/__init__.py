"""Pydantic request models for the API routers."""
