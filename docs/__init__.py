"""Markdown descriptions shown in the OpenAPI docs for each endpoint."""
