"""Custom exceptions raised by the assignment engine and their HTTP status codes."""
