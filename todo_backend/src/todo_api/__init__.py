"""
Todo API package.

A FastAPI service for todo items persisted in a single JSON file. Build the
application with `todo_api.main.create_app`.
"""

__version__ = "0.1.0"
