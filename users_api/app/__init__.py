"""
Application package initializer.

The project is organised into a few small pieces: ``core`` holds
configuration, logging, error handling and database access,
``schemas`` the request models, ``services`` the SQL for each
operation and ``api`` the HTTP routes.
"""

from .main import app, create_app  # noqa: F401
