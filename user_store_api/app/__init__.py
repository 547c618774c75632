"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, the record store, errors
and middleware), ``schemas`` (pydantic models), ``services`` (business
logic) and ``api`` (routers, grouped by version).
"""

from .main import app  # noqa: F401
