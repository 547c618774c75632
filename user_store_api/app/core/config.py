"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service runs out of the box against a ``users.json`` file in the
current working directory.  Each field is read when ``Settings`` is
instantiated, which lets tests set environment variables (or pass
explicit values) before building an application.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "User Store API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Optional log file.  When empty, logs only go to the console.
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    # Per-request access log lines from the middleware.
    access_log: bool = field(default_factory=lambda: _env_bool("ACCESS_LOG", "true"))

    # Path of the JSON document holding the user collection.  Relative
    # paths are resolved against the current working directory.
    store_path: str = field(default_factory=lambda: os.getenv("STORE_PATH", "users.json"))

    # Write an empty store on startup when the file does not exist yet.
    # With this disabled a missing file makes every user route answer
    # with the error envelope until the file is created.
    init_store: bool = field(default_factory=lambda: _env_bool("INIT_STORE", "true"))

    # Serialize load/mutate/save cycles of write requests behind one
    # process-wide lock.  Disable to get the unguarded behaviour where
    # concurrent writers may overwrite each other.
    store_locking: bool = field(default_factory=lambda: _env_bool("STORE_LOCKING", "true"))

    # Seconds a request may take before the server answers 504.
    request_timeout: float = field(default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "60")))

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3333")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module; tests build their own
# ``Settings`` instances instead.
settings = Settings()
