"""
Top‑level package for the User Store API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
