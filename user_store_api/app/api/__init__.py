"""
API package containing versioned routes.

Versioned routes live in subpackages such as ``v1``, each exposing a
top‑level ``router``.  Unversioned routes (the diagnostic home page)
live directly in this package.
"""
