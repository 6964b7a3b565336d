"""
Core utilities shared across labelhub.

This package hosts:
- configuration helpers (env vars, data directory, backend selection)
- cross-cutting services such as logging setup
- small formatting helpers (timestamps, zero-padded ids, path stems)

Repositories and services should depend on these primitives instead of
reading os.environ directly.
"""
