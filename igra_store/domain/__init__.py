"""Domain layer (pure logic).

- Keep business rules and calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions.
"""
