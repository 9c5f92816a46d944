"""
Blog API — Application Package Initializer
============================================

What: Marks the `blogapi` directory as a Python package.
Who:  Imported by uvicorn (`blogapi.main:app`), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes + Auth Guard (HTTP)      │  ← status codes, request shaping
    ├─────────────────────────────────────┤
    │     Services (register / login)     │  ← hashing, token issuance
    ├─────────────────────────────────────┤
    │   Stores (credential / post SQL)    │  ← one statement per operation
    ├─────────────────────────────────────┤
    │   Database handle (engine + pool)   │  ← built by create_app()
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
