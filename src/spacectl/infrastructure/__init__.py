"""Infrastructure layer — platform client protocol and the local SQLite store.

This layer depends on stdlib, SQLAlchemy, and the domain entity models.
It must never import from services, commands, or output.
"""
