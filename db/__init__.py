"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, schema initialization, and the
transaction context every repository call runs in.
Its only upward dependency is the error taxonomy in repositories/errors.py.
"""
