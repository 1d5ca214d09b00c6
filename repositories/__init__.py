"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw rows from the database and return domain model objects.
Every operation takes an ExecutionContext first and raises only errors from
`repositories.errors`.
"""
