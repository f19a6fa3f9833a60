"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature leans on (DB pool,
settings, logging, origin policy). Entity SQL and business rules belong in
the feature package (`bilty/`).
"""
