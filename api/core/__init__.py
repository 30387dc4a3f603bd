"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks both resources use (store client,
error translation, logging). Keep resource-specific SQL and business logic
in the corresponding package (e.g. `companies/`).
"""
