"""
Feature modules live under this package.

Each module owns its models and routes, while reusing platform primitives
(auth, rbac, validation, the data-access store, media host, DB session).
"""
