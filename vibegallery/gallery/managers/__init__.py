"""Data access managers for the gallery runtime.

Each module provides async functions (or, for launching, a long-lived
manager object) that encapsulate CRUD operations and business logic.
Managers accept ``AsyncSession`` as a parameter and raise domain exceptions
(``LookupError``, ``ValueError``, ``RuntimeError`` subclasses), never HTTP
exceptions -- that translation is the router's responsibility.
"""
