"""
Feature modules for the Stacks backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for storage and services
- models.py: Pydantic models for records and request/response bodies
- repository.py: Supabase and in-memory storage
- service.py: Business logic implementation
- routes.py: FastAPI route handlers (auth, profile)
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
