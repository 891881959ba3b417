"""
Local Library Catalog Package

Server-rendered catalog of authors, genres, books and book copies.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- store.py: CatalogStore, the explicitly passed persistence capability
- exceptions.py: Error taxonomy (not found, store failures)
- forms.py: Sanitize and validate submitted HTML forms
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic form schemas
- routers/: HTML route handlers
- services/: Aggregation and referential integrity
- utils/: Display helpers for derived fields
- templates/: Jinja2 templates
"""

__version__ = "0.1.0"
