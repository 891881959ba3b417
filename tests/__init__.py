"""
Test Suite for the Local Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, store, client, sample data)
- test_genres.py, test_authors.py, test_books.py, test_bookinstances.py:
  HTML pages and form flows per entity
- test_home.py: catalog home, root redirect, health check, error pages
- test_aggregation.py: concurrent query fan-out/join
- test_delete_guard.py: delete guard and genre uniqueness
- test_store.py: CatalogStore CRUD and error wrapping
- test_forms.py: sanitizing and validating submitted forms
- test_display.py: derived display fields

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=catalog --cov-report=html

    # Run specific file
    pytest tests/test_genres.py
"""
