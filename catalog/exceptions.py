"""
Catalog Exceptions

Error taxonomy shared by the store, the services and the routers:

- EntityNotFound: the primary record of a page is missing (404 page)
- StoreError: any persistence failure or an expired query deadline
  (generic 500 page)

Form validation errors are not exceptions at this level; see
catalog.forms.FieldError. A blocked delete is a normal result, see
catalog.services.integrity.DeleteResult.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""


class EntityNotFound(CatalogError):
    """A record looked up by id does not exist."""

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class StoreError(CatalogError):
    """The store failed to run a query or mutation."""
