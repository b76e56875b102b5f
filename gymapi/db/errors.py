"""Persistence error types.

- EntityNotFoundError: no live (non-deleted) row with the given id
- DuplicateEntityError: a unique business key (email, serial number) is taken
"""


class EntityNotFoundError(LookupError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id '{entity_id}' was not found.")


class DuplicateEntityError(ValueError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
