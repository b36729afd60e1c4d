"""
Exceptions raised when a collaborator fails or a workflow rule is broken.

Duplicate findings are never exceptions; they are returned as
``ValidationResult`` values.
"""


class EndurankError(Exception):
    """Base class for all Endurank errors."""


class StoreError(EndurankError):
    """The catalog store could not complete a read or write."""


class DuplicateCheckError(EndurankError):
    """
    An exact duplicate check could not run to completion.

    This means "unable to validate", which callers must not confuse
    with "no duplicate found".
    """


class InvalidStatusTransition(EndurankError):
    """A moderation status change that the workflow does not allow."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move item from '{current}' to '{requested}'")
