# backend/app/errors.py
"""Error kinds raised below the HTTP layer."""


class StorageError(Exception):
    """The underlying database failed to complete an operation."""


class MalformedMonth(ValueError):
    """A month parameter was not of the form YYYY-MM."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid month '{value}', expected YYYY-MM")
