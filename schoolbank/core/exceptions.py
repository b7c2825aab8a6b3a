"""
Error signals raised by the ledger core.
"""


class NotFound(Exception):
    """A referenced account, student or bank branch does not resolve."""

    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")
