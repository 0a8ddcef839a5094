"""Opaque identifiers for new entities."""

from uuid import uuid4


class IdGenerator:
    """Produces unique string ids for training types, products and logs."""

    def __init__(self, length: int = 20):
        self.length = length

    def new_id(self) -> str:
        return uuid4().hex[: self.length]

    __call__ = new_id
