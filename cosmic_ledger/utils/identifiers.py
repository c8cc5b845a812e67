"""Document id generation."""

from uuid import uuid4


def new_document_id(prefix: str) -> str:
    """Return a fresh id such as ``tx-3f2a9c0d41b7``."""
    return f"{prefix}-{uuid4().hex[:12]}"


__all__ = ["new_document_id"]
