# storefront/models.py
from pydantic import BaseModel
from typing import Any, Optional

class Mutation(BaseModel):
    """Result of a write: the response payload plus whether it reached disk."""
    data: Optional[Any] = None
    persisted: bool
