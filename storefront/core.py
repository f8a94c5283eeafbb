import hmac
import re
from typing import Optional, Dict, Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError, field_validator

# Request schemas and the error types the service layer raises.

class ProductIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    price: Union[StrictInt, StrictFloat]
    description: str = Field(min_length=1)
    images: List[str] = Field(min_length=1)

    @field_validator("price")
    @classmethod
    def _price_truthy(cls, v):
        if not v:
            raise ValueError("price must be non-zero")
        return v

class CartItemIn(BaseModel):
    # anything beyond the snapshot fields is dropped
    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    name: str = Field(min_length=1)
    price: Union[StrictInt, StrictFloat]
    images: List[str]

# ---------------------------
# Errors
# ---------------------------
class StoreError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

class StoreReadError(StoreError):
    status_code = 500

    def __init__(self, store: str):
        self.store = store
        super().__init__(f"Failed to read {store} data")

class ValidationFailed(StoreError):
    status_code = 400
    message = "Invalid request body"

class NotFound(StoreError):
    status_code = 404
    message = "Not found"

class Unauthorized(StoreError):
    status_code = 403
    message = "Forbidden: Admin access required"

# ---------------------------
# Helpers
# ---------------------------
def authorize(credential: Optional[str], secret: str) -> None:
    if not credential or not hmac.compare_digest(credential.encode(), secret.encode()):
        raise Unauthorized()

_INT_RE = re.compile(r"-?[0-9]+")

def parse_int(raw: str) -> Optional[int]:
    if not raw or not _INT_RE.fullmatch(raw):
        return None
    return int(raw)

def next_product_id(products: List[Dict[str, Any]]) -> int:
    ids = [p["id"] for p in products if isinstance(p.get("id"), int)]
    return max(ids, default=0) + 1

def validate_product(payload: Dict[str, Any]) -> ProductIn:
    try:
        return ProductIn.model_validate(payload)
    except ValidationError:
        raise ValidationFailed("Missing required product fields.")

def make_line_item(payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        item = CartItemIn.model_validate(payload)
    except ValidationError:
        raise ValidationFailed("Cart item requires id, name, numeric price and a list of images.")
    return {
        "id": item.id,
        "name": item.name,
        "price": item.price,
        "images": item.images
    }
