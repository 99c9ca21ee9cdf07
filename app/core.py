import re
from dataclasses import dataclass
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator
from pydantic import ValidationError as SchemaError

from .errors import ApiError, ValidationError
from .models import Product

Price = Union[
    Annotated[StrictInt, Field(gt=0)],
    Annotated[StrictFloat, Field(gt=0, allow_inf_nan=False)],
]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]

# first failing field -> client-facing message
FIELD_MESSAGES = {
    "name": "Name must be a non-empty string",
    "price": "Price must be a positive number",
    "description": "Description must be a string",
    "category": "Category must be a string",
    "inStock": "inStock must be a boolean",
}


def _price_fits_float(value: Union[int, float]) -> Union[int, float]:
    # ints past float range cannot be read back as numbers by JSON clients
    try:
        float(value)
    except OverflowError:
        raise ValueError("price out of range")
    return value


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: NonEmptyStr
    price: Price
    description: StrictStr = ""
    category: StrictStr = "uncategorized"
    in_stock: StrictBool = Field(True, alias="inStock")

    @field_validator("price")
    @classmethod
    def _finite_price(cls, v):
        return _price_fits_float(v)

    @field_validator("category")
    @classmethod
    def _default_category(cls, v):
        return v or "uncategorized"


class ProductUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: Optional[NonEmptyStr] = None
    price: Optional[Price] = None
    description: Optional[StrictStr] = None
    category: Optional[StrictStr] = None
    in_stock: Optional[StrictBool] = Field(None, alias="inStock")

    @field_validator("price")
    @classmethod
    def _finite_price(cls, v):
        return v if v is None else _price_fits_float(v)


# ---------------------------
# Result types
# ---------------------------
@dataclass
class Ok:
    value: Any = None
    status_code: int = 200


@dataclass
class Err:
    error: ApiError


Result = Union[Ok, Err]


# ---------------------------
# Validation
# ---------------------------
def _to_validation_error(exc: SchemaError) -> ValidationError:
    field = str(exc.errors()[0]["loc"][0])
    return ValidationError(FIELD_MESSAGES.get(field, "Invalid product data"))


def validate_create(body: Dict[str, Any]) -> ProductIn:
    if not body.get("name") or not body.get("price"):
        raise ValidationError("Name and price are required")
    try:
        return ProductIn.model_validate(body)
    except SchemaError as exc:
        raise _to_validation_error(exc)


def validate_update(body: Dict[str, Any]) -> Dict[str, Any]:
    """Return the product attributes to overwrite, keyed by attribute name.

    Every known field present in the body counts, falsy values included.
    """
    try:
        update = ProductUpdate.model_validate(body)
    except SchemaError as exc:
        raise _to_validation_error(exc)
    changes = update.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("At least one of name, description, price, category or inStock is required")
    for attr, value in changes.items():
        if value is None:
            field = ProductUpdate.model_fields[attr].alias or attr
            raise ValidationError(FIELD_MESSAGES[field])
    return changes


# ---------------------------
# Helpers
# ---------------------------
def _make_product(product_id: str, p: ProductIn) -> Product:
    return Product(
        id=product_id,
        name=p.name,
        description=p.description,
        price=p.price,
        category=p.category,
        in_stock=p.in_stock,
    )


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Parse the leading integer of a query-string value ("2abc" -> 2).

    Missing, non-numeric or non-positive values give ``default``.
    """
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return default
    value = int(match.group(1))
    return value if value > 0 else default
