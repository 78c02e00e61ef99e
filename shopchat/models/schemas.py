from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Session schemas ---

class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    text: str


class Session(BaseModel):
    messages: list[Message] = Field(default_factory=list)


class SessionDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    messages: list[Message]


# --- Catalog schemas ---

class ProductSummary(BaseModel):
    """Flat view of a Shopify product, rebuilt on every request."""
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    title: str = ""
    description: str = ""
    tags: str = ""
    price: float = 0
    compare_at_price: float | None = Field(default=None, alias="compareAtPrice")
    currency: str
    image: str = ""
    url: str
    handle: str = ""


class Filters(BaseModel):
    max_price: float | None = None
    category: str | None = None


# --- Chat schemas ---

class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = ""
    session_id: str | None = Field(default=None, alias="sessionId")

    @field_validator("message", "session_id", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        # Shape is not validated; anything that is not a string is stringified.
        if value is None or isinstance(value, str):
            return value
        return str(value)


class AIRecommendation(BaseModel):
    """The two-field JSON object the model is asked to return."""
    model_config = ConfigDict(populate_by_name=True)

    product_ids: list[int] = Field(default_factory=list, alias="productIds")
    message: str


class ChatResponse(BaseModel):
    message: str
    products: list[ProductSummary] = Field(default_factory=list, max_length=3)
    type: Literal["product_recommendation", "text"]


class ErrorResponse(BaseModel):
    error: str
