from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ProductQueryResponse(CamelModel):
    products: list[dict[str, Any]]
    total_product: int = Field(alias="totalProduct")
    par_page: int = Field(alias="parPage")


class PriceRangeSchema(BaseModel):
    low: int | float
    high: int | float


class PriceRangeResponse(CamelModel):
    price_range: PriceRangeSchema = Field(alias="priceRange")
    latest_product: list[dict[str, Any]]


class PageWindowResponse(CamelModel):
    pages: list[int]
    show_previous: bool = Field(alias="showPrevious")
    show_next: bool = Field(alias="showNext")
    total_page: int = Field(alias="totalPage")
    paginated: bool


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    products: int
