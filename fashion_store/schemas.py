# fashion_store/schemas.py
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

Number = Union[StrictInt, StrictFloat]


class ColorIn(BaseModel):
    # hex и прочие поля витрины сохраняем как есть
    model_config = ConfigDict(extra="allow")

    name: str


class LineItemIn(BaseModel):
    # витрина присылает товар целиком (id, images, category, cartId...)
    model_config = ConfigDict(extra="allow")

    name: str
    price: Number
    selectedSize: str = ""
    selectedColor: Optional[ColorIn] = None


class CustomerIn(BaseModel):
    # как на витрине: пустая строка не заполнена, пробелы допустимы
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    comment: Optional[str] = ""


class OrderIn(BaseModel):
    customer: CustomerIn
    items: List[LineItemIn] = Field(min_length=1)
    total: Number

    @field_validator("total")
    @classmethod
    def total_positive(cls, v):
        if v <= 0:
            raise ValueError("total must be positive")
        return v

    def items_dump(self) -> List[dict]:
        return [item.model_dump() for item in self.items]
