from pydantic import BaseModel, Field, ConfigDict
from typing import List
from datetime import datetime


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Name of the category")


class CategoryUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategorySchema(BaseModel):
    id: str
    name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class CategoryProductSchema(BaseModel):
    """Trimmed product shape nested under a category"""
    id: str
    name: str
    price: float
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryWithProductsSchema(CategorySchema):
    products: List[CategoryProductSchema] = []
