import math
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from .category import CategorySchema
from .variant import VariantSchema


def parse_number(value: str) -> float:
    """Parse an operator-entered numeric string ("12.50") into a float."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{value}' is not a number")
    if not math.isfinite(number):  # NaN, inf, overflow
        raise ValueError(f"'{value}' is not a number")
    return number


class ProductImageInput(BaseModel):
    src: str = Field(..., min_length=1, max_length=1000)


class ProductVariantInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    image_src: str = Field(..., min_length=1, max_length=10000)


class ProductCreate(BaseModel):
    """Schema for creating a product with its images and variants"""
    name: str = Field(..., min_length=1, max_length=100, description="Name of the product")
    price: str = Field(..., min_length=1, max_length=100, description="Price as entered, e.g. '49.90'")
    weight: str = Field(..., min_length=1, max_length=100, description="Weight in KG as entered, e.g. '0.5'")
    description: str = Field(..., min_length=1, description="Rich text (HTML) description")
    images: List[ProductImageInput] = Field(default_factory=list)
    variants: List[ProductVariantInput] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Linen Tote",
                "price": "49.90",
                "weight": "0.4",
                "description": "<p>Hand-stitched linen tote.</p>",
                "images": [{"src": "https://cdn.example.com/products/tote.jpg"}],
                "variants": [{"name": "Sand", "image_src": "https://cdn.example.com/products/tote-sand.jpg"}]
            }
        }
    )

    @field_validator("price", "weight")
    @classmethod
    def must_be_numeric(cls, value):
        parse_number(value)
        return value


class ProductUpdate(BaseModel):
    """Schema for updating the scalar fields of a product"""
    name: str = Field(..., min_length=1, max_length=100)
    price: str = Field(..., min_length=1, max_length=100)
    weight: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)

    @field_validator("price", "weight")
    @classmethod
    def must_be_numeric(cls, value):
        parse_number(value)
        return value


class ProductImageCreate(BaseModel):
    image_src: str = Field(..., min_length=1, max_length=1000)
    image_alt: str = Field(..., max_length=255)


class CategoryAttach(BaseModel):
    category_id: str


class ImageSchema(BaseModel):
    id: str
    src: str
    alt: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ImageRefSchema(BaseModel):
    """Image fields projected by the images endpoint"""
    id: str
    src: str
    alt: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ImageStampSchema(BaseModel):
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VariantImageRefSchema(BaseModel):
    id: str
    image_src: str

    model_config = ConfigDict(from_attributes=True)


class ProductSchema(BaseModel):
    """Schema for returning product data"""
    id: str
    name: str
    price: float
    weight: float
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    images: List[ImageSchema] = []

    model_config = ConfigDict(from_attributes=True)


class ProductWithCategoriesSchema(ProductSchema):
    categories: List[CategorySchema] = []


class ProductDetailSchema(ProductWithCategoriesSchema):
    variants: List[VariantSchema] = []


class ProductImagesSchema(BaseModel):
    id: str
    images: List[ImageRefSchema] = []
    variants: List[VariantImageRefSchema] = []

    model_config = ConfigDict(from_attributes=True)


class ProductImagesStampSchema(BaseModel):
    id: str
    images: List[ImageStampSchema] = []

    model_config = ConfigDict(from_attributes=True)
