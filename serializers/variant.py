from pydantic import BaseModel, Field, ConfigDict
from typing import List


class VariantSchema(BaseModel):
    id: str
    name: str
    image_src: str
    type: str
    product_id: str

    model_config = ConfigDict(from_attributes=True)


class VariantBatchEntry(BaseModel):
    """One row of the variant editor: created when `add` is set, updated by id otherwise"""
    id: str = Field("", description="Existing variant id; ignored when add is true")
    name: str = Field(..., min_length=1, max_length=100)
    image_src: str = Field(..., min_length=1, max_length=10000)
    add: bool = False
    product_id: str


class VariantBatch(BaseModel):
    variants: List[VariantBatchEntry]


class VariantBatchFailure(BaseModel):
    index: int
    id: str
    error: str


class VariantBatchResult(BaseModel):
    """Per-entry outcome; entries are committed independently"""
    created: List[VariantSchema] = []
    updated: List[VariantSchema] = []
    failed: List[VariantBatchFailure] = []
