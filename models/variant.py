from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from models.base import BaseModel, new_id

# Only colour variants exist for now
VARIANT_TYPE_COLOR = "color"


class VariantModel(BaseModel):
    __tablename__ = "variants"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    image_src = Column(String(10000), nullable=False)
    type = Column(String(20), nullable=False, default=VARIANT_TYPE_COLOR)
    product_id = Column(String(36), ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)

    product = relationship('ProductModel', back_populates='variants')

    def __repr__(self):
        return f"<Variant(id={self.id}, name='{self.name}', type={self.type})>"
