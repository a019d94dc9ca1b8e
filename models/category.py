from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from models.base import BaseModel, new_id
from models.product import product_categories


class CategoryModel(BaseModel):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    products = relationship(
        'ProductModel',
        secondary=product_categories,
        back_populates='categories'
    )

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
