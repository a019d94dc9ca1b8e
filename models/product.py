from sqlalchemy import Column, Integer, String, Float, Boolean, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.ext.orderinglist import ordering_list
from models.base import Base, BaseModel, new_id

# Many-to-many link between products and categories
product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", String(36), ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class ProductModel(BaseModel):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    weight = Column(Float, nullable=False)
    description = Column(Text, nullable=False)  # rich text (HTML)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    images = relationship(
        'ImageModel',
        back_populates='product',
        cascade='all, delete-orphan',
        order_by='ImageModel.position',
        collection_class=ordering_list('position')
    )
    variants = relationship(
        'VariantModel',
        back_populates='product',
        cascade='all, delete-orphan',
        order_by='VariantModel.name.desc()'
    )
    categories = relationship(
        'CategoryModel',
        secondary=product_categories,
        back_populates='products'
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class ImageModel(BaseModel):
    __tablename__ = "product_images"

    id = Column(String(36), primary_key=True, default=new_id)
    src = Column(String(1000), nullable=False)
    alt = Column(String(255), nullable=True)
    position = Column(Integer, nullable=False, default=0)  # gallery order
    product_id = Column(String(36), ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)

    product = relationship('ProductModel', back_populates='images')

    def __repr__(self):
        return f"<Image(id={self.id}, product_id={self.product_id})>"
