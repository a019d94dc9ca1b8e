import logging
from typing import List
from sqlalchemy.orm import Session, selectinload

from models.product import ProductModel, ImageModel
from models.variant import VariantModel, VARIANT_TYPE_COLOR
from serializers.product import ProductCreate, parse_number

logger = logging.getLogger(__name__)


def list_products(db: Session) -> List[ProductModel]:
    """All products, newest first, with their images."""
    return db.query(ProductModel)\
             .options(selectinload(ProductModel.images))\
             .order_by(ProductModel.created_at.desc())\
             .all()


def create_product(db: Session, product: ProductCreate) -> ProductModel:
    """
    Create a product together with its images and variants.

    Images take the product name as alt text and every variant is a colour
    variant. Everything is written in a single commit.
    """
    new_product = ProductModel(
        name=product.name,
        price=parse_number(product.price),
        weight=parse_number(product.weight),
        description=product.description,
        images=[
            ImageModel(src=image.src, alt=product.name, position=index)
            for index, image in enumerate(product.images)
        ],
        variants=[
            VariantModel(name=variant.name, image_src=variant.image_src, type=VARIANT_TYPE_COLOR)
            for variant in product.variants
        ]
    )

    db.add(new_product)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(new_product)

    logger.info(
        "Created product %s (%s) with %d images and %d variants",
        new_product.id, new_product.name, len(new_product.images), len(new_product.variants)
    )
    return new_product
