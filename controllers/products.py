from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
import logging

from models.product import ProductModel, ImageModel
from models.category import CategoryModel
from serializers.product import (
    ProductCreate, ProductUpdate, ProductSchema, ProductWithCategoriesSchema, ProductDetailSchema,
    ProductImagesSchema, ProductImagesStampSchema, ProductImageCreate, CategoryAttach, parse_number
)
from database import get_db
from services.catalog import create_product, list_products
from services.product_form import ProductForm
from services.storage import StorageUploader, get_uploader

logger = logging.getLogger(__name__)

router = APIRouter()


def active_products_query(db: Session):
    return db.query(ProductModel).options(
        selectinload(ProductModel.images),
        selectinload(ProductModel.categories)
    ).filter(ProductModel.is_active == True)


# GET all products (admin list, active and inactive)
@router.get('/products', response_model=List[ProductSchema])
def get_products(db: Session = Depends(get_db)):
    """
    Get every product with its images, newest first.
    """
    return list_products(db)


# GET active products (storefront)
@router.get('/products/active', response_model=List[ProductWithCategoriesSchema])
def get_active_products(db: Session = Depends(get_db)):
    """
    Get all ACTIVE products with images and categories, newest first.
    """
    return active_products_query(db).order_by(ProductModel.created_at.desc()).all()


# GET active products in a category, "all" for no filter
@router.get('/products/active/category/{category_id}', response_model=List[ProductWithCategoriesSchema])
def get_active_products_by_category(category_id: str, db: Session = Depends(get_db)):
    """
    Get ACTIVE products belonging to a category.

    - **category_id**: category id, or `all` to skip the category filter
    """
    query = active_products_query(db)

    if category_id != 'all':
        query = query.filter(ProductModel.categories.any(CategoryModel.id == category_id))

    return query.order_by(ProductModel.created_at.desc()).all()


# Image upload endpoint
@router.post('/products/upload-image', response_model=dict)
def upload_product_image(
    file: UploadFile = File(...),
    uploader: StorageUploader = Depends(get_uploader)
):
    """
    Upload a product image to object storage.
    Returns the CDN URL of the image.
    """
    # Validate file type
    if not file.content_type or not file.content_type.startswith('image/'):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image files are allowed"
        )

    try:
        # Upload to object storage, URL comes back on the CDN host
        url = uploader.upload(file.file, file.filename)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload image: {str(e)}"
        )

    return {"url": url}


# POST the whole add product dialog (multipart)
@router.post('/products/form', status_code=status.HTTP_201_CREATED)
def submit_product_form(
    name: str = Form(""),
    price: str = Form(""),
    weight: str = Form(""),
    description: str = Form(""),
    images: Optional[List[UploadFile]] = File(None),
    variant_names: Optional[List[str]] = Form(None),
    variant_images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    uploader: StorageUploader = Depends(get_uploader)
):
    """
    Submit the add product dialog in one request.

    Product photos are uploaded first, one at a time, then each variant's
    image. Variant names and images pair up by position.
    Returns 422 with per-field messages when the form is incomplete.
    """
    for upload in (images or []) + (variant_images or []):
        if not upload.content_type or not upload.content_type.startswith('image/'):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Only image files are allowed ({upload.filename})"
            )

    form = ProductForm(uploader)
    form.name = name
    form.price = price
    form.weight = weight
    form.description = description

    names = variant_names or []
    variant_files = variant_images or []
    form.variants = []

    try:
        if images:
            form.add_images(images)

        for index in range(max(len(names), len(variant_files))):
            form.append_variant()
            if index < len(names):
                form.set_variant_name(index, names[index])
            if index < len(variant_files):
                form.set_variant_image(index, variant_files[index])
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload image: {str(e)}"
        )

    result = form.submit(db)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": result.errors}
        )

    return {
        "notification": {
            "title": result.notification.title,
            "message": result.notification.message,
            "success": result.notification.success,
        },
        "product": ProductDetailSchema.model_validate(result.product).model_dump(mode='json'),
        "products": [ProductSchema.model_validate(p).model_dump(mode='json') for p in result.products],
    }


# GET single product
@router.get('/products/{product_id}', response_model=ProductDetailSchema)
def get_product(product_id: str, db: Session = Depends(get_db)):
    """
    Get a single product with images, categories and variants
    (variants sorted by name, descending).
    """
    product = db.query(ProductModel).options(
        selectinload(ProductModel.images),
        selectinload(ProductModel.categories),
        selectinload(ProductModel.variants)
    ).filter(ProductModel.id == product_id).first()

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id {product_id} not found"
        )

    return product


# GET image urls of a product and its variants
@router.get('/products/{product_id}/images', response_model=List[ProductImagesSchema])
def get_product_images(product_id: str, db: Session = Depends(get_db)):
    """
    Get the images and variant images of a product.
    Returns an empty list when the product does not exist.
    """
    return db.query(ProductModel).options(
        selectinload(ProductModel.images),
        selectinload(ProductModel.variants)
    ).filter(ProductModel.id == product_id).all()


# Toggle active status
@router.patch('/products/{product_id}/toggle-status', response_model=ProductSchema)
def toggle_product_status(product_id: str, db: Session = Depends(get_db)):
    """
    Flip a product between active and inactive.
    """
    # NoResultFound is turned into a 404 by the app
    product = db.query(ProductModel).filter(ProductModel.id == product_id).one()

    product.is_active = not product.is_active
    db.commit()
    db.refresh(product)

    logger.info("Product %s is now %s", product.id, "active" if product.is_active else "inactive")
    return product


# POST create product with images and variants
@router.post('/products', response_model=ProductDetailSchema, status_code=status.HTTP_201_CREATED)
def add_product(product: ProductCreate, db: Session = Depends(get_db)):
    """
    Create a new product.

    - **name**: Product name (1-100 characters)
    - **price**: Price as a numeric string
    - **weight**: Weight (KG) as a numeric string
    - **description**: Rich text description
    - **images**: Image URLs, alt text is set to the product name
    - **variants**: Colour variants, each with a name and image URL

    New products are created as ACTIVE.
    """
    return create_product(db, product)


# PUT update product scalars
@router.put('/products/{product_id}', response_model=ProductSchema)
def update_product(product_id: str, product_update: ProductUpdate, db: Session = Depends(get_db)):
    """
    Update name, price, weight and description of a product.
    Images and variants are left untouched.
    """
    db_product = db.query(ProductModel).filter(ProductModel.id == product_id).first()

    if not db_product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id {product_id} not found"
        )

    db_product.name = product_update.name
    db_product.price = parse_number(product_update.price)
    db_product.weight = parse_number(product_update.weight)
    db_product.description = product_update.description

    db.commit()
    db.refresh(db_product)
    return db_product


# POST add one image to a product
@router.post('/products/{product_id}/images', response_model=ProductImagesStampSchema, status_code=status.HTTP_201_CREATED)
def add_product_image(product_id: str, image: ProductImageCreate, db: Session = Depends(get_db)):
    """
    Append an image to a product.
    Returns the product's images (id and creation time).
    """
    db_product = db.query(ProductModel).filter(ProductModel.id == product_id).one()

    db_product.images.append(ImageModel(src=image.image_src, alt=image.image_alt))
    db.commit()
    db.refresh(db_product)

    return db_product


# DELETE one image of a product
@router.delete('/products/{product_id}/images/{image_id}')
def delete_product_image(product_id: str, image_id: str, db: Session = Depends(get_db)):
    """
    Remove an image from a product. The image must belong to that product.
    """
    image = db.query(ImageModel).filter(
        ImageModel.id == image_id,
        ImageModel.product_id == product_id
    ).one()

    db.delete(image)
    db.commit()

    return {"message": f"Image {image_id} removed from product {product_id}"}


# PUT the (single) category of a product
@router.put('/products/{product_id}/category', response_model=ProductWithCategoriesSchema)
def attach_product_to_category(product_id: str, attach: CategoryAttach, db: Session = Depends(get_db)):
    """
    Put a product in exactly one category.

    Existing category links are cleared and the new one attached in the same
    transaction.
    """
    db_product = db.query(ProductModel).filter(ProductModel.id == product_id).one()
    category = db.query(CategoryModel).filter(CategoryModel.id == attach.category_id).one()

    db_product.categories = [category]
    db.commit()
    db.refresh(db_product)

    logger.info("Product %s moved to category %s", product_id, category.id)
    return db_product


# DELETE all category links of a product
@router.delete('/products/{product_id}/categories')
def remove_all_categories(product_id: str, db: Session = Depends(get_db)):
    """
    Detach a product from every category.
    """
    db_product = db.query(ProductModel).filter(ProductModel.id == product_id).one()

    db_product.categories = []
    db.commit()

    return {"message": f"Product {product_id} removed from all categories"}


# DELETE product - HARD DELETE, images and variants go with it
@router.delete('/products/{product_id}')
def delete_product(product_id: str, db: Session = Depends(get_db)):
    """
    DELETE a product permanently (hard delete), with its images and variants.
    """
    db_product = db.query(ProductModel).filter(ProductModel.id == product_id).first()

    if not db_product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id {product_id} not found"
        )

    db.delete(db_product)
    db.commit()

    logger.info("Deleted product %s", product_id)
    return {"message": f"Product with id {product_id} has been permanently deleted"}
