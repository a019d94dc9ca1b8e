from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload, with_loader_criteria
from typing import List

from models.category import CategoryModel
from models.product import ProductModel
from serializers.category import CategoryCreate, CategoryUpdate, CategorySchema, CategoryWithProductsSchema
from database import get_db

router = APIRouter()


@router.get('/categories', response_model=List[CategorySchema])
def get_categories(db: Session = Depends(get_db)):
    """Get all categories ordered by name."""
    return db.query(CategoryModel).order_by(CategoryModel.name.asc()).all()


@router.get('/categories/active', response_model=List[CategoryWithProductsSchema])
def get_active_categories(db: Session = Depends(get_db)):
    """
    Get ACTIVE categories ordered by name, each with its ACTIVE products.
    """
    return db.query(CategoryModel).options(
        selectinload(CategoryModel.products),
        with_loader_criteria(ProductModel, ProductModel.is_active == True)
    ).filter(
        CategoryModel.is_active == True
    ).order_by(CategoryModel.name.asc()).all()


@router.post('/categories', response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
def store_category(category: CategoryCreate, db: Session = Depends(get_db)):
    """Create a category. New categories are active."""
    new_category = CategoryModel(name=category.name)

    db.add(new_category)
    db.commit()
    db.refresh(new_category)

    return new_category


@router.put('/categories/{category_id}', response_model=CategorySchema)
def update_category(category_id: str, category: CategoryUpdate, db: Session = Depends(get_db)):
    """Rename a category."""
    db_category = db.query(CategoryModel).filter(CategoryModel.id == category_id).one()

    db_category.name = category.name
    db.commit()
    db.refresh(db_category)

    return db_category


@router.patch('/categories/{category_id}/toggle-status', response_model=CategorySchema)
def toggle_category_status(category_id: str, db: Session = Depends(get_db)):
    """Flip a category between active and inactive."""
    db_category = db.query(CategoryModel).filter(CategoryModel.id == category_id).one()

    db_category.is_active = not db_category.is_active
    db.commit()
    db.refresh(db_category)

    return db_category


@router.delete('/categories/{category_id}')
def delete_category(category_id: str, db: Session = Depends(get_db)):
    """Delete a category. Its products stay, only the links are removed."""
    db_category = db.query(CategoryModel).filter(CategoryModel.id == category_id).one()

    db.delete(db_category)
    db.commit()

    return {"message": f"Category with id {category_id} has been deleted"}
