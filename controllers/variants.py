from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from models.variant import VariantModel, VARIANT_TYPE_COLOR
from serializers.variant import VariantBatch, VariantBatchResult, VariantBatchFailure, VariantSchema
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post('/variants/batch', response_model=VariantBatchResult)
def add_variants(batch: VariantBatch, db: Session = Depends(get_db)):
    """
    Create or update a list of variants.

    - entries with **add** set create a new colour variant on **product_id**
    - other entries update the name and image of the variant **id**

    Every entry is committed on its own. A failing entry is rolled back and
    reported under `failed`; entries before and after it are kept.
    """
    result = VariantBatchResult()

    for index, entry in enumerate(batch.variants):
        try:
            if entry.add:
                variant = VariantModel(
                    name=entry.name,
                    image_src=entry.image_src,
                    product_id=entry.product_id,
                    type=VARIANT_TYPE_COLOR
                )
                db.add(variant)
            else:
                variant = db.query(VariantModel).filter(VariantModel.id == entry.id).one()
                variant.name = entry.name
                variant.image_src = entry.image_src
            db.commit()
            db.refresh(variant)
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning("Variant entry %d (id=%r) failed: %s", index, entry.id, e)
            result.failed.append(VariantBatchFailure(index=index, id=entry.id, error=type(e).__name__))
            continue

        if entry.add:
            result.created.append(VariantSchema.model_validate(variant))
        else:
            result.updated.append(VariantSchema.model_validate(variant))

    return result


@router.delete('/variants/{variant_id}')
def remove_variant(variant_id: str, db: Session = Depends(get_db)):
    """
    Delete a variant. Unknown ids are an error, not a no-op.
    """
    variant = db.query(VariantModel).filter(VariantModel.id == variant_id).one()

    db.delete(variant)
    db.commit()

    return {"message": f"Variant {variant_id} deleted"}
