from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
import logging

from models.settings import SettingsModel, BANNER_SETTING
from serializers.settings import SettingUpdate, SettingSchema
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put('/settings', response_model=SettingSchema)
def set_banner_text(setting: SettingUpdate, db: Session = Depends(get_db)):
    """
    Create or update a setting.

    - **name**: setting key, `banner` for the storefront banner
    - **value**: text to store
    """
    db_setting = db.query(SettingsModel).filter(SettingsModel.name == setting.name).first()

    if db_setting:
        db_setting.value = setting.value
    else:
        db_setting = SettingsModel(name=setting.name, value=setting.value)
        db.add(db_setting)

    db.commit()
    db.refresh(db_setting)
    return db_setting


@router.get('/settings/banner', response_model=Optional[SettingSchema])
def get_banner_text(db: Session = Depends(get_db)):
    """
    Get the banner text, or null when it is not set or cannot be read.
    """
    try:
        return db.query(SettingsModel).filter(SettingsModel.name == BANNER_SETTING).first()
    except SQLAlchemyError:
        logger.exception("Could not read the banner setting")
        return None
