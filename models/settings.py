from sqlalchemy import Column, Integer, String, Text
from models.base import BaseModel

BANNER_SETTING = "banner"


class SettingsModel(BaseModel):
    """Generic key/value store for storefront settings."""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Settings(name='{self.name}')>"
