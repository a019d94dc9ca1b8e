from pydantic import BaseModel, Field, ConfigDict


class SettingUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    value: str


class SettingSchema(BaseModel):
    name: str
    value: str

    model_config = ConfigDict(from_attributes=True)
