from models.base import Base, BaseModel
from models.product import ProductModel, ImageModel, product_categories
from models.variant import VariantModel
from models.category import CategoryModel
from models.settings import SettingsModel
