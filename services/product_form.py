"""
Product creation form workflow.

Holds the state of one "add product" dialog: field values, the uploaded image
URLs, variant rows and the list of upload tasks. Files are uploaded strictly
one after another; each returned URL is already rewritten to the CDN.
"""
import enum
import logging
import uuid
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Iterable, List, Optional

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from sqlalchemy.orm import Session

from models.product import ProductModel
from serializers.product import ProductCreate, parse_number
from services.catalog import create_product, list_products
from services.storage import StorageUploader

logger = logging.getLogger(__name__)

# What the rich text editor submits when left blank
EMPTY_RICH_TEXT = ("<p><br></p>", "<p></p>")


def _check(value: str, message: str, max_length: int) -> str:
    if not value:
        raise PydanticCustomError("required", message)
    if len(value) > max_length:
        raise PydanticCustomError("too_long", f"Must be at most {max_length} characters")
    return value


def _check_number(value: str, label: str) -> str:
    _check(value, f"{label} is required", 100)
    try:
        parse_number(value)
    except ValueError:
        raise PydanticCustomError("not_a_number", f"{label} must be a number")
    return value


class FormImage(BaseModel):
    src: str = ""

    @field_validator("src")
    @classmethod
    def src_required(cls, value):
        return _check(value, "src name is required", 1000)


class FormVariant(BaseModel):
    name: str = ""
    image_src: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, value):
        return _check(value, "Variant name is required", 100)

    @field_validator("image_src")
    @classmethod
    def image_required(cls, value):
        return _check(value, "Variant image is required", 10000)


class ProductFormSchema(BaseModel):
    """Client-side rules of the add product dialog."""
    name: str = ""
    price: str = ""
    weight: str = ""
    description: str = ""
    images: List[FormImage] = []
    variants: List[FormVariant] = []

    @field_validator("name")
    @classmethod
    def name_required(cls, value):
        return _check(value, "Name is required", 100)

    @field_validator("price")
    @classmethod
    def price_required(cls, value):
        return _check_number(value, "Price")

    @field_validator("weight")
    @classmethod
    def weight_required(cls, value):
        return _check_number(value, "Weight")

    @field_validator("description")
    @classmethod
    def description_required(cls, value):
        if not value.strip() or value.strip() in EMPTY_RICH_TEXT:
            raise PydanticCustomError("required", "Description is required")
        return value

    @field_validator("images")
    @classmethod
    def images_required(cls, value):
        if not value:
            raise PydanticCustomError("required", "At least one product image is required")
        return value


class UploadStatus(str, enum.Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"


@dataclass
class FormFile:
    """A selected file. FastAPI's UploadFile has the same attributes."""
    filename: str
    file: BinaryIO
    content_type: str = "image/*"


@dataclass
class ImagePreview:
    id: str
    filename: str


@dataclass
class UploadTask:
    index: int
    filename: str
    target: str  # form field the URL is written to
    status: UploadStatus = UploadStatus.PENDING
    url: Optional[str] = None
    error: Optional[str] = None


@dataclass
class VariantRow:
    name: str = ""
    image_src: str = ""

    @property
    def needs_upload(self) -> bool:
        return not self.image_src


@dataclass
class Notification:
    title: str
    message: str
    success: bool = True
    show: bool = True


@dataclass
class SubmitResult:
    errors: Dict[str, str] = field(default_factory=dict)
    product: Optional[ProductModel] = None
    notification: Optional[Notification] = None
    products: List[ProductModel] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class ProductForm:
    """State and actions of one add product dialog."""

    def __init__(self, uploader: StorageUploader):
        self.uploader = uploader
        self.open = True
        self.name = ""
        self.price = ""
        self.weight = ""
        self.description = ""
        self.images: List[str] = []
        self.previews: Optional[List[ImagePreview]] = None
        self.variants: List[VariantRow] = [VariantRow()]
        self.uploads: Dict[int, UploadTask] = {}

    # uploads

    def _queue(self, files: Iterable[FormFile], target: str) -> List[tuple]:
        queued = []
        for file in files:
            index = len(self.uploads)
            task = UploadTask(index=index, filename=file.filename, target=target)
            self.uploads[index] = task
            queued.append((task, file))
        return queued

    def _run(self, task: UploadTask, file: FormFile) -> str:
        task.status = UploadStatus.UPLOADING
        try:
            url = self.uploader.upload(file.file, file.filename)
        except Exception as e:
            task.status = UploadStatus.FAILED
            task.error = str(e)
            logger.error("Upload %d (%s) failed: %s", task.index, task.filename, e)
            raise
        task.status = UploadStatus.DONE
        task.url = url
        return url

    def pending_uploads(self) -> List[UploadTask]:
        return [task for task in self.uploads.values() if task.status != UploadStatus.DONE]

    def add_images(self, files: Iterable[FormFile]) -> List[str]:
        """Upload the first batch of product photos; replaces the image list."""
        previews = []
        urls = []
        for task, file in self._queue(files, "images"):
            previews.append(ImagePreview(id=uuid.uuid4().hex, filename=file.filename))
            urls.append(self._run(task, file))

        self.previews = previews
        self.images = urls
        return urls

    def add_more_images(self, files: Iterable[FormFile]) -> List[str]:
        """Upload further photos, appending each to the image list."""
        for task, file in self._queue(files, "images"):
            url = self._run(task, file)
            self.images = self.images + [url]
            self.previews = (self.previews or []) + [ImagePreview(id=uuid.uuid4().hex, filename=file.filename)]
        return self.images

    def set_variant_image(self, index: int, file: FormFile) -> str:
        row = self.variants[index]
        (task, queued_file), = self._queue([file], f"variants.{index}.image_src")
        row.image_src = self._run(task, queued_file)
        return row.image_src

    # variant rows

    def append_variant(self) -> VariantRow:
        row = VariantRow()
        self.variants.append(row)
        return row

    def remove_variant(self, index: int) -> VariantRow:
        return self.variants.pop(index)

    def set_variant_name(self, index: int, name: str):
        self.variants[index].name = name

    # submission

    def payload(self) -> dict:
        return {
            "name": self.name,
            "price": self.price,
            "weight": self.weight,
            "description": self.description,
            "images": [{"src": url} for url in self.images],
            "variants": [{"name": row.name, "image_src": row.image_src} for row in self.variants],
        }

    def validate(self) -> Dict[str, str]:
        """Field path -> message for every failing field, first message wins."""
        try:
            ProductFormSchema.model_validate(self.payload())
        except ValidationError as e:
            errors: Dict[str, str] = {}
            for error in e.errors():
                path = ".".join(str(part) for part in error["loc"])
                errors.setdefault(path, error["msg"])
            return errors
        return {}

    def submit(self, db: Session) -> SubmitResult:
        errors = self.validate()
        if errors:
            return SubmitResult(errors=errors)

        product = create_product(db, ProductCreate(**self.payload()))
        self.open = False

        notification = Notification(
            title="Success!",
            message=f"{product.name} product added successfully",
        )
        return SubmitResult(
            product=product,
            notification=notification,
            products=list_products(db),
        )
