from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
import logging

from config.environment import frontend_url, log_level
from controllers.products import router as ProductsRouter
from controllers.variants import router as VariantsRouter
from controllers.categories import router as CategoriesRouter
from controllers.settings import router as SettingsRouter
from database import engine
from models import Base
from services.storage import configure_storage

logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Shop Admin API",
    description="Product, variant, category and banner management for the shop admin",
    version="1.0.0"
)

# CORS Configuration
origins = [
    "http://127.0.0.1:3000",
    "http://localhost:3000"
]

# Add production frontend URL if exists
if frontend_url:
    origins.append(frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event():
    # Fails fast on a missing or invalid STORAGE_BASE_URL / CDN_BASE_URL
    configure_storage()
    logger.info("Object storage configured.")


@app.exception_handler(NoResultFound)
async def not_found_handler(request: Request, exc: NoResultFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": f"No record found for {request.method} {request.url.path}"}
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "The change conflicts with existing data"}
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"}
    )


app.include_router(ProductsRouter, prefix="/api", tags=["Products"])
app.include_router(VariantsRouter, prefix="/api", tags=["Variants"])
app.include_router(CategoriesRouter, prefix="/api", tags=["Categories"])
app.include_router(SettingsRouter, prefix="/api", tags=["Settings"])


@app.get('/')
def home():
    return {'message': 'Welcome to the Shop Admin API! Visit /docs for API documentation.'}
