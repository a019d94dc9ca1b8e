from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from config.environment import db_URI

if db_URI is None:
    raise ValueError("DATABASE_URL environment variable not set. Please create a .env file.")

engine_options = {"pool_pre_ping": True}
if db_URI.startswith("sqlite"):
    engine_options["connect_args"] = {"check_same_thread": False}
    # In-memory databases live on a single connection
    if db_URI in ("sqlite://", "sqlite:///:memory:"):
        engine_options["poolclass"] = StaticPool

engine = create_engine(db_URI, **engine_options)

if db_URI.startswith("sqlite"):
    # SQLite ignores foreign keys unless asked per connection
    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
