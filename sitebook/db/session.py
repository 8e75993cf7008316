from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sitebook.core.config import settings

engine_options = {}
if settings.USE_SQLITE:
    engine_options["connect_args"] = {"check_same_thread": False}
    # An in-memory database only lives as long as its single connection
    if settings.SQLALCHEMY_DATABASE_URI in ("sqlite://", "sqlite:///:memory:"):
        engine_options["poolclass"] = StaticPool
else:
    engine_options["pool_pre_ping"] = True

engine = create_engine(settings.SQLALCHEMY_DATABASE_URI, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
