from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from fleetdesk.config import get_settings

settings = get_settings()

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    pool_pre_ping=True
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def getDb():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
