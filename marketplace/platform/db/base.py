import sqlalchemy
from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    created_at = Column(
        sqlalchemy.DateTime, server_default=sqlalchemy.func.now(), nullable=False
    )

# Note: Models will import this Base. Do not import models here to avoid circular imports.
# Import models in marketplace/platform/db/session.py:init_models instead.
