from marketplace.platform.db.base import Base, BaseModel

__all__ = ["Base", "BaseModel"]
