"""Cover template catalog (seeded reference data)."""
from sqlalchemy import Column, Integer, String

from src.core.database import Base


class Template(Base):
    """A named visual strategy for the generated cover page.

    The name selects the rendering strategy; image_path only points at the
    thumbnail shown in the UI.
    """

    __tablename__ = "templates"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    image_path = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)

    def __repr__(self):
        return f"<Template(id={self.id}, name='{self.name}', category='{self.category}')>"
