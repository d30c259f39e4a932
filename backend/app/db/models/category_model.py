# backend/app/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría para la aplicación.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base, utcnow

class Category(Base):
    """
    Categorías jerárquicas de un usuario.
    El nombre es único dentro de las categorías de un mismo dueño, no globalmente.
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Una categoría con hijas no se puede borrar, por eso RESTRICT
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="categories")
    children = relationship("Category", back_populates="parent")
    parent = relationship("Category", remote_side=[id], back_populates="children")
    # Al borrar la categoría, los productos quedan sin categoría (se gestiona en el servicio)
    products = relationship("Product", back_populates="category", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint('user_id', 'name', name='uq_category_user_name'),
    )
