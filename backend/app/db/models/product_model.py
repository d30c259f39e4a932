# backend/app/db/models/product_model.py
from sqlalchemy import Column, Integer, String, ForeignKey, Text, Numeric, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base, utcnow

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)  # Precisión decimal para precios
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    category = relationship("Category", back_populates="products")
    owner = relationship("User", back_populates="products")

    __table_args__ = (
        CheckConstraint('price >= 0', name='ck_product_price_non_negative'),
        CheckConstraint('stock >= 0', name='ck_product_stock_non_negative'),
    )
