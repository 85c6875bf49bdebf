from sqlalchemy import Column, Integer, String, Numeric, Boolean

from app.core.database import Base


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False)
    price = Column(Numeric(8, 2), nullable=False)
    available = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<MenuItem(id={self.id}, name={self.name}, price={self.price})>"
