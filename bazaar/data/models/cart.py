#bazaar/data/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey

from bazaar.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    #jeden koszyk na usera, tworzony przy pierwszym dodaniu
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    version = Column(Integer, nullable=False, default=1)
