# feedback_api/models/user.py
from sqlalchemy import Column, DateTime, Integer, String, func

from feedback_api.db.base_class import Base


# users (id serial PK, email unique, stored lowercase)
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(20), nullable=False, default="user", server_default="user")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
