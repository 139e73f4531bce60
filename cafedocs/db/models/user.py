from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid

from cafedocs.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="employee")


class Employee(BaseModel):
    __tablename__ = "employees"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    user_id = Column(Uuid, ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="employee")
    is_active = Column(Boolean, default=True, nullable=False)
