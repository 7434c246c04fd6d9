"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, DateTime, String, Text

from autostore.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)


class App(Base):
    __tablename__ = "apps"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(150), nullable=False)
    version = Column(String(50), nullable=False)
    developer = Column(String(150), nullable=False, default="")
    category = Column(String(30), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    size = Column(String(30), nullable=False, default="")
    upload_date = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="Verified")
    icon_url = Column(String(500), nullable=False, default="")
    asset_ref = Column(String(300), nullable=False)
