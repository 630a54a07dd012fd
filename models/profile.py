from sqlalchemy import Column, Integer, String, ForeignKey

from core.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("app_users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
