from sqlalchemy import Column, Integer, String, DateTime, Boolean
from shortlink_app.database.connection import Base


class Link(Base):
    """
    Short link row.

    ``code`` carries the uniqueness guarantee the service relies on:
    insert-if-absent is a plain INSERT that fails on this constraint.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique=True + index=True gives the point-lookup index on code
    code = Column(String, unique=True, nullable=False, index=True)
    target_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    click_count = Column(Integer, nullable=False, default=0)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    password_protected = Column(Boolean, nullable=False, default=False)
    password_hash = Column(String, nullable=True)
