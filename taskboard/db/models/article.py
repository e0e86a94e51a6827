
from sqlalchemy import Column, Integer, Text, DateTime, CheckConstraint
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

class Article(Base):
    __tablename__ = "articles"
    __table_args__ = (
        CheckConstraint("length(headline) >= 5", name="ck_articles_headline_length"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    headline = Column(Text, nullable=False)
    link = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
