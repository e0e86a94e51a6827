
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, CheckConstraint, text
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

TASK_STATUSES = ("pending", "approved", "rejected")

class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("length(name) >= 3", name="ck_tasks_name_length"),
        CheckConstraint("length(creator) >= 2", name="ck_tasks_creator_length"),
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_tasks_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    creator = Column(Text, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", server_default="pending", index=True)
    approver = Column(Text, nullable=True)
    timer = Column(Text, nullable=True)
    completed = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
