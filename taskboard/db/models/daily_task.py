
from sqlalchemy import Column, Integer, String, Text, Float, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

DAILY_TASK_STATUSES = ("pending", "in-progress", "completed", "blocked")

class DailyTask(Base):
    __tablename__ = "daily_tasks"
    __table_args__ = (
        CheckConstraint("length(title) >= 3", name="ck_daily_tasks_title_length"),
        CheckConstraint("length(assigned_to) >= 2", name="ck_daily_tasks_assigned_to_length"),
        CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_daily_tasks_priority"),
        CheckConstraint(
            "status IN ('pending', 'in-progress', 'completed', 'blocked')",
            name="ck_daily_tasks_status",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    assigned_to = Column(Text, nullable=False, index=True)
    priority = Column(String(10), nullable=False, default="medium", server_default="medium")
    status = Column(String(20), nullable=False, default="pending", server_default="pending", index=True)
    due_date = Column(Date, nullable=False, index=True)
    estimated_hours = Column(Float, nullable=False, default=0, server_default="0")
    # Sum of hours_spent over the task's progress rows.
    actual_hours = Column(Float, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

class DailyTaskProgress(Base):
    __tablename__ = "daily_task_progress"
    __table_args__ = (
        CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="ck_daily_task_progress_percentage",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    daily_task_id = Column(Integer, ForeignKey("daily_tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    progress_date = Column(Date, nullable=False, index=True)
    hours_spent = Column(Float, nullable=False, default=0, server_default="0")
    progress_percentage = Column(Integer, nullable=False, default=0, server_default="0")
    notes = Column(Text, nullable=False, default="", server_default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
