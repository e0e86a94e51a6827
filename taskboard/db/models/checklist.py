
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

CHECKLIST_THEMES = ("blue", "green", "purple", "red", "yellow", "indigo")
CHECKLIST_PRIORITIES = ("High", "Medium", "Low")

# Checklist rows carry opaque string ids generated by the application.

class Checklist(Base):
    __tablename__ = "checklists"
    __table_args__ = (
        CheckConstraint("length(title) >= 3", name="ck_checklists_title_length"),
        CheckConstraint(
            "theme IN ('blue', 'green', 'purple', 'red', 'yellow', 'indigo')",
            name="ck_checklists_theme",
        ),
    )

    id = Column(String(32), primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    theme = Column(String(20), nullable=False, default="blue", server_default="blue")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

class ChecklistTask(Base):
    __tablename__ = "checklist_tasks"
    __table_args__ = (
        CheckConstraint("priority IN ('High', 'Medium', 'Low')", name="ck_checklist_tasks_priority"),
    )

    id = Column(String(32), primary_key=True)
    checklist_id = Column(String(32), ForeignKey("checklists.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    priority = Column(String(10), nullable=False, default="Medium", server_default="Medium")
    completed = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Subtask(Base):
    __tablename__ = "subtasks"
    __table_args__ = (
        CheckConstraint("length(title) >= 2", name="ck_subtasks_title_length"),
    )

    id = Column(String(32), primary_key=True)
    task_id = Column(String(32), ForeignKey("checklist_tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
