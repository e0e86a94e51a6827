
from sqlalchemy import Table, Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

# Links tasks to projects; removing either side removes the link only.
project_tasks = Table(
    "project_tasks",
    Base.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("task_id", Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    UniqueConstraint("project_id", "task_id", name="uq_project_tasks_pair"),
)
