
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, Date, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

PROJECT_STATUSES = ("planning", "active", "on-hold", "completed", "cancelled")
PRIORITIES = ("low", "medium", "high", "urgent")

class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("length(name) >= 3", name="ck_projects_name_length"),
        CheckConstraint(
            "status IN ('planning', 'active', 'on-hold', 'completed', 'cancelled')",
            name="ck_projects_status",
        ),
        CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_projects_priority"),
        CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_projects_date_order",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="planning", server_default="planning", index=True)
    priority = Column(String(10), nullable=False, default="medium", server_default="medium", index=True)
    manager = Column(Text, nullable=True)
    budget = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

class ProjectMilestone(Base):
    __tablename__ = "project_milestones"
    __table_args__ = (
        CheckConstraint("length(title) >= 3", name="ck_project_milestones_title_length"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    due_date = Column(Date, nullable=True)
    completed = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class ResourceAllocation(Base):
    __tablename__ = "resource_allocations"
    __table_args__ = (
        CheckConstraint("length(resource_name) >= 2", name="ck_resource_allocations_name_length"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    resource_name = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    hours_per_week = Column(Float, nullable=False, default=40, server_default="40")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    hourly_rate = Column(Float, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
