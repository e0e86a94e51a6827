
from sqlalchemy import Column, Integer, Text, Float, Date, DateTime, CheckConstraint, UniqueConstraint
from sqlalchemy.sql import func
from taskboard.db.base_class import Base

class ProgressReport(Base):
    __tablename__ = "daily_progress_reports"
    __table_args__ = (
        CheckConstraint("length(reporter_name) >= 2", name="ck_progress_reports_reporter_length"),
        CheckConstraint("mood_rating >= 1 AND mood_rating <= 5", name="ck_progress_reports_mood"),
        CheckConstraint(
            "productivity_score >= 1 AND productivity_score <= 5",
            name="ck_progress_reports_productivity",
        ),
        UniqueConstraint("reporter_name", "report_date", name="uq_progress_reports_reporter_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    reporter_name = Column(Text, nullable=False, index=True)
    report_date = Column(Date, nullable=False, index=True)
    tasks_completed = Column(Text, nullable=False, default="", server_default="")
    tasks_in_progress = Column(Text, nullable=False, default="", server_default="")
    tasks_blocked = Column(Text, nullable=False, default="", server_default="")
    hours_worked = Column(Float, nullable=False, default=0, server_default="0")
    challenges = Column(Text, nullable=False, default="", server_default="")
    next_day_plan = Column(Text, nullable=False, default="", server_default="")
    mood_rating = Column(Integer, nullable=False, default=3, server_default="3")
    productivity_score = Column(Integer, nullable=False, default=3, server_default="3")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
