from taskboard.db.base_class import Base

# Import models here so Base.metadata knows every table before create_all.
from taskboard.db.models.task import Task
from taskboard.db.models.article import Article
from taskboard.db.models.checklist import Checklist, ChecklistTask, Subtask
from taskboard.db.models.project import Project, ProjectMilestone, ResourceAllocation
from taskboard.db.models.associations import project_tasks
from taskboard.db.models.daily_task import DailyTask, DailyTaskProgress
from taskboard.db.models.progress_report import ProgressReport
