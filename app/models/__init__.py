"""
ClearVision – SQLAlchemy ORM models package.

Imports all model classes so the app can register every table
through a single ``import app.models``.
"""

from app.models.user import TeamMember                      # noqa: F401
from app.models.task import Task                            # noqa: F401
from app.models.task_submission import TaskSubmission       # noqa: F401
from app.models.leave_request import LeaveRequest           # noqa: F401
from app.models.ai_interaction import AiInteraction         # noqa: F401
from app.models.performance_log import PerformanceLog       # noqa: F401
from app.models.notification import Notification            # noqa: F401
