"""Report builders and their HTTP routes."""
from .dates import DateRange, parse_date_range
from .names import UNNAMED_TEACHER, normalize_name
from .grading import ActivityField, AssignmentGradingReport
from .submissions import SubmissionDetailReport
from .installs import InstallAttributionReport
from .router import router as reports_router

__all__ = [
    "DateRange",
    "parse_date_range",
    "UNNAMED_TEACHER",
    "normalize_name",
    "ActivityField",
    "AssignmentGradingReport",
    "SubmissionDetailReport",
    "InstallAttributionReport",
    "reports_router",
]
