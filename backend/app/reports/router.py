"""Report endpoints."""
import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import config
from ..auth import TokenData, get_current_user, require_role
from ..database import get_db
from ..errors import InvalidParameter, MissingParameter, ReportServiceError, UpstreamFailure
from .dates import parse_date_range
from .grading import ActivityField, AssignmentGradingReport
from .installs import InstallAttributionReport
from .schemas import GradingReportResponse, InstallAttributionRow, SubmissionDetail
from .submissions import SubmissionDetailReport

logger = logging.getLogger(__name__)

router = APIRouter(prefix=config.REPORT_PREFIX, tags=["Reports"])

ADMIN_ROLE = "admin"


@lru_cache(maxsize=1)
def get_agent_roster() -> dict[int, str]:
    return config.load_agent_roster()


@lru_cache(maxsize=1)
def get_teacher_allow_list() -> tuple[str, ...]:
    return tuple(config.load_teacher_allow_list())


def get_grading_report(
    db: Session = Depends(get_db),
    allow_list: tuple[str, ...] = Depends(get_teacher_allow_list),
) -> AssignmentGradingReport:
    return AssignmentGradingReport(db, allow_list=allow_list)


def get_submission_report(db: Session = Depends(get_db)) -> SubmissionDetailReport:
    return SubmissionDetailReport(db)


def get_install_report(
    db: Session = Depends(get_db),
    roster: dict[int, str] = Depends(get_agent_roster),
) -> InstallAttributionReport:
    return InstallAttributionReport(db, roster=roster)


def _require(message: str, **params: Optional[str]) -> None:
    missing = [name for name, value in params.items() if not value or not value.strip()]
    if missing:
        raise MissingParameter(missing, message)


@contextmanager
def _report_errors(action: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Database error {action}: {e}")
        raise UpstreamFailure()
    except ReportServiceError:
        raise
    except Exception:
        logger.exception(f"Unexpected error {action}")
        raise UpstreamFailure()


def _resolve_activity_field(activity_field: Optional[str], only_activity: Optional[bool]) -> ActivityField:
    if activity_field:
        try:
            return ActivityField(activity_field)
        except ValueError:
            raise InvalidParameter(f'Unknown activity field "{activity_field}"; use createdAt or updatedAt.')
    return ActivityField.updated_at if only_activity else ActivityField.created_at


@router.get("/report", response_model=GradingReportResponse)
def grading_report(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    gender: Optional[str] = None,
    activity_field: Optional[str] = Query(None, alias="activityField"),
    only_activity: Optional[bool] = Query(None, alias="onlyActivity"),
    user: TokenData = Depends(get_current_user),
    report: AssignmentGradingReport = Depends(get_grading_report),
):
    """Graded/ungraded totals and the graded count of every teacher."""
    _require('Missing "from" or "to" or "gender" query parameters.', **{"from": from_, "to": to, "gender": gender})
    date_range = parse_date_range(from_, to)
    field = _resolve_activity_field(activity_field, only_activity)
    with _report_errors("generating report"):
        return report.build(date_range, gender=gender, activity_field=field)


@router.get("/survey", response_model=list[InstallAttributionRow])
def install_survey(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    user: TokenData = Depends(get_current_user),
    report: InstallAttributionReport = Depends(get_install_report),
):
    """Installs per referral source and platform, with a trailing Total row."""
    _require('Missing "from" or "to" query parameters!', **{"from": from_, "to": to})
    date_range = parse_date_range(from_, to)
    with _report_errors("generating survey report"):
        return report.build(date_range)


@router.get("/submissions", response_model=list[SubmissionDetail])
def teacher_submissions(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    teacher: Optional[str] = None,
    user: TokenData = Depends(require_role(ADMIN_ROLE)),
    report: SubmissionDetailReport = Depends(get_submission_report),
):
    """Passed and failed submissions reviewed by one teacher. Admins only."""
    _require('Missing "from", "to", or "teacher" query parameters!', **{"from": from_, "to": to, "teacher": teacher})
    date_range = parse_date_range(from_, to)
    with _report_errors("fetching submissions"):
        return report.build(date_range, teacher)
