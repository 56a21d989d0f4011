"""App-install attribution by referral source and platform."""

import logging
from typing import Mapping, Union

from sqlalchemy.orm import Session

from ..models import Platform, SurveyRecord, SurveyType
from .dates import DateRange
from .schemas import InstallAttributionRow

logger = logging.getLogger(__name__)

OTHER_AGENTS = "Other Agents"
SOCIAL_MEDIA = "Social Media"
FRIEND = "Friend"
OTHER = "Other"
TOTAL = "Total"

_BUCKET_BY_TYPE = {
    SurveyType.social_media.value: SOCIAL_MEDIA,
    SurveyType.friend.value: FRIEND,
}
SOURCE_BUCKETS = (OTHER_AGENTS, SOCIAL_MEDIA, FRIEND, OTHER)


class InstallAttributionReport:
    """Buckets survey answers by referral source, split by Android and iOS.

    Every roster agent gets a row, followed by "Other Agents", "Social Media",
    "Friend" and "Other"; zero-count rows are kept. Rows are ordered by total
    descending and a "Total" row is appended.
    """

    def __init__(self, db: Session, roster: Mapping[int, str]):
        self.db = db
        self.roster = dict(roster)

    def bucket_for(self, record: SurveyRecord) -> Union[int, str]:
        """Roster agent id for a known agent, else the name of a source bucket.

        Agent buckets are keyed by id so a display name can never collide
        with a source bucket.
        """
        if record.type == SurveyType.agent.value:
            return record.agent_id if record.agent_id in self.roster else OTHER_AGENTS
        return _BUCKET_BY_TYPE.get(record.type, OTHER)

    def build(self, date_range: DateRange) -> list[InstallAttributionRow]:
        records = (
            self.db.query(SurveyRecord)
            .filter(
                SurveyRecord.created_at >= date_range.start,
                SurveyRecord.created_at <= date_range.end,
            )
            .all()
        )

        buckets = {agent_id: InstallAttributionRow(agent=name) for agent_id, name in self.roster.items()}
        buckets.update((name, InstallAttributionRow(agent=name)) for name in SOURCE_BUCKETS)

        for record in records:
            row = buckets[self.bucket_for(record)]
            if record.platform is Platform.ios:
                row.ios += 1
            else:
                row.android += 1

        rows = list(buckets.values())
        for row in rows:
            row.total = row.android + row.ios
        rows.sort(key=lambda row: row.total, reverse=True)

        rows.append(
            InstallAttributionRow(
                agent=TOTAL,
                android=sum(row.android for row in rows),
                ios=sum(row.ios for row in rows),
                total=sum(row.total for row in rows),
            )
        )
        logger.info(f"Install attribution: {len(records)} survey records in range")
        return rows
