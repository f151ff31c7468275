"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the meeting lifecycle lives in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.mom_portal.mom_portal.common.pagination import PageRequest
from src.mom_portal.mom_portal.container import build_container
from src.mom_portal.mom_portal.meetings.model import MeetingFilter


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, jwt_secret=settings.JWT_SECRET)

    print(container.meeting_service.stats().to_dict())
    for meeting in container.meeting_service.upcoming(limit=5):
        print(meeting.meeting_date, meeting.meeting_time, meeting.meeting_title)

    page = container.meeting_service.list_meetings(filters=MeetingFilter(search="review"), page=PageRequest(limit=5))
    print(f"{page.total} meeting(s) match 'review'")


if __name__ == "__main__":
    main()
