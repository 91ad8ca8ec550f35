"""Google Calendar access: OAuth credentials and event listing."""

import datetime
import logging
import os
from os import path
from typing import Any, Dict, List

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from calendar_free_time.errors import CalendarError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]

CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"


def token_filename_for(secrets_filename):
    """The token cache lives next to the client secrets: foo.json -> foo_token.json."""
    base, ext = path.splitext(secrets_filename)
    return base + "_token" + ext


def authenticate(scopes=SCOPES, secrets_filename=None) -> Credentials:
    """Load cached credentials, refreshing or re-authorizing them as needed."""
    if secrets_filename is None:
        secrets_filename = os.environ.get(CREDENTIALS_ENV)
    if not secrets_filename:
        raise CalendarError(
            f"No OAuth client secrets file: pass --credentials or set {CREDENTIALS_ENV}"
        )
    token_filename = token_filename_for(secrets_filename)

    creds = None
    if os.path.exists(token_filename):
        creds = Credentials.from_authorized_user_file(token_filename, list(scopes))

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as exc:
                # Revoked or expired refresh token; fall through to the browser flow.
                logger.warning(f"Could not refresh credentials: {exc}")
                creds = None

        if not creds or not creds.valid:
            flow = InstalledAppFlow.from_client_secrets_file(
                secrets_filename, list(scopes)
            )
            creds = flow.run_local_server(port=0)

        with open(token_filename, "w") as token:
            token.write(creds.to_json())
        logger.info(f"Saved credentials to {token_filename}")

    return creds


def build_service(creds):
    """Create the Calendar API v3 client."""
    return build("calendar", "v3", credentials=creds, cache_discovery=False)


def fetch_events(
    service,
    time_min: datetime.datetime,
    time_max: datetime.datetime,
    calendar_id: str = "primary",
) -> List[Dict[str, Any]]:
    """Fetch calendar events between time_min and time_max, following pages."""
    events: List[Dict[str, Any]] = []
    page_token = None
    while True:
        events_result = (
            service.events()
            .list(
                calendarId=calendar_id,
                timeMin=time_min.isoformat(),
                timeMax=time_max.isoformat(),
                singleEvents=True,
                orderBy="startTime",
                pageToken=page_token,
            )
            .execute()
        )
        events.extend(events_result.get("items", []))
        page_token = events_result.get("nextPageToken")
        if not page_token:
            break

    logger.info(f"Fetched {len(events)} events from {calendar_id}")
    return events
