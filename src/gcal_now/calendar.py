from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from gcal_now.config import CREDENTIALS_FILE, DEFAULT_CALENDAR_ID, SCOPES, TOKEN_FILE
from gcal_now.events import Event
from gcal_now.logging_utils import get_logger

LOGGER = get_logger("gcal_now.calendar")
FETCH_WINDOW = timedelta(days=1)


class CalendarError(RuntimeError):
    """Raised when the calendar API cannot be queried."""


def _parse_iso(value: str) -> datetime:
    normalized = value.replace("Z", "+00:00")
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _to_rfc3339(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _parse_timestamp(section: Any) -> datetime | None:
    # All-day events carry only "date", which has no place in the table.
    if not isinstance(section, dict):
        return None
    raw = section.get("dateTime")
    if not raw:
        return None
    try:
        return _parse_iso(str(raw))
    except ValueError:
        LOGGER.info("Ignoring unparseable event timestamp: %r", raw)
        return None


def _meeting_link(item: dict[str, Any]) -> str:
    hangout = item.get("hangoutLink")
    if hangout:
        return str(hangout)

    conference = item.get("conferenceData") or {}
    for entry in conference.get("entryPoints", []):
        if entry.get("entryPointType") == "video" and entry.get("uri"):
            return str(entry["uri"])
    return ""


def event_from_payload(item: dict[str, Any]) -> Event:
    return Event(
        summary=str(item.get("summary", "")),
        start=_parse_timestamp(item.get("start")),
        end=_parse_timestamp(item.get("end")),
        link=_meeting_link(item),
    )


def authenticate_google_calendar() -> Credentials:
    if not CREDENTIALS_FILE.exists():
        msg = f"Missing credentials file: {CREDENTIALS_FILE}"
        raise FileNotFoundError(msg)

    flow = InstalledAppFlow.from_client_secrets_file(str(CREDENTIALS_FILE), SCOPES)
    creds = flow.run_local_server(port=0, open_browser=True)
    TOKEN_FILE.write_text(creds.to_json(), encoding="utf-8")
    print(f"Authentication successful. Token saved to '{TOKEN_FILE.name}'.")
    return creds


def get_credentials() -> Credentials:
    if not TOKEN_FILE.exists():
        return authenticate_google_calendar()

    creds = Credentials.from_authorized_user_file(str(TOKEN_FILE), SCOPES)
    if creds.valid:
        return creds

    if creds.expired and creds.refresh_token:
        LOGGER.info("Refreshing expired calendar token.")
        creds.refresh(Request())
        TOKEN_FILE.write_text(creds.to_json(), encoding="utf-8")
        return creds

    return authenticate_google_calendar()


def _get_calendar_service() -> Any:
    return build("calendar", "v3", credentials=get_credentials())


def fetch_window_events(
    now: datetime,
    calendar_id: str = DEFAULT_CALENDAR_ID,
    service: Any | None = None,
) -> list[Event]:
    """Return single events from one day before ``now`` to one day after, by start time."""
    service = service or _get_calendar_service()
    query: dict[str, Any] = {
        "calendarId": calendar_id,
        "timeMin": _to_rfc3339(now - FETCH_WINDOW),
        "timeMax": _to_rfc3339(now + FETCH_WINDOW),
        "singleEvents": True,
        "showDeleted": False,
        "orderBy": "startTime",
    }

    items: list[dict[str, Any]] = []
    page_token: str | None = None
    while True:
        if page_token:
            query["pageToken"] = page_token
        try:
            events_result = service.events().list(**query).execute()
        except HttpError as exc:
            LOGGER.error("Calendar query for %s failed: %s", calendar_id, exc)
            msg = f"Unable to retrieve events for calendar '{calendar_id}': {exc}"
            raise CalendarError(msg) from exc
        items.extend(events_result.get("items", []))
        page_token = events_result.get("nextPageToken")
        if not page_token:
            break

    LOGGER.info("Fetched %d events from calendar %s", len(items), calendar_id)
    return [event_from_payload(item) for item in items]
