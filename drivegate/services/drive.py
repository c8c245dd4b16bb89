import io
import logging

from google.auth.exceptions import RefreshError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from drivegate.auth import get_drive_credentials
from drivegate.config import Settings
from drivegate.exceptions import AuthenticationError, IntegrationError, RateLimitError
from drivegate.models.drive import DriveFile
from drivegate.services.query import DriveQuery

logger = logging.getLogger(__name__)

UPLOAD_FIELDS = "id, name, webViewLink"
LIST_FIELDS = "files(id, name, webViewLink, createdTime)"
UPLOAD_MIME_TYPE = "text/markdown"
PUBLIC_READER = {"role": "reader", "type": "anyone"}


def _build_drive_resource(settings: Settings):
    creds = get_drive_credentials(settings)
    return build("drive", "v3", credentials=creds, cache_discovery=False)


def _handle_api_error(e: HttpError):
    if e.resp.status == 429:
        raise RateLimitError("Drive API rate limit exceeded. Try again shortly.") from e
    if e.resp.status in (401, 403):
        raise AuthenticationError(f"Drive credentials rejected: {e}") from e
    raise IntegrationError(f"Drive API error: {e}") from e


def _handle_refresh_error(e: RefreshError):
    raise AuthenticationError(
        f"Failed to refresh Drive access token: {e}. Check CLIENT_ID, CLIENT_SECRET and REFRESH_TOKEN."
    ) from e


def _parse_file(f: dict) -> DriveFile:
    return DriveFile(
        id=f["id"],
        name=f.get("name", ""),
        web_view_link=f.get("webViewLink"),
        created_time=f.get("createdTime"),
    )


class DriveService:
    """Upload and list operations over one authenticated Drive v3 resource."""

    def __init__(
        self,
        resource,
        share_publicly: bool = True,
        page_size: int = 20,
        order_by: str | None = "createdTime desc",
    ):
        self.resource = resource
        self.share_publicly = share_publicly
        self.page_size = page_size
        self.order_by = order_by or None

    @classmethod
    def from_settings(cls, settings: Settings) -> "DriveService":
        if not settings.has_credentials:
            logger.warning(
                "CLIENT_ID, CLIENT_SECRET or REFRESH_TOKEN is not set; Drive calls will fail until they are configured"
            )
        return cls(
            _build_drive_resource(settings),
            share_publicly=settings.share_publicly,
            page_size=settings.list_page_size,
            order_by=settings.list_order_by,
        )

    def upload_file(self, filename: str, content: str, folder_id: str | None = None) -> DriveFile:
        """Create a markdown file and, when public sharing is on, make it readable by anyone with the link."""
        metadata: dict = {"name": filename, "mimeType": UPLOAD_MIME_TYPE}
        if folder_id:
            metadata["parents"] = [folder_id]

        media = MediaIoBaseUpload(io.BytesIO(content.encode("utf-8")), mimetype=UPLOAD_MIME_TYPE)
        try:
            f = self.resource.files().create(body=metadata, media_body=media, fields=UPLOAD_FIELDS).execute()
            if self.share_publicly:
                self.resource.permissions().create(fileId=f["id"], body=PUBLIC_READER).execute()
        except HttpError as e:
            _handle_api_error(e)
        except RefreshError as e:
            _handle_refresh_error(e)

        logger.info("Uploaded %s as %s (public=%s)", filename, f["id"], self.share_publicly)
        return _parse_file(f)

    def list_files(self, query: str | None = None, folder_id: str | None = None) -> list[DriveFile]:
        """List non-trashed files, optionally by folder and name fragment. Only the first page is returned."""
        q = DriveQuery.for_listing(query=query, folder_id=folder_id).render()
        params = {"q": q, "fields": LIST_FIELDS, "pageSize": self.page_size}
        if self.order_by:
            params["orderBy"] = self.order_by
        try:
            results = self.resource.files().list(**params).execute()
        except HttpError as e:
            _handle_api_error(e)
        except RefreshError as e:
            _handle_refresh_error(e)

        files = [_parse_file(f) for f in results.get("files", [])]
        logger.info("Listed %d files for q=%r", len(files), q)
        return files
