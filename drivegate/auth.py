from google.oauth2.credentials import Credentials

from drivegate.config import Settings

DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]


def get_drive_credentials(settings: Settings) -> Credentials:
    """Build refreshable user credentials from the configured client id, secret and refresh token.

    No access token is minted here; google-auth refreshes one on the first request.
    """
    return Credentials(
        token=None,
        refresh_token=settings.refresh_token or None,
        client_id=settings.client_id or None,
        client_secret=settings.client_secret or None,
        token_uri=settings.token_uri,
        scopes=DRIVE_SCOPES,
    )
