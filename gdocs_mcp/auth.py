"""Google OAuth credentials for the Docs and Drive backends.

Loads a persisted token when one exists, refreshes it if it has expired and
otherwise runs the installed-app consent flow once, saving the result.
"""

import logging
from pathlib import Path

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/drive.readonly",
]


def authorize(credentials_path: str, token_path: str) -> Credentials:
    """Return authorized user credentials.

    Raises:
        AuthenticationError: If no usable credentials can be obtained
    """
    token_file = Path(token_path)
    creds = None

    try:
        if token_file.is_file():
            logger.info(f"Found existing token at {token_file}")
            creds = Credentials.from_authorized_user_file(str(token_file), SCOPES)

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            logger.info("Token expired, refreshing")
            creds.refresh(google_requests.Request())
        else:
            if not Path(credentials_path).is_file():
                raise AuthenticationError(f"OAuth client file not found: {credentials_path}")
            logger.info("No usable token, starting OAuth flow")
            flow = InstalledAppFlow.from_client_secrets_file(credentials_path, SCOPES)
            creds = flow.run_local_server(port=0)

        token_file.write_text(creds.to_json(), encoding="utf-8")
        logger.info(f"Token saved to {token_file}")
        return creds

    except AuthenticationError:
        raise
    except (GoogleAuthError, OSError, ValueError) as e:
        raise AuthenticationError(str(e)) from e
