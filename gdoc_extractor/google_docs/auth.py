"""
Google Docs OAuth2 authentication module.

This module handles the OAuth2 installed-app flow for Google Docs API access,
including token caching and refresh, plus service account credentials for
unattended runs.
"""

from pathlib import Path
from typing import List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from gdoc_extractor.config import Settings
from gdoc_extractor.utils.errors import DocsAuthenticationError
from gdoc_extractor.utils.logging import get_logger

logger = get_logger(__name__)

# Google Docs API scopes
SCOPES = ["https://www.googleapis.com/auth/documents.readonly"]


class GoogleDocsAuth:
    """Handle Google Docs OAuth2 authentication."""

    def __init__(
        self,
        credentials_path: Path,
        token_path: Path,
        scopes: Optional[List[str]] = None,
        port: int = 8888,
    ) -> None:
        """
        Initialize Google Docs authentication.

        Args:
            credentials_path: Path to OAuth2 client secrets JSON file
            token_path: Path to store/load the user token
            scopes: OAuth2 scopes (defaults to SCOPES)
            port: Local port for the OAuth callback server
        """
        self.credentials_path = credentials_path
        self.token_path = token_path
        self.scopes = scopes or SCOPES
        self.port = port

        self._credentials: Optional[Credentials] = None

    @property
    def credentials(self) -> Optional[Credentials]:
        """Get current credentials."""
        return self._credentials

    @property
    def is_authenticated(self) -> bool:
        """Check if authenticated with valid credentials."""
        return self._credentials is not None and self._credentials.valid

    def authenticate(self, force_reauth: bool = False) -> Credentials:
        """
        Authenticate with Google Docs.

        Args:
            force_reauth: Force re-authentication even if a token exists

        Returns:
            Valid credentials

        Raises:
            DocsAuthenticationError: If authentication fails
        """
        try:
            if not force_reauth and self.token_path.exists():
                self._credentials = self._load_token()

                if self._credentials and self._credentials.expired and self._credentials.refresh_token:
                    logger.info("Refreshing expired token")
                    self._credentials.refresh(Request())
                    self._save_token()

            if force_reauth or not self._credentials or not self._credentials.valid:
                logger.info("Running OAuth2 flow")
                self._credentials = self._run_oauth_flow()
                self._save_token()

            logger.info("Successfully authenticated with Google Docs")
            return self._credentials

        except DocsAuthenticationError:
            raise
        except Exception as e:
            logger.error(f"Authentication failed: {str(e)}")
            raise DocsAuthenticationError(f"Failed to authenticate: {str(e)}") from e

    def _run_oauth_flow(self) -> Credentials:
        """
        Run the installed-app OAuth2 flow.

        Raises:
            DocsAuthenticationError: If the flow fails
        """
        if not self.credentials_path.exists():
            raise DocsAuthenticationError(
                f"Credentials file not found: {self.credentials_path}. "
                "Please download OAuth2 credentials from Google Cloud Console."
            )

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(self.credentials_path),
                self.scopes,
            )
            return flow.run_local_server(
                port=self.port,
                access_type="offline",
                authorization_prompt_message="Opening browser for Google Docs authentication...",
                success_message="Authentication successful! You can close this window.",
                open_browser=True,
            )
        except Exception as e:
            raise DocsAuthenticationError(f"OAuth flow failed: {str(e)}") from e

    def _load_token(self) -> Optional[Credentials]:
        """Load the cached token, or None if it cannot be read."""
        try:
            logger.debug(f"Loading token from {self.token_path}")
            return Credentials.from_authorized_user_file(str(self.token_path), self.scopes)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load token: {e}")
            return None

    def _save_token(self) -> None:
        """Save current credentials to the token file."""
        if self._credentials:
            logger.debug(f"Saving token to {self.token_path}")
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            self.token_path.write_text(self._credentials.to_json())

    def revoke(self) -> None:
        """
        Forget current credentials and delete the cached token.

        Note: This doesn't revoke the token on Google's servers.
        """
        logger.info("Revoking credentials")
        self._credentials = None
        if self.token_path.exists():
            self.token_path.unlink()
            logger.info(f"Deleted token file: {self.token_path}")


class ServiceAccountAuth:
    """
    Handle service account authentication.

    Use this for server-to-server access without user interaction. The
    documents must be shared with the service account's email.
    """

    def __init__(self, service_account_path: Path, scopes: Optional[List[str]] = None) -> None:
        self.service_account_path = service_account_path
        self.scopes = scopes or SCOPES
        self._credentials = None

        if not self.service_account_path.exists():
            raise DocsAuthenticationError(
                f"Service account file not found: {service_account_path}"
            )

    @property
    def credentials(self):
        return self._credentials

    @property
    def is_authenticated(self) -> bool:
        return self._credentials is not None

    def authenticate(self, force_reauth: bool = False):
        """
        Authenticate using the service account key file.

        Raises:
            DocsAuthenticationError: If the key file cannot be used
        """
        try:
            from google.oauth2 import service_account

            self._credentials = service_account.Credentials.from_service_account_file(
                str(self.service_account_path),
                scopes=self.scopes,
            )
            logger.info("Successfully authenticated with service account")
            return self._credentials
        except Exception as e:
            logger.error(f"Service account authentication failed: {e}")
            raise DocsAuthenticationError(
                f"Service account authentication failed: {str(e)}"
            ) from e


def create_auth_manager(settings: Settings):
    """
    Create the auth manager matching the configuration.

    A configured service account key wins over the interactive OAuth flow.
    """
    if settings.google_service_account_path:
        if settings.google_service_account_path.exists():
            return ServiceAccountAuth(settings.google_service_account_path)
        logger.warning("Service account configured but file not found, falling back to OAuth")

    return GoogleDocsAuth(
        credentials_path=settings.google_credentials_path,
        token_path=settings.google_token_path,
        port=settings.oauth_port,
    )
