"""Upload order reports to Google Drive via OAuth 2.0."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

logger = logging.getLogger(__name__)


class GoogleDriveUploader:
    """Upload report files to a Google Drive folder.

    The first call opens a browser for account authorization; the token
    is cached at ``token_path`` and refreshed on later runs.
    """

    SCOPES = ["https://www.googleapis.com/auth/drive.file"]

    def __init__(
        self,
        credentials_path: str | Path = "~/.config/superstore/gdrive_credentials.json",
        token_path: str | Path = "~/.config/superstore/gdrive_token.json",
        folder_id: str = "",
    ) -> None:
        self._credentials_path = Path(credentials_path).expanduser()
        self._token_path = Path(token_path).expanduser()
        self._folder_id = folder_id
        self._service = None

    def _load_credentials(self):
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials
        from google_auth_oauthlib.flow import InstalledAppFlow

        creds = None
        if self._token_path.exists():
            creds = Credentials.from_authorized_user_file(
                str(self._token_path), self.SCOPES
            )
        if creds is not None and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            creds.refresh(Request())
        else:
            if not self._credentials_path.exists():
                raise FileNotFoundError(
                    f"OAuth client file not found: {self._credentials_path}\n"
                    "Download it from the Google Cloud Console."
                )
            flow = InstalledAppFlow.from_client_secrets_file(
                str(self._credentials_path), self.SCOPES
            )
            creds = flow.run_local_server(port=0)

        self._token_path.parent.mkdir(parents=True, exist_ok=True)
        self._token_path.write_text(creds.to_json())
        return creds

    def _get_service(self):
        if self._service is not None:
            return self._service

        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "Google Drive support is not installed:\n"
                "  pip install 'superstore[gdrive]'"
            )

        self._service = build("drive", "v3", credentials=self._load_credentials())
        return self._service

    def upload(
        self,
        file_path: str | Path,
        filename: str | None = None,
        folder_id: str | None = None,
    ) -> str:
        """Upload a file and return its Drive file ID.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ImportError: If the Google client libraries are not installed.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        service = self._get_service()
        from googleapiclient.http import MediaFileUpload

        metadata: dict = {"name": filename or file_path.name}
        target_folder = folder_id or self._folder_id
        if target_folder:
            metadata["parents"] = [target_folder]

        mimetype = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        media = MediaFileUpload(str(file_path), mimetype=mimetype, resumable=True)

        result = (
            service.files()
            .create(body=metadata, media_body=media, fields="id")
            .execute()
        )
        logger.info("Uploaded %s to Google Drive (%s)", file_path.name, result["id"])
        return result["id"]
