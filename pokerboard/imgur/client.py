"""Imgur API client for anonymous image uploads."""

import base64
import logging
import os
from typing import Optional

import requests

from pokerboard.board.errors import UploadError

logger = logging.getLogger(__name__)

IMGUR_API_BASE = "https://api.imgur.com/3"


class ImgurClient:
    """Uploads board images to Imgur and returns their public links."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize Imgur client.

        Args:
            client_id: Imgur application client ID (or IMGUR_CLIENT_ID env var)
            session: Optional requests session to send uploads through
            timeout: Optional request timeout in seconds (no timeout by default)
        """
        self.client_id = client_id or os.environ.get("IMGUR_CLIENT_ID")

        if not self.client_id:
            raise UploadError(
                "Missing Imgur client ID. Set IMGUR_CLIENT_ID environment "
                "variable or pass it to constructor."
            )

        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, endpoint: str, data: Optional[dict] = None) -> dict:
        """Make a single API request.

        Returns:
            The `data` member of the JSON response
        """
        url = f"{IMGUR_API_BASE}{endpoint}"
        headers = {"Authorization": f"Client-ID {self.client_id}"}

        try:
            response = self._session.request(method, url, data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise UploadError(f"Request to {url} failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise UploadError(
                f"Invalid response from {url} (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from e

        if not response.ok or not result.get("success", False):
            error = result.get("data", {})
            message = error.get("error", response.reason) if isinstance(error, dict) else error
            if isinstance(message, dict):
                message = message.get("message", str(message))
            raise UploadError(
                f"API error (HTTP {response.status_code}): {message}",
                status_code=response.status_code,
            )

        return result.get("data", {})

    def upload_image(self, data: bytes, title: Optional[str] = None) -> str:
        """Upload JPEG bytes.

        Args:
            data: Encoded image bytes
            title: Optional image title

        Returns:
            Public URL of the uploaded image
        """
        payload = {
            "image": base64.b64encode(data).decode("ascii"),
            "type": "base64",
        }
        if title:
            payload["title"] = title

        result = self._request("POST", "/image", data=payload)

        link = result.get("link")
        if not link:
            raise UploadError("Upload response did not include a link")

        logger.info(f"Uploaded image ({len(data)} bytes): {link}")
        return link
