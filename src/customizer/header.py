"""
Theme header images offered by the header image control.
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class CustomHeader:
    """
    Suggested (theme supplied) and previously uploaded header images.

    Suggested headers may use ``%s`` in their URLs as a placeholder for the
    theme directory URI; ``process_default_headers()`` expands it.

    Example:
        >>> header = CustomHeader("https://example.com/themes/dusk")
        >>> header.register_default_headers({
        ...     "sunset": {"url": "%s/images/sunset.jpg", "description": "Sunset"},
        ... })
        >>> header.process_default_headers()
        >>> header.get_default_header_images()[0]["url"]
        'https://example.com/themes/dusk/images/sunset.jpg'
    """

    def __init__(self, template_directory_uri: str = "", random_default: bool = False):
        self.template_directory_uri = template_directory_uri.rstrip("/")
        self.random_default = random_default
        self._registered: Dict[str, Dict[str, Any]] = {}
        self._uploaded: List[Dict[str, Any]] = []
        self.default_headers: Dict[str, Dict[str, Any]] = {}

    def register_default_headers(self, headers: Dict[str, Dict[str, Any]]) -> None:
        for name, header in headers.items():
            if "url" not in header:
                logger.warning(f"Ignoring default header '{name}' without a url")
                continue
            self._registered[name] = dict(header)

    def add_uploaded_header(
        self,
        url: str,
        *,
        attachment_id: int,
        thumbnail_url: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        alt_text: str = "",
    ) -> None:
        self._uploaded.append(
            {
                "attachment_id": attachment_id,
                "url": url,
                "thumbnail_url": thumbnail_url or url,
                "width": width,
                "height": height,
                "alt_text": alt_text,
            }
        )

    def process_default_headers(self) -> None:
        """Expand the theme directory placeholder in registered headers."""
        if self.default_headers:
            return

        for name, header in self._registered.items():
            url = header["url"].replace("%s", self.template_directory_uri)
            thumbnail_url = header.get("thumbnail_url", header["url"]).replace(
                "%s", self.template_directory_uri
            )
            self.default_headers[name] = dict(header, url=url, thumbnail_url=thumbnail_url)

    def get_default_header_images(self) -> List[Dict[str, Any]]:
        """Suggested headers, followed by a random choice when the theme allows it."""
        self.process_default_headers()

        headers = []
        for name, header in self.default_headers.items():
            headers.append(
                {
                    "url": header["url"],
                    "thumbnail_url": header["thumbnail_url"],
                    "description": header.get("description", name),
                    "alt_text": header.get("alt_text", ""),
                    "attachment_id": False,
                }
            )

        if self.random_default and headers:
            headers.append({"random": True, "type": "default"})
        return headers

    def get_uploaded_header_images(self) -> List[Dict[str, Any]]:
        """Previously uploaded headers, newest first."""
        return list(reversed(self._uploaded))
