"""
Media library: attachments and the display model sent to the client.

Upload controls resolve the URL stored in a setting into an attachment and
export the attachment's display model so the client template can show a
thumbnail, an icon, or audio metadata.
"""

import logging
import mimetypes
import os
import posixpath
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from PIL import Image, UnidentifiedImageError

from .utils.errors import MediaError

logger = logging.getLogger(__name__)

# Icon file for each attachment type; anything else uses default.png
TYPE_ICONS = {
    "archive": "archive.png",
    "audio": "audio.png",
    "code": "code.png",
    "document": "document.png",
    "interactive": "interactive.png",
    "spreadsheet": "spreadsheet.png",
    "text": "text.png",
    "video": "video.png",
}

DEFAULT_ICON_BASE_URL = "/wp-includes/images/media"

# Bounding box of the "medium" intermediate image size
MEDIUM_SIZE = (300, 300)


def _fit_within(width: int, height: int, box: Tuple[int, int]) -> Tuple[int, int]:
    ratio = min(box[0] / width, box[1] / height)
    return max(1, int(round(width * ratio))), max(1, int(round(height * ratio)))


def _sized_url(url: str, width: int, height: int) -> str:
    root, ext = posixpath.splitext(url)
    return f"{root}-{width}x{height}{ext}"


class MediaLibrary:
    """
    In-memory attachment store for one customizer request.

    Attributes:
        icon_base_url: URL prefix for attachment type icons
    """

    def __init__(self, icon_base_url: str = DEFAULT_ICON_BASE_URL):
        self.icon_base_url = icon_base_url.rstrip("/")
        self._attachments: Dict[int, Dict[str, Any]] = {}
        self._by_url: Dict[str, int] = {}
        self._next_id = 1

    def add_attachment(
        self,
        url: str,
        *,
        mime_type: Optional[str] = None,
        title: Optional[str] = None,
        path: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Register an attachment.

        Args:
            url: Public URL of the file
            mime_type: MIME type (guessed from the URL when omitted)
            title: Display title (defaults to the file name without extension)
            path: Local file path; image dimensions are read from it when present
            meta: Extra metadata (width/height for images, album/artist for audio)

        Returns:
            The new attachment id

        Raises:
            MediaError: If url is empty or already registered
        """
        if not url:
            raise MediaError("Attachment URL must not be empty")
        if url in self._by_url:
            raise MediaError(f"Attachment already registered for URL: {url}")

        filename = posixpath.basename(urlparse(url).path)
        if not mime_type:
            mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        meta = dict(meta or {})
        if mime_type.startswith("image/") and path:
            size = self._read_image_size(path)
            if size:
                meta["width"], meta["height"] = size

        attachment_id = self._next_id
        self._next_id += 1
        self._attachments[attachment_id] = {
            "id": attachment_id,
            "url": url,
            "filename": filename,
            "title": title or posixpath.splitext(filename)[0],
            "mime": mime_type,
            "meta": meta,
        }
        self._by_url[url] = attachment_id
        logger.debug(f"Registered attachment {attachment_id}: {url} ({mime_type})")
        return attachment_id

    def _read_image_size(self, path: str) -> Optional[Tuple[int, int]]:
        if not os.path.exists(path):
            logger.warning(f"Image file not found: {path}")
            return None
        try:
            with Image.open(path) as image:
                return image.size
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not read image dimensions from {path}: {e}")
            return None

    def attachment_url_to_postid(self, url: str) -> int:
        """Return the attachment id for a URL, or 0 when unknown."""
        return self._by_url.get(url, 0)

    def mime_type_icon(self, mime: str) -> str:
        """
        Return the icon URL for an attachment type or MIME type.

        Args:
            mime: Either a bare type ("audio") or a MIME type ("audio/mpeg")
        """
        kind = mime.split("/", 1)[0] if mime else ""
        if kind == "application" and "/" in mime:
            kind = self._application_kind(mime.split("/", 1)[1])
        icon = TYPE_ICONS.get(kind, "default.png")
        return f"{self.icon_base_url}/{icon}"

    @staticmethod
    def _application_kind(subtype: str) -> str:
        if subtype in ("zip", "x-tar", "gzip", "x-gzip", "x-7z-compressed", "x-rar-compressed"):
            return "archive"
        if subtype in ("pdf", "msword", "rtf") or "wordprocessing" in subtype:
            return "document"
        if "spreadsheet" in subtype or subtype == "vnd.ms-excel":
            return "spreadsheet"
        if subtype in ("javascript", "json", "xml"):
            return "code"
        return ""

    def prepare_attachment_for_js(self, attachment_id: int) -> Optional[Dict[str, Any]]:
        """
        Build the client display model for an attachment.

        Returns:
            Attachment model dictionary, or None if the id is unknown
        """
        attachment = self._attachments.get(attachment_id)
        if attachment is None:
            return None

        mime = attachment["mime"]
        kind, _, subtype = mime.partition("/")
        meta = dict(attachment["meta"])

        response: Dict[str, Any] = {
            "id": attachment["id"],
            "url": attachment["url"],
            "title": attachment["title"],
            "filename": attachment["filename"],
            "mime": mime,
            "type": kind,
            "subtype": subtype,
            "icon": self.mime_type_icon(mime),
            "meta": meta,
        }

        if kind == "image":
            width = meta.get("width")
            height = meta.get("height")
            sizes = {"full": {"url": attachment["url"]}}
            if width and height:
                response["width"] = width
                response["height"] = height
                response["orientation"] = "portrait" if height > width else "landscape"
                sizes["full"].update(
                    {"width": width, "height": height, "orientation": response["orientation"]}
                )
                if width > MEDIUM_SIZE[0] or height > MEDIUM_SIZE[1]:
                    medium_w, medium_h = _fit_within(width, height, MEDIUM_SIZE)
                    sizes["medium"] = {
                        "url": _sized_url(attachment["url"], medium_w, medium_h),
                        "width": medium_w,
                        "height": medium_h,
                        "orientation": "portrait" if medium_h > medium_w else "landscape",
                    }
            response["sizes"] = sizes
        elif kind == "audio":
            for key in ("album", "artist"):
                if meta.get(key):
                    response[key] = meta[key]

        return response

    def __len__(self) -> int:
        return len(self._attachments)
