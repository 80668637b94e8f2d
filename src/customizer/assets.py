"""
Script and style queue for the customizer screen.

Controls call ``enqueue()`` before the screen is printed; the queue records
which handles are needed and which data must be localized for them.
"""

import hashlib
import hmac
import json
import logging
import secrets
from typing import Any, Dict, List, Optional

from markupsafe import Markup

logger = logging.getLogger(__name__)

MEDIA_SCRIPTS = ["media-editor", "media-views", "media-audiovideo"]
MEDIA_STYLES = ["media-views"]


def _script_json(data: Any) -> str:
    # A closing tag inside a string would end the script element early
    return json.dumps(data, sort_keys=True).replace("</", "<\\/")


class AssetQueue:
    """
    Ordered queue of script and style handles plus localized data.

    Attributes:
        scripts: Enqueued script handles, in first-enqueued order
        styles: Enqueued style handles, in first-enqueued order
        localized: {handle: {object_name: data}}
    """

    def __init__(self, nonce_secret: Optional[str] = None):
        self.scripts: List[str] = []
        self.styles: List[str] = []
        self.localized: Dict[str, Dict[str, Any]] = {}
        self.media_enqueued = False
        self._nonce_secret = (nonce_secret or secrets.token_hex(16)).encode("utf-8")

    def enqueue_script(self, handle: str) -> None:
        if handle not in self.scripts:
            self.scripts.append(handle)
            logger.debug(f"Enqueued script: {handle}")

    def enqueue_style(self, handle: str) -> None:
        if handle not in self.styles:
            self.styles.append(handle)
            logger.debug(f"Enqueued style: {handle}")

    def enqueue_media(self) -> None:
        """Queue everything the media modal needs."""
        for handle in MEDIA_SCRIPTS:
            self.enqueue_script(handle)
        for handle in MEDIA_STYLES:
            self.enqueue_style(handle)
        self.media_enqueued = True

    def localize_script(self, handle: str, object_name: str, data: Dict[str, Any]) -> None:
        """
        Attach a JavaScript object to a script handle.

        A later call with the same object name replaces the earlier data.
        """
        self.localized.setdefault(handle, {})[object_name] = data

    def create_nonce(self, action: str) -> str:
        """Create a token tied to an action and this queue's secret."""
        digest = hmac.new(self._nonce_secret, action.encode("utf-8"), hashlib.sha256)
        return digest.hexdigest()[:10]

    def verify_nonce(self, nonce: str, action: str) -> bool:
        return hmac.compare_digest(nonce, self.create_nonce(action))

    def render(self) -> Markup:
        """Render localized data as inline script blocks."""
        blocks = []
        for handle, objects in self.localized.items():
            lines = [f"var {name} = {_script_json(data)};" for name, data in objects.items()]
            blocks.append(
                f"<script type=\"text/javascript\" id=\"{handle}-js-extra\">\n"
                + "\n".join(lines)
                + "\n</script>"
            )
        return Markup("\n".join(blocks))
