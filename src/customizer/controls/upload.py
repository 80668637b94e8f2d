"""
File, image, background image and header image controls.

Upload controls render nothing on the server. Their ``json()`` export carries
the attachment display model and the button labels, and the client template
from ``content_template()`` draws the current file, the placeholder and the
action buttons.
"""

import logging
import posixpath
import re
from typing import Any, Callable, Dict, List, Optional

from .base import CustomizeControl
from ..utils.html import esc_html

logger = logging.getLogger(__name__)

# File extensions treated as images when faking the default attachment
IMAGE_EXTENSIONS = ("jpg", "png", "gif", "bmp")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def absint(value: Any) -> int:
    """
    Convert a value to a non-negative integer (0 when not numeric).

    Strings use their leading integer, so "1200px" gives 1200.
    """
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return abs(int(match.group(1))) if match else 0
    try:
        return abs(int(value or 0))
    except (TypeError, ValueError):
        return 0


def header_image_url(value: Any) -> Optional[str]:
    """Resolve a header image setting value to a URL; "remove-header" hides it."""
    if not value or value == "remove-header":
        return None
    return str(value)


class UploadControl(CustomizeControl):
    """
    Generic file uploader bound to a URL setting.

    Configuration:
        mime_type: Media library filter ("image", "audio", ... or "" for any)
        button_labels: Overrides for any of the default button labels
    """

    type = "upload"
    mime_type = ""
    removed = ""
    context = None

    default_button_labels = {
        "select": "Select File",
        "change": "Change File",
        "default": "Default",
        "remove": "Remove",
        "placeholder": "No file selected",
        "frame_title": "Select File",
        "frame_button": "Choose File",
    }

    def __init__(self, manager, id: str, **args: Any):
        labels = args.pop("button_labels", None) or {}
        self.extensions: List[str] = []
        super().__init__(manager, id, **args)
        self.button_labels = dict(self.default_button_labels, **labels)

    def enqueue(self) -> None:
        self.manager.assets.enqueue_media()

    def default_attachment(self, url: str) -> Dict[str, Any]:
        """
        Build a stand-in attachment model for a default file URL.

        The model carries every key the client template reads, so a default
        that was never uploaded still renders as a current file.
        """
        url = str(url)
        kind = "image" if url[-3:] in IMAGE_EXTENSIONS else "document"
        attachment = {
            "id": 1,
            "url": url,
            "type": kind,
            "icon": self.manager.media.mime_type_icon(kind),
            "title": posixpath.basename(url),
        }
        if kind == "image":
            attachment["sizes"] = {"full": {"url": url}}
        return attachment

    def json(self) -> Dict[str, Any]:
        data = super().json()
        data["mime_type"] = self.mime_type
        data["button_labels"] = self.button_labels

        field = self.field
        if field is None:
            return data

        value = self.value()
        default = field.default

        if default:
            data["defaultAttachment"] = self.default_attachment(default)

        if value and default and value == default:
            data["attachment"] = data["defaultAttachment"]
        elif value:
            media = self.manager.media
            attachment_id = media.attachment_url_to_postid(value)
            if attachment_id:
                data["attachment"] = media.prepare_attachment_for_js(attachment_id)
            else:
                logger.debug(f"No attachment found for {self.id} value: {value}")

        return data

    def render_content(self) -> str:
        return ""

    def content_template(self) -> str:
        labels = {key: esc_html(label) for key, label in self.button_labels.items()}
        return f"""<label for="{{{{ data.settings['default'] }}}}-button">
    <# if ( data.label ) {{ #>
        <span class="customize-control-title">{{{{ data.label }}}}</span>
    <# }} #>
    <# if ( data.description ) {{ #>
        <span class="description customize-control-description">{{{{{{ data.description }}}}}}</span>
    <# }} #>
</label>

<# if ( data.attachment && data.attachment.id ) {{ #>
    <div class="current">
        <div class="container">
            <div class="attachment-media-view attachment-media-view-{{{{ data.attachment.type }}}} {{{{ data.attachment.orientation }}}}">
                <div class="thumbnail thumbnail-{{{{ data.attachment.type }}}}">
                    <# if ( 'image' === data.attachment.type && data.attachment.sizes && data.attachment.sizes.medium ) {{ #>
                        <img class="attachment-thumb" src="{{{{ data.attachment.sizes.medium.url }}}}" draggable="false" />
                    <# }} else if ( 'image' === data.attachment.type && data.attachment.sizes && data.attachment.sizes.full ) {{ #>
                        <img class="attachment-thumb" src="{{{{ data.attachment.sizes.full.url }}}}" draggable="false" />
                    <# }} else if ( 'audio' === data.attachment.type ) {{ #>
                        <img class="attachment-thumb type-icon" src="{{{{ data.attachment.icon }}}}" draggable="false" />
                        <p class="attachment-meta attachment-meta-title">&#8220;{{{{ data.attachment.title }}}}&#8221;</p>
                        <# if ( data.attachment.album || data.attachment.meta.album ) {{ #>
                        <p class="attachment-meta"><em>{{{{ data.attachment.album || data.attachment.meta.album }}}}</em></p>
                        <# }} #>
                        <# if ( data.attachment.artist || data.attachment.meta.artist ) {{ #>
                        <p class="attachment-meta">{{{{ data.attachment.artist || data.attachment.meta.artist }}}}</p>
                        <# }} #>
                    <# }} else {{ #>
                        <img class="attachment-thumb type-icon" src="{{{{ data.attachment.icon }}}}" draggable="false" />
                        <p class="attachment-title">{{{{ data.attachment.title }}}}</p>
                    <# }} #>
                </div>
            </div>
        </div>
    </div>
    <div class="actions">
        <button type="button" class="button remove-button">{labels['remove']}</button>
        <button type="button" class="button upload-button" id="{{{{ data.settings['default'] }}}}-button">{labels['change']}</button>
        <div style="clear:both"></div>
    </div>
<# }} else {{ #>
    <div class="current">
        <div class="container">
            <div class="placeholder">
                <div class="inner">
                    <span>
                        {labels['placeholder']}
                    </span>
                </div>
            </div>
        </div>
    </div>
    <div class="actions">
        <# if ( data.defaultAttachment ) {{ #>
            <button type="button" class="button default-button">{labels['default']}</button>
        <# }} #>
        <button type="button" class="button upload-button" id="{{{{ data.settings['default'] }}}}-button">{labels['select']}</button>
        <div style="clear:both"></div>
    </div>
<# }} #>"""


class ImageControl(UploadControl):
    """Uploader restricted to images."""

    type = "image"
    mime_type = "image"

    default_button_labels = {
        "select": "Select Image",
        "change": "Change Image",
        "remove": "Remove",
        "default": "Default",
        "placeholder": "No image selected",
        "frame_title": "Select Image",
        "frame_button": "Choose Image",
    }

    # Tabbed image pickers were replaced by the media modal; these remain
    # so older callers keep working.

    def prepare_control(self) -> None:
        pass

    def add_tab(self, id: str, label: str, callback: Callable[..., Any]) -> None:
        pass

    def remove_tab(self, id: str) -> None:
        pass

    def print_tab_image(self, url: str, thumbnail_url: Optional[str] = None) -> None:
        pass


class BackgroundImageControl(ImageControl):
    """Image control for the theme's ``background_image`` setting."""

    type = "background"
    control_id = "background_image"

    def __init__(self, manager, **args: Any):
        args.setdefault("label", "Background Image")
        args.setdefault("section", "background_image")
        super().__init__(manager, self.control_id, **args)

    def enqueue(self) -> None:
        super().enqueue()

        assets = self.manager.assets
        assets.localize_script(
            "customize-controls",
            "_wpCustomizeBackground",
            {"nonces": {"add": assets.create_nonce("background-add")}},
        )


class HeaderImageControl(ImageControl):
    """
    Header image picker with uploaded and suggested header choices.

    Binds two settings: ``header_image`` (the URL) under ``default`` and
    ``header_image_data`` (the chosen header's metadata) under ``data``.
    The header size the theme recommends is read from its ``custom-header``
    theme support.
    """

    type = "header"
    control_id = "header_image"
    get_url = None

    def __init__(self, manager, **args: Any):
        self.uploaded_headers: Optional[List[Dict[str, Any]]] = None
        self.default_headers: Optional[List[Dict[str, Any]]] = None
        args.setdefault("label", "Header Image")
        args.setdefault("fields", {"default": "header_image", "data": "header_image_data"})
        args.setdefault("section", "header_image")
        args.setdefault("removed", "remove-header")
        args.setdefault("get_url", header_image_url)
        super().__init__(manager, self.control_id, **args)

    def _header_support(self, key: str) -> int:
        return absint(self.manager.get_theme_support("custom-header", key))

    def enqueue(self) -> None:
        assets = self.manager.assets
        assets.enqueue_media()
        assets.enqueue_script("customize-views")

        self.prepare_control()

        assets.localize_script(
            "customize-views",
            "_wpCustomizeHeader",
            {
                "data": {
                    "width": self._header_support("width"),
                    "height": self._header_support("height"),
                    "flex-width": self._header_support("flex-width"),
                    "flex-height": self._header_support("flex-height"),
                    "currentImgSrc": self.get_current_image_src(),
                },
                "nonces": {
                    "add": assets.create_nonce("header-add"),
                    "remove": assets.create_nonce("header-remove"),
                },
                "uploads": self.uploaded_headers,
                "defaults": self.default_headers,
            },
        )

        super().enqueue()

    def prepare_control(self) -> None:
        """Load the suggested and previously uploaded headers."""
        custom_header = self.manager.custom_header
        if custom_header is None:
            return

        custom_header.process_default_headers()
        self.default_headers = custom_header.get_default_header_images()
        self.uploaded_headers = custom_header.get_uploaded_header_images()

    def get_current_image_src(self) -> Optional[str]:
        if self.get_url is None:
            return None
        return self.get_url(self.value())

    def print_header_image_template(self) -> str:
        return """<script type="text/template" id="tmpl-header-choice">
    <# if (data.random) { #>
        <button type="button" class="button display-options random">
            <span class="dashicons dashicons-randomize dice"></span>
            <# if ( data.type === 'uploaded' ) { #>
                Randomize uploaded headers
            <# } else if ( data.type === 'default' ) { #>
                Randomize suggested headers
            <# } #>
        </button>
    <# } else { #>
        <# if (data.type === 'uploaded') { #>
            <div class="dashicons dashicons-no close"></div>
        <# } #>
        <button type="button" class="choice thumbnail"
            data-customize-image-value="{{{data.header.url}}}"
            data-customize-header-image-data="{{JSON.stringify(data.header)}}">
            <span class="screen-reader-text">Set image</span>
            <img src="{{{data.header.thumbnail_url}}}" alt="{{{data.header.alt_text || data.header.description}}}">
        </button>
    <# } #>
</script>

<script type="text/template" id="tmpl-header-current">
    <# if (data.choice) { #>
        <# if (data.random) { #>
            <div class="placeholder">
                <div class="inner">
                    <span><span class="dashicons dashicons-randomize dice"></span>
                    <# if ( data.type === 'uploaded' ) { #>
                        Randomizing uploaded headers
                    <# } else if ( data.type === 'default' ) { #>
                        Randomizing suggested headers
                    <# } #>
                    </span>
                </div>
            </div>
        <# } else { #>
            <img src="{{{data.header.thumbnail_url}}}" alt="{{{data.header.alt_text || data.header.description}}}" tabindex="0"/>
        <# } #>
    <# } else { #>
        <div class="placeholder">
            <div class="inner">
                <span>
                    No image set
                </span>
            </div>
        </div>
    <# } #>
</script>"""

    def _size_hint(self) -> str:
        width = self._header_support("width")
        height = self._header_support("height")
        lead = "While you can crop images to your liking after clicking <strong>Add new image</strong>, "
        if width and height:
            return (
                f"{lead}your theme recommends a header size of "
                f"<strong>{width} &times; {height}</strong> pixels."
            )
        if width:
            return f"{lead}your theme recommends a header width of <strong>{width}</strong> pixels."
        return f"{lead}your theme recommends a header height of <strong>{height}</strong> pixels."

    def render_content(self) -> str:
        visibility = "" if self.get_current_image_src() else ' style="display:none" '
        return f"""{self.print_header_image_template()}
<div class="customize-control-content">
    <p class="customizer-section-intro">
        {self._size_hint()}
    </p>
    <div class="current">
        <span class="customize-control-title">
            Current header
        </span>
        <div class="container">
        </div>
    </div>
    <div class="actions">
        <button type="button"{visibility} class="button remove">Hide image</button>
        <button type="button" class="button new">Add new image</button>
        <div style="clear:both"></div>
    </div>
    <div class="choices">
        <span class="customize-control-title header-previously-uploaded">
            Previously uploaded
        </span>
        <div class="uploaded">
            <div class="list">
            </div>
        </div>
        <span class="customize-control-title header-default">
            Suggested
        </span>
        <div class="default">
            <div class="list">
            </div>
        </div>
    </div>
</div>"""
