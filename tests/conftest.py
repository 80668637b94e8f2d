"""
Pytest configuration and fixtures
"""

import pytest
import yaml
from PIL import Image

from customizer.manager import CustomizeManager


@pytest.fixture
def manager():
    """Manager with a few common settings registered"""
    manager = CustomizeManager(
        theme_support={"custom-header": {"width": 1200, "height": 280}},
        pages=[
            {"id": 2, "title": "About"},
            {"id": 3, "title": "Team", "parent": 2},
            {"id": 4, "title": "Contact"},
        ],
        nonce_secret="test-secret",
    )
    manager.add_setting("blogname", default="My Site")
    manager.add_setting("show_tagline", default=False)
    manager.add_setting("layout", default="wide")
    manager.add_setting("accent_color", default="1e73be")
    manager.add_setting("logo", default="")
    manager.add_setting("header_image", default="")
    manager.add_setting("header_image_data", default="")
    manager.add_setting("background_image", default="")
    manager.add_setting("page_on_front", default=0)
    return manager


@pytest.fixture
def png_file(tmp_path):
    """A 640x480 PNG on disk"""
    path = tmp_path / "sunset.png"
    Image.new("RGB", (640, 480), "orange").save(path)
    return path


@pytest.fixture
def sample_config():
    """Sample screen definition for testing"""
    return {
        "theme_support": {"custom-header": {"width": 1000, "height": 250}},
        "pages": [{"id": 2, "title": "About"}, {"id": 4, "title": "Contact"}],
        "settings": {
            "blogname": {"default": "My Site", "transport": "postMessage"},
            "accent_color": {"default": "#1e73be"},
            "layout": {"default": "wide"},
            "logo": {"default": "https://example.com/logo.png"},
            "header_image": {},
            "header_image_data": {},
        },
        "values": {"blogname": "Hello World"},
        "media": [
            {"url": "https://example.com/uploads/team.jpg", "meta": {"width": 800, "height": 600}},
        ],
        "widgets": {
            "text-2": {"name": "Text", "form": "<p>Text widget</p>", "rendered": True},
        },
        "control_types": ["color", "upload", "image"],
        "controls": {
            "blogname": {"label": "Site Title", "section": "title_tagline"},
            "accent_color": {"type": "color", "label": "Accent Color", "priority": 20},
            "layout": {
                "type": "radio",
                "label": "Layout",
                "choices": {"wide": "Wide", "boxed": "Boxed"},
                "priority": 30,
            },
            "logo": {"type": "image", "label": "Logo", "priority": 40},
            "header_image": {"type": "header", "priority": 50},
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    config_path = tmp_path / "theme.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
