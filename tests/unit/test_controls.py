"""
Tests for the base customizer control - rendering, aliases and hooks
"""

from unittest.mock import Mock

import pytest

from customizer.controls.base import CustomizeControl, dropdown_pages


class TestRenderWrapper:
    """Test the <li> wrapper"""

    def test_wrapper_id_and_class(self, manager):
        control = CustomizeControl(manager, "blogname", label="Site Title")
        html = control.get_content()
        assert html.startswith(
            '<li id="customize-control-blogname" class="customize-control customize-control-text">'
        )
        assert html.endswith("</li>")

    def test_wrapper_id_strips_brackets(self, manager):
        manager.add_setting("nav_menu_locations[primary]")
        control = CustomizeControl(manager, "nav_menu_locations[primary]", type="select")
        assert 'id="customize-control-nav_menu_locations-primary"' in control.render()
        assert "customize-control-select" in control.render()


class TestRenderContent:
    """Test the type switch in render_content()"""

    def test_text_input(self, manager):
        control = CustomizeControl(
            manager,
            "blogname",
            label="Site Title",
            description="<em>Shown in the header</em>",
            input_attrs={"maxlength": 60},
        )
        html = control.render_content()
        assert '<span class="customize-control-title">Site Title</span>' in html
        assert (
            '<span class="description customize-control-description"><em>Shown in the header</em></span>'
            in html
        )
        assert (
            '<input type="text" maxlength="60" value="My Site" data-customize-setting-link="blogname" />'
            in html
        )

    def test_other_input_types(self, manager):
        manager.add_setting("contact_email", default="a@example.com")
        control = CustomizeControl(manager, "contact_email", type="email")
        assert '<input type="email" value="a@example.com"' in control.render_content()

    def test_label_is_escaped(self, manager):
        control = CustomizeControl(manager, "blogname", label="Tom & Jerry")
        assert "Tom &amp; Jerry" in control.render_content()

    def test_value_is_escaped(self, manager):
        manager.set_value("blogname", '"quoted" <site>')
        control = CustomizeControl(manager, "blogname")
        assert 'value="&#34;quoted&#34; &lt;site&gt;"' in control.render_content()

    def test_checkbox_unchecked(self, manager):
        control = CustomizeControl(manager, "show_tagline", type="checkbox", label="Show Tagline")
        html = control.render_content()
        assert '<input type="checkbox" value="" data-customize-setting-link="show_tagline" />' in html
        assert "Show Tagline" in html
        assert "checked" not in html

    def test_checkbox_checked(self, manager):
        manager.set_value("show_tagline", True)
        control = CustomizeControl(manager, "show_tagline", type="checkbox")
        assert (
            '<input type="checkbox" value="1" data-customize-setting-link="show_tagline" checked="checked" />'
            in control.render_content()
        )

    def test_radio(self, manager):
        control = CustomizeControl(
            manager,
            "layout",
            type="radio",
            label="Layout",
            choices={"wide": "Wide", "boxed": "Boxed"},
        )
        html = control.render_content()
        assert (
            '<input type="radio" value="wide" name="_customize-radio-layout" '
            'data-customize-setting-link="layout" checked="checked" />' in html
        )
        assert (
            '<input type="radio" value="boxed" name="_customize-radio-layout" '
            'data-customize-setting-link="layout" />' in html
        )
        assert "Boxed<br/>" in html

    def test_radio_without_choices_renders_nothing(self, manager):
        control = CustomizeControl(manager, "layout", type="radio", label="Layout")
        assert control.render_content() == ""

    def test_select(self, manager):
        manager.set_value("layout", "boxed")
        control = CustomizeControl(
            manager, "layout", type="select", choices={"wide": "Wide", "boxed": "Boxed"}
        )
        html = control.render_content()
        assert '<select data-customize-setting-link="layout">' in html
        assert '<option value="wide">Wide</option>' in html
        assert '<option value="boxed" selected="selected">Boxed</option>' in html

    def test_select_without_choices_renders_nothing(self, manager):
        control = CustomizeControl(manager, "layout", type="select")
        assert control.render_content() == ""

    def test_textarea(self, manager):
        manager.set_value("blogname", "<b>bold</b>")
        control = CustomizeControl(manager, "blogname", type="textarea")
        assert (
            '<textarea rows="5" data-customize-setting-link="blogname">&lt;b&gt;bold&lt;/b&gt;</textarea>'
            in control.render_content()
        )

    def test_dropdown_pages(self, manager):
        manager.set_value("page_on_front", 3)
        control = CustomizeControl(
            manager, "page_on_front", type="dropdown-pages", label="Front page"
        )
        html = control.render_content()
        assert html.startswith(
            '<label class="customize-control-select"><span class="customize-control-title">Front page</span> '
        )
        assert (
            '<select data-customize-setting-link="page_on_front" '
            'name="_customize-dropdown-pages-page_on_front"' in html
        )
        assert '<option value="0">&mdash; Select &mdash;</option>' in html
        assert '<option class="level-1" value="3" selected="selected">&nbsp;&nbsp;&nbsp;Team</option>' in html


class TestDropdownPages:
    """Test the page dropdown helper"""

    def test_no_pages(self):
        assert dropdown_pages([], "pages") == ""

    def test_children_follow_parent(self):
        pages = [
            {"id": 1, "title": "Blog"},
            {"id": 5, "title": "News", "parent": 9},
            {"id": 9, "title": "Company"},
        ]
        html = dropdown_pages(pages, "pages")
        assert html.index("Company") < html.index("News")
        assert '<option class="level-1" value="5">&nbsp;&nbsp;&nbsp;News</option>' in html

    def test_none_option(self):
        html = dropdown_pages([{"id": 1, "title": "Blog"}], "pages", show_option_none="None", option_none_value="0")
        assert '<option value="0">None</option>' in html

    def test_orphaned_pages_are_top_level(self):
        pages = [
            {"id": 5, "title": "Orphan", "parent": 99},
            {"id": 6, "title": "Loop", "parent": 6},
            {"id": 7, "title": "Child", "parent": 5},
        ]
        html = dropdown_pages(pages, "pages")
        assert '<option class="level-0" value="5">Orphan</option>' in html
        assert '<option class="level-0" value="6">Loop</option>' in html
        assert '<option class="level-1" value="7">&nbsp;&nbsp;&nbsp;Child</option>' in html


class TestJson:
    """Test the JSON export"""

    def test_keys(self, manager):
        control = CustomizeControl(
            manager, "blogname", label="Site Title", section="title_tagline", screen="site_identity"
        )
        data = control.json()

        assert data["settings"] == {"default": "blogname"}
        assert data["type"] == "text"
        assert data["label"] == "Site Title"
        assert data["section"] == "title_tagline"
        assert data["panel"] == "site_identity"
        assert "screen" not in data
        assert data["active"] is True
        assert data["content"].startswith('<li id="customize-control-blogname"')
        assert data["instanceNumber"] == control.instance_number

    def test_active_filter(self, manager):
        manager.hooks.add_filter("customize_control_active", lambda active, control: False, 10, 2)
        control = CustomizeControl(manager, "blogname")
        assert control.active() is False
        assert control.json()["active"] is False

    def test_custom_active_callback(self, manager):
        control = CustomizeControl(manager, "blogname", active_callback=lambda c: False)
        assert control.active() is False

    def test_deprecated_to_json_is_noop(self, manager):
        control = CustomizeControl(manager, "blogname")
        assert control.to_json() is None


class TestAliases:
    """Test backward compatible attribute names"""

    def test_settings_reads_fields(self, manager):
        control = CustomizeControl(manager, "blogname")
        assert control.settings is control.fields
        assert control.setting is control.field

    def test_settings_argument(self, manager):
        control = CustomizeControl(manager, "site", settings="blogname")
        assert control.field.id == "blogname"

    def test_setting_argument(self, manager):
        control = CustomizeControl(manager, "site", setting="layout")
        assert control.field.id == "layout"

    def test_assigning_aliases(self, manager):
        control = CustomizeControl(manager, "blogname")
        control.settings = {"default": "layout"}
        assert control.fields["default"].id == "layout"

        control.setting = "blogname"
        assert control.field.id == "blogname"

    def test_unknown_attribute_is_none(self, manager):
        control = CustomizeControl(manager, "blogname")
        assert control.no_such_property is None

    def test_private_attribute_raises(self, manager):
        control = CustomizeControl(manager, "blogname")
        with pytest.raises(AttributeError):
            control._no_such_property

    def test_has_alias(self, manager):
        control = CustomizeControl(manager, "blogname")
        assert control.has_alias("settings") is True
        assert control.has_alias("setting") is True
        assert control.has_alias("label") is False

        missing = CustomizeControl(manager, "not_registered")
        assert missing.has_alias("setting") is False


class TestHooks:
    """Test hooks registered by the control"""

    def test_render_fires_control_action_once(self, manager):
        listener = Mock()
        manager.hooks.add_action("customize_render_control", listener)
        first = CustomizeControl(manager, "blogname")
        CustomizeControl(manager, "layout")

        first.maybe_render()

        listener.assert_called_once_with(first)

    def test_render_fires_id_action(self, manager):
        listener = Mock()
        manager.hooks.add_action("customize_render_control_blogname", listener)
        control = CustomizeControl(manager, "blogname")

        control.maybe_render()

        listener.assert_called_once_with(control)

    def test_hooks_registered(self, manager):
        CustomizeControl(manager, "blogname")
        assert manager.hooks.has_action("fields_render_control_customize")
        assert manager.hooks.has_action("fields_render_control_customize_blogname")
        assert manager.hooks.has_filter("fields_control_active_customize_blogname")

    def test_remove_hooks(self, manager):
        listener = Mock()
        manager.hooks.add_action("customize_render_control", listener)
        control = CustomizeControl(manager, "blogname")

        control.remove_hooks()
        manager.hooks.do_action("fields_render_control_customize", control)

        listener.assert_not_called()
        assert not manager.hooks.has_action("fields_render_control_customize_blogname")
        assert not manager.hooks.has_filter("fields_control_active_customize_blogname")


class TestTemplates:
    """Test client template output"""

    def test_print_template_wraps_content_template(self, manager):
        control = CustomizeControl(manager, "blogname")
        assert control.print_template() == (
            '<script type="text/html" id="tmpl-customize-control-text-content">\n\n</script>'
        )
