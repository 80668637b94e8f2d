"""
Tests for settings and the generic fields-API control
"""

import unittest

from customizer.fields import FieldsControl
from customizer.manager import CustomizeManager


class TestField(unittest.TestCase):
    """Test Field value resolution."""

    def setUp(self):
        self.manager = CustomizeManager()
        self.field = self.manager.add_setting("blogname", default="My Site")

    def test_value_defaults(self):
        """Test value falls back to the default."""
        self.assertEqual(self.field.value(), "My Site")

    def test_stored_value(self):
        """Test stored value wins over the default."""
        self.manager.set_value("blogname", "Stored")
        self.assertEqual(self.field.value(), "Stored")
        self.assertFalse(self.field.dirty)

    def test_post_value_is_sanitized(self):
        """Test previewed value goes through filter and callback."""
        field = self.manager.add_setting("title", sanitize_callback=str.strip)
        self.manager.hooks.add_filter("customize_sanitize_title", lambda value: value.upper())
        self.manager.set_value("title", "saved")
        self.manager.set_post_value("title", "  preview  ")

        self.assertEqual(field.value(), "PREVIEW")
        self.assertTrue(field.dirty)

    def test_json(self):
        """Test setting export."""
        self.assertEqual(
            self.field.json(),
            {"value": "My Site", "transport": "refresh", "dirty": False},
        )


class TestFieldsControl(unittest.TestCase):
    """Test generic control field binding."""

    def setUp(self):
        self.manager = CustomizeManager()
        self.manager.add_setting("blogname")
        self.manager.add_setting("tagline")

    def _control(self, id="blogname", **args):
        return FieldsControl("fields", id, manager=self.manager, **args)

    def test_defaults_to_id_as_field(self):
        control = self._control()
        self.assertEqual(list(control.fields), ["default"])
        self.assertEqual(control.field.id, "blogname")

    def test_string_fields(self):
        control = self._control("site", fields="tagline")
        self.assertEqual(control.field.id, "tagline")

    def test_list_fields(self):
        control = self._control("site", fields=["blogname", "tagline"])
        self.assertEqual(set(control.fields), {"0", "1"})
        self.assertIsNone(control.field)

    def test_mapping_fields(self):
        control = self._control("site", fields={"default": "blogname", "extra": "tagline"})
        self.assertEqual(control.fields["extra"].id, "tagline")

    def test_unknown_field_fails_capabilities(self):
        control = self._control("missing")
        self.assertIsNone(control.field)
        self.assertFalse(control.check_capabilities())
        self.assertEqual(control.maybe_render(), "")

    def test_unknown_arguments_ignored(self):
        control = self._control(label="Title", bogus="x")
        self.assertEqual(control.label, "Title")
        self.assertNotIn("bogus", control.__dict__)

    def test_link(self):
        control = self._control()
        self.assertEqual(str(control.get_link()), 'data-customize-setting-link="blogname"')
        self.assertEqual(str(control.get_link("missing")), "")

    def test_input_attrs_escaped(self):
        control = self._control(input_attrs={"placeholder": 'Say "hi"', "maxlength": 20})
        self.assertEqual(
            str(control.input_attrs_html()),
            'placeholder="Say &#34;hi&#34;" maxlength="20"',
        )

    def test_capability_check(self):
        manager = CustomizeManager(capabilities=["edit_posts"])
        manager.add_setting("blogname")
        control = FieldsControl("fields", "blogname", manager=manager)
        self.assertFalse(control.check_capabilities())

    def test_instance_numbers_increase(self):
        first = self._control()
        second = self._control()
        self.assertLess(first.instance_number, second.instance_number)
