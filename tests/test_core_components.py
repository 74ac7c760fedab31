"""
Unit tests for core components that need no HTTP: configuration management,
wire models, validation and the error taxonomy.
"""

import logging
import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from coggle.api.folder import Folder
from coggle.config import ConfigManager, setup_logging
from coggle.errors import (
    CoggleError,
    InvalidOrganizationNameError,
    TextTooLongError,
    TransportError,
    ValidationError,
)
from coggle.models import DiagramResource, FolderResource, NodeResource, NodeUpdateProps, Offset
from coggle.validation import MAX_TEXT_LENGTH, validate_organization_name, validate_text


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.base_url, "https://coggle.it")
        self.assertIsNone(config.token)
        self.assertEqual(config.timeout, 30.0)
        self.assertEqual(config.log_level, "WARNING")

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
api:
  base_url: "http://localhost:8080"
  token: "secret"
  timeout: 5.0

logging:
  level: "DEBUG"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.base_url, "http://localhost:8080")
        self.assertEqual(config.token, "secret")
        self.assertEqual(config.get("api.timeout"), 5.0)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.get_section("api")["token"], "secret")

    def test_invalid_yaml_falls_back_to_defaults(self):
        """Test a broken file does not prevent startup."""
        with open(self.config_path, 'w') as f:
            f.write("api: [unclosed")

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.base_url, "https://coggle.it")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("api.base_url"), "https://coggle.it")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("api:\n  token: 'one'")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.token, "one")

        with open(self.config_path, 'w') as f:
            f.write("api:\n  token: 'two'")

        config.reload()
        self.assertEqual(config.token, "two")

    def test_setup_logging_applies_level(self):
        """Test logging is configured from the logging section."""
        with open(self.config_path, 'w') as f:
            f.write("logging:\n  level: 'debug'")

        setup_logging(ConfigManager(str(self.config_path)))
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

        setup_logging(ConfigManager(str(Path(self.temp_dir) / "missing.yaml")))
        self.assertEqual(logging.getLogger().level, logging.WARNING)


class TestWireModels(unittest.TestCase):
    """Test mapping between the server JSON and the wire models."""

    def test_id_is_renamed_on_decode_and_encode(self):
        resource = DiagramResource.model_validate({"_id": "d1", "title": "Plan"})

        self.assertEqual(resource.id, "d1")
        dumped = resource.model_dump(by_alias=True, exclude_none=True)
        self.assertEqual(dumped["_id"], "d1")
        self.assertNotIn("id", dumped)

    def test_node_resource_defaults(self):
        resource = NodeResource.model_validate({"_id": "n1"})

        self.assertEqual(resource.text, "")
        self.assertEqual(resource.offset, Offset(x=0, y=0))
        self.assertIsNone(resource.parent)
        self.assertEqual(resource.children, [])

    def test_nested_node_resource(self):
        resource = NodeResource.model_validate({
            "_id": "1",
            "children": [{"_id": "2", "children": [{"_id": "3", "children": None}]}]
        })

        self.assertEqual(resource.children[0].children[0].id, "3")
        self.assertEqual(resource.children[0].children[0].children, [])

    def test_offset_is_immutable(self):
        offset = Offset(x=1, y=2)
        with self.assertRaises(PydanticValidationError):
            offset.x = 5

    def test_offset_is_bounded_to_int32(self):
        self.assertEqual(Offset(x=2**31 - 1, y=-2**31).y, -2**31)

        for bad in ({"x": 2**31}, {"y": -2**31 - 1}, {"x": 2**40}):
            with self.assertRaises(PydanticValidationError):
                Offset(**bad)

    def test_update_props_reject_unknown_fields(self):
        with self.assertRaises(PydanticValidationError):
            NodeUpdateProps(txt="new")

    def test_update_props_omit_unset_fields(self):
        props = NodeUpdateProps(offset=Offset(x=3, y=4))

        self.assertEqual(props.model_dump(by_alias=True, exclude_none=True), {"offset": {"x": 3, "y": 4}})

    def test_null_access_list(self):
        resource = DiagramResource.model_validate({"_id": "d1", "myAccess": None})
        self.assertEqual(resource.my_access, [])


class TestFolder(unittest.TestCase):
    """Test the read-only folder tree."""

    def test_folder_tree(self):
        resource = FolderResource.model_validate({
            "_id": "f1",
            "name": "Work",
            "created_at": "2024-01-01",
            "my_access": ["read"],
            "children": [
                {"_id": "f2", "name": "Projects", "children": [{"_id": "f3", "name": "Archive"}]},
                {"_id": "f4", "name": "Notes", "children": None}
            ]
        })

        folder = Folder.from_resource(resource)

        self.assertEqual(folder.id, "f1")
        self.assertEqual(folder.created_at, "2024-01-01")
        self.assertEqual(folder.my_access, ["read"])
        self.assertEqual([f.name for f in folder.folders], ["Projects", "Notes"])
        self.assertEqual(folder.folders[0].folders[0].id, "f3")
        self.assertEqual(folder.folders[1].folders, [])


class TestValidation(unittest.TestCase):
    """Test client-side validation."""

    def test_text_at_limit_passes(self):
        self.assertEqual(validate_text("x" * MAX_TEXT_LENGTH), "x" * MAX_TEXT_LENGTH)

    def test_text_over_limit_fails(self):
        with self.assertRaises(TextTooLongError) as ctx:
            validate_text("x" * (MAX_TEXT_LENGTH + 1))
        self.assertEqual(ctx.exception.length, MAX_TEXT_LENGTH + 1)
        self.assertEqual(ctx.exception.limit, 3000)

    def test_organization_names(self):
        for name in ["abc", "coggle", "my-team", "x99"]:
            self.assertEqual(validate_organization_name(name), name)

        for name in ["", "ab", "ABC", "9abc", "-abc", "abc def", "abc_def"]:
            with self.assertRaises(InvalidOrganizationNameError):
                validate_organization_name(name)


class TestErrors(unittest.TestCase):
    """Test the error hierarchy."""

    def test_hierarchy(self):
        self.assertTrue(issubclass(TextTooLongError, ValidationError))
        self.assertTrue(issubclass(InvalidOrganizationNameError, ValidationError))
        self.assertTrue(issubclass(ValidationError, CoggleError))
        self.assertTrue(issubclass(ValidationError, ValueError))
        self.assertTrue(issubclass(TransportError, CoggleError))
        self.assertFalse(issubclass(TransportError, ValidationError))

    def test_transport_error_context(self):
        error = TransportError("failed", method="GET", endpoint="/api/1/diagrams", status_code=502)

        self.assertEqual(str(error), "failed")
        self.assertEqual(error.status_code, 502)
        self.assertEqual(error.endpoint, "/api/1/diagrams")


if __name__ == '__main__':
    unittest.main()
