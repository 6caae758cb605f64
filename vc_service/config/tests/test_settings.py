from unittest import TestCase

from ..base import SettingsError
from ..settings import MASKED_VALUE, Settings


class TestSettings(TestCase):
    def setUp(self):
        self.test_settings = {"admin.port": "8020", "admin.enabled": "false"}
        self.test_instance = Settings(self.test_settings)

    def test_settings_init(self):
        for key in self.test_settings:
            assert key in self.test_instance
            assert self.test_instance[key] == self.test_settings[key]
        assert len(self.test_instance) == 2
        assert Settings()
        with self.assertRaises(KeyError):
            self.test_instance["missing"]
        with self.assertRaises(TypeError):
            self.test_instance[0]

    def test_get_formats(self):
        assert self.test_instance.get_int("admin.port") == 8020
        assert self.test_instance.get_bool("admin.enabled") is False
        assert self.test_instance.get_bool("missing") is None
        assert self.test_instance.get_str("missing", default="x") == "x"
        assert self.test_instance.get_int("missing", default=80) == 80
        assert self.test_instance.get_value("missing", "admin.port") == "8020"

        self.test_instance["admin.port"] = "eighty"
        with self.assertRaises(SettingsError):
            self.test_instance.get_int("admin.port")

    def test_set_value(self):
        with self.assertRaises(TypeError):
            self.test_instance[0] = 1
        with self.assertRaises(ValueError):
            self.test_instance[""] = 1

        self.test_instance["default_label"] = "Issuer"
        assert self.test_instance["default_label"] == "Issuer"
        assert "default_label=Issuer" in repr(self.test_instance)
        assert "default_label" not in self.test_settings

    def test_to_public_dict(self):
        settings = Settings(
            {
                "admin.admin_api_key": "secret",
                "admin.port": 8020,
                "credential.schema_files": ("person.json",),
                "credential.default_context": None,
            }
        )
        assert settings.to_public_dict(["admin.admin_api_key"]) == {
            "admin.admin_api_key": MASKED_VALUE,
            "admin.port": 8020,
            "credential.schema_files": ["person.json"],
            "credential.default_context": None,
        }
        assert settings.to_public_dict()["admin.admin_api_key"] == "secret"

        unset = Settings({"admin.admin_api_key": None})
        assert unset.to_public_dict(["admin.admin_api_key"]) == {
            "admin.admin_api_key": None
        }
