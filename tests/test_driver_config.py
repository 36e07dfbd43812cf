import pathlib
import tempfile
import unittest

from envsense.config import DriverConfig, load_config
from envsense.errors import ConfigurationError, DeviceNotFound
from envsense.sensors.bme280 import Bme280Settings


class DriverConfigTest(unittest.TestCase):
    def test_defaults_from_empty_mapping(self):
        cfg = DriverConfig.from_mapping(None)
        self.assertEqual(cfg.bus, 1)
        self.assertEqual(cfg.address, 0x76)
        self.assertFalse(cfg.cache_calibration)
        self.assertEqual(cfg.settings, Bme280Settings())

    def test_load_yaml_section(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "sensor.yaml"
            path.write_text(
                "bme280:\n"
                "  bus: /dev/i2c-0\n"
                "  address: 0x77\n"
                "  cache_calibration: true\n"
                "  settings:\n"
                "    temp_oversampling: 2\n"
                "    filter: 4\n",
                encoding="utf-8",
            )

            cfg = DriverConfig.from_file(path)

        self.assertEqual(cfg.bus, "/dev/i2c-0")
        self.assertEqual(cfg.address, 0x77)
        self.assertTrue(cfg.cache_calibration)
        self.assertEqual(cfg.settings.temp_oversampling, 2)
        self.assertEqual(cfg.settings.filter, 4)
        self.assertEqual(cfg.settings.humidity_oversampling, 1)

    def test_hex_string_address(self):
        cfg = DriverConfig.from_mapping({"bme280": {"address": "0x77", "bus": "/dev/i2c-3"}})
        self.assertEqual(cfg.address, 0x77)
        self.assertEqual(cfg.bus, "/dev/i2c-3")

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config("/nonexistent/sensor.yaml"), {})
        self.assertEqual(DriverConfig.from_file("/nonexistent/sensor.yaml").address, 0x76)

    def test_non_mapping_document_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "sensor.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ConfigurationError):
                load_config(path)

    def test_unknown_setting_rejected(self):
        with self.assertRaises(ConfigurationError):
            DriverConfig.from_mapping({"bme280": {"settings": {"gain": 2}}})

    def test_out_of_range_setting_rejected(self):
        with self.assertRaises(ConfigurationError):
            DriverConfig.from_mapping({"bme280": {"settings": {"standby": 9}}})

    def test_bad_address_rejected(self):
        with self.assertRaises(ConfigurationError):
            DriverConfig.from_mapping({"bme280": {"address": "seventy"}})

    def test_bad_cache_flag_rejected(self):
        with self.assertRaises(ConfigurationError):
            DriverConfig.from_mapping({"bme280": {"cache_calibration": "yes"}})

    def test_build_with_missing_bus(self):
        cfg = DriverConfig(bus="/dev/i2c-does-not-exist")
        with self.assertRaises(DeviceNotFound):
            cfg.build()


if __name__ == "__main__":
    unittest.main()
