import unittest
from unittest.mock import patch

import httpx

from librato_metrics.meta import get_meta_http_headers, get_user_agent


class TestMeta(unittest.TestCase):
    """Test cases for the meta module."""

    def test_get_user_agent_format(self):
        user_agent = get_user_agent()

        self.assertTrue(user_agent.startswith("librato-metrics/"))
        self.assertIn("Python/", user_agent)
        self.assertTrue(user_agent.endswith(f"httpx/{httpx.__version__}"))

    @patch("librato_metrics.meta.platform.system")
    @patch("librato_metrics.meta.platform.machine")
    @patch("librato_metrics.meta.platform.python_version")
    @patch("librato_metrics.meta.get_version")
    def test_get_user_agent_values(
        self, mock_get_version, mock_python_version, mock_machine, mock_system
    ):
        mock_get_version.return_value = "2.1.2"
        mock_system.return_value = "Linux"
        mock_machine.return_value = "x86_64"
        mock_python_version.return_value = "3.12.0"
        suffix = f" httpx/{httpx.__version__}"

        self.assertEqual(
            get_user_agent(),
            "librato-metrics/2.1.2 (Linux x86_64; Python/3.12.0)" + suffix,
        )

        mock_system.return_value = "Darwin"
        mock_machine.return_value = "arm64"
        self.assertEqual(
            get_user_agent("collector/0.1 (dev_id:foo)"),
            "collector/0.1 (dev_id:foo) librato-metrics/2.1.2 (Darwin arm_64; Python/3.12.0)"
            + suffix,
        )

        mock_get_version.return_value = None
        mock_machine.return_value = ""
        self.assertEqual(
            get_user_agent(),
            "librato-metrics/unknown (Darwin unknown; Python/3.12.0)" + suffix,
        )

    @patch("librato_metrics.meta.platform.machine")
    def test_get_user_agent_architecture_normalization(self, mock_machine):
        test_cases = [
            ("x86_64", "x86_64"),
            ("AMD64", "x86_64"),
            ("arm64", "arm_64"),
            ("aarch64", "arm_64"),
            ("i386", "x86"),
            ("custom_arch", "custom_arch"),
        ]

        for machine, expected in test_cases:
            with self.subTest(machine=machine):
                mock_machine.return_value = machine
                self.assertIn(f" {expected}; Python/", get_user_agent())

    def test_get_meta_http_headers(self):
        headers = get_meta_http_headers("app/1.0 (dev_id:x)")

        self.assertEqual(list(headers), ["User-Agent"])
        self.assertTrue(headers["User-Agent"].startswith("app/1.0 (dev_id:x) "))
