#!/usr/bin/env python3
"""Test that the create-logs.py script wires up the command line entry point."""

import os
import unittest
from unittest.mock import patch
import importlib.util

# Import the script (note: filename has hyphens, not underscores)
SCRIPT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "create-logs.py")
spec = importlib.util.spec_from_file_location("create_logs", SCRIPT)
create_logs = importlib.util.module_from_spec(spec)
spec.loader.exec_module(create_logs)


class TestCreateLogsScript(unittest.TestCase):
    """Test cases for the create-logs.py wrapper script."""

    def test_exposes_cli_main(self):
        from osmcha_logs.cli import main
        self.assertIs(create_logs.main, main)

    @patch('osmcha_logs.cli.load_dotenv')
    @patch('osmcha_logs.cli.ReportBuilder')
    def test_help_without_dates(self, mock_builder, mock_load_dotenv):
        """Test that running without dates makes no requests."""
        with patch('sys.stdout'):
            code = create_logs.main([])

        self.assertEqual(code, 0)
        mock_builder.assert_not_called()


if __name__ == '__main__':
    unittest.main()
