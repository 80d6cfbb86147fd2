"""
Username list loading for the changeset discussion report.

The list of OSM users to report on lives in a JSON file, either as a bare
array of usernames or as an object with a ``usernames`` array.
"""

import json
import logging
import os
from typing import List

from .errors import ConfigError

# Default usernames file path (relative to the working directory)
DEFAULT_USERNAMES_FILE = "usernames.json"


class UsernameConfig:
    """Loads and cleans the list of usernames to report on."""

    def __init__(self, config_path: str = DEFAULT_USERNAMES_FILE):
        """
        Initialize the UsernameConfig loader.

        Args:
            config_path: Path to the usernames JSON file

        Raises:
            ConfigError: If the file is missing, unreadable or has the wrong shape
        """
        self.config_path = config_path
        self.usernames: List[str] = []
        self._load()

    def _load(self) -> None:
        """Load the username list from file."""
        if not os.path.exists(self.config_path):
            logging.error(f"Usernames file not found: {self.config_path}")
            raise ConfigError(f"Usernames file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logging.error(f"Could not load usernames from {self.config_path}: {e}")
            raise ConfigError(f"Could not load usernames from {self.config_path}: {e}") from e

        if isinstance(data, dict):
            data = data.get('usernames')
        if not isinstance(data, list):
            raise ConfigError(f"{self.config_path} must contain a list of usernames")

        self.usernames = self._clean(data)
        logging.info(f"Loaded {len(self.usernames)} username(s) from {self.config_path}")

    @staticmethod
    def _clean(entries: list) -> List[str]:
        """Strip entries and drop blanks, non-strings and duplicates (first one wins)."""
        usernames = []
        for entry in entries:
            if not isinstance(entry, str) or not entry.strip():
                logging.warning(f"Ignoring invalid username entry: {entry!r}")
                continue
            username = entry.strip()
            if username in usernames:
                logging.debug(f"Ignoring duplicate username: {username}")
                continue
            usernames.append(username)
        return usernames

    def get_usernames(self) -> List[str]:
        """
        Get the usernames in file order.

        Returns:
            A copy of the username list
        """
        return list(self.usernames)
