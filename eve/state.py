"""
Project state directory.

eve keeps small pieces of per-project state (the image name, the builder,
a default env-file) as plain files in a state directory, one file per
variable, named after the variable.
"""

import os

from .errors import StateError


class StateStore:
    """
    Key/value store backed by a directory of files.

    Args:
        root (str): The state directory
    """

    def __init__(self, root):
        self.root = root

    @classmethod
    def for_project(cls, path, state_dir):
        return cls(os.path.join(path, state_dir))

    def path_for(self, key):
        return os.path.join(self.root, key)

    def exists(self, key):
        return os.path.isfile(self.path_for(key))

    def read(self, key):
        """
        Read a state variable.

        Args:
            key (str): Variable name

        Returns:
            str: The stored value with surrounding whitespace removed

        Raises:
            StateError: If the variable is missing or unreadable
        """
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read().strip()
        except OSError as e:
            raise StateError(f"failed to read {key} variable from {path}: {e.strerror or e}") from e

    def write(self, key, value):
        """Store value under key, creating the state directory if needed."""
        path = self.path_for(key)
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(f"{value}\n")
        except OSError as e:
            raise StateError(f"failed to write {key} variable to {path}: {e.strerror or e}") from e


def load_or_initialize(store, key, default):
    """
    Return the stored value for key, persisting default if there is none.

    Args:
        store: Object with exists(key), read(key) and write(key, value)
        key (str): Variable name
        default (str): Value to store and return when key is not set

    Returns:
        str: The stored or default value
    """
    if store.exists(key):
        return store.read(key)
    store.write(key, default)
    return default
