"""
Build-time environment variable resolution.

Variables come from env-files and from inline specs given on the command
line. Each spec is either ``KEY=VALUE`` or a bare ``KEY`` whose value is
taken from the current environment when the spec is applied. Env-files
hold one spec per line; blank lines are skipped. There is no comment
syntax and no quoting.

Precedence, lowest to highest:
  1. env-files, in the order given (later files win)
  2. inline specs, in the order given
"""

import os

from .errors import EnvFileError


def add_env_var(env, item, lookup=os.environ.get):
    """
    Apply a single env spec to env.

    The spec is split on the first '=' only, so values may contain '='.
    A bare key is resolved through lookup; a missing variable becomes
    an empty string.

    Args:
        env (dict): Mapping to update in place
        item (str): 'KEY=VALUE' or 'KEY'
        lookup (callable): key -> value or None

    Returns:
        dict: The updated mapping
    """
    key, sep, value = item.partition("=")
    if sep:
        env[key] = value
    else:
        ambient = lookup(key)
        env[key] = ambient if ambient is not None else ""
    return env


def parse_env_file(filename, lookup=os.environ.get):
    """
    Parse an env-file into a mapping.

    Args:
        filename (str): Path to the env-file
        lookup (callable): key -> value or None, used for bare keys

    Returns:
        dict: Variables defined by the file

    Raises:
        EnvFileError: If the file cannot be read
    """
    path = os.path.normpath(filename)
    try:
        # Lines end at '\n' only; undecodable bytes are carried through as-is
        with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
            content = f.read()
    except OSError as e:
        reason = e.strerror or str(e)
        raise EnvFileError(filename, f"open {filename}: {reason}") from e

    out = {}
    for line in content.split("\n"):
        line = line.strip()
        if not line:
            continue
        add_env_var(out, line, lookup)
    return out


def resolve(env_files, env_vars, lookup=os.environ.get):
    """
    Merge env-files and inline specs into one mapping.

    Inline specs are applied after every env-file so they always
    override file values. An unreadable file aborts the whole resolution.

    Args:
        env_files (list): Env-file paths, in precedence order
        env_vars (list): Inline 'KEY=VALUE' or 'KEY' specs
        lookup (callable): key -> value or None, used for bare keys

    Returns:
        dict: Resolved variables

    Raises:
        EnvFileError: If any env-file cannot be read
    """
    env = {}
    for env_file in env_files:
        env.update(parse_env_file(env_file, lookup))
    for env_var in env_vars:
        add_env_var(env, env_var, lookup)
    return env


parse_env = resolve
