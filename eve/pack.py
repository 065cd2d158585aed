"""
The ``eve pack`` command.

Packs the project into a container image using Cloud Native Buildpacks by
running ``pack build``. Missing flags are filled in from the project state
directory:

- IMAGE    image name, required when --image is not given
- ENV      default env-file, used when no --env-file is given
- BUILDER  builder image; the default builder is written here on first use
"""

import os
import re
import subprocess
import sys
from dataclasses import dataclass, field, replace

from .env import resolve
from .errors import PackError, StateError
from .logger import get_logger
from .state import load_or_initialize

DEFAULT_BUILDER = "heroku/buildpacks:20"
PACK_BINARY = "pack"
PACK_MIN_VERSION = "0.20.0"


@dataclass
class PackFlags:
    env: list = field(default_factory=list)
    env_files: list = field(default_factory=list)
    builder: str = ""
    image: str = ""


def prepare_flags(flags, store, default_builder=DEFAULT_BUILDER):
    """
    Fill in unset pack flags from the state directory.

    Args:
        flags (PackFlags): Flags given on the command line
        store (StateStore): Project state
        default_builder (str): Builder used and persisted when none is set

    Returns:
        PackFlags: A completed copy of flags

    Raises:
        StateError: If no image is given and IMAGE cannot be read
    """
    image = flags.image
    if not image:
        try:
            image = store.read("IMAGE")
        except StateError as e:
            raise StateError(f"failed to read IMAGE variable: {e}") from e

    # Fall back to the ENV file in the state directory
    env_files = list(flags.env_files)
    if not env_files and store.exists("ENV"):
        env_files = [store.path_for("ENV")]

    builder = flags.builder
    if not builder:
        builder = load_or_initialize(store, "BUILDER", default_builder)

    return replace(flags, image=image, env_files=env_files, builder=builder, env=list(flags.env))


def build_pack_args(image, builder, env):
    """
    Build the argument list passed to the pack binary.

    Args:
        image (str): Image name
        builder (str): Builder image
        env (dict): Build-time variables, emitted in iteration order

    Returns:
        list: Arguments for 'pack'
    """
    args = ["build", image, "--builder", builder]
    for key, value in env.items():
        args.extend(["--env", f"{key}={value}"])
    return args


def stream_command(cmd, out=None):
    """
    Run a command, echoing its stdout line by line.

    Args:
        cmd (list): Command and arguments
        out (file, optional): Where to echo output, defaults to sys.stdout

    Returns:
        int: The exit status (always 0)

    Raises:
        PackError: If the command cannot be started or exits non-zero
    """
    out = out if out is not None else sys.stdout
    try:
        proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, text=True, errors="replace")
    except OSError as e:
        raise PackError(f"error starting {cmd[0]}: {e}") from e

    # Leaving the block closes the pipe and reaps the child
    with proc:
        try:
            for line in proc.stdout:
                out.write(line)
            returncode = proc.wait()
        except KeyboardInterrupt:
            proc.terminate()
            proc.wait()
            raise PackError(f"{cmd[0]} interrupted", returncode=proc.returncode)

    if returncode != 0:
        get_logger().errorf("error: %s exited with status %d", cmd[0], returncode)
        raise PackError(f"error waiting for {cmd[0]}: exit status {returncode}", returncode=returncode)
    return returncode


def run_pack(flags, store, lookup=os.environ.get, runner=None,
             default_builder=DEFAULT_BUILDER, pack_binary=PACK_BINARY):
    """
    Pack the project into a container image.

    Args:
        flags (PackFlags): Flags given on the command line
        store (StateStore): Project state
        lookup (callable): key -> value or None, used for bare env keys
        runner (callable, optional): Executes the command list, defaults
            to stream_command
        default_builder (str): Builder used when none is set
        pack_binary (str): The pack executable

    Returns:
        int: 0 on success

    Raises:
        EveError: If state is missing, an env-file is unreadable or pack fails
    """
    runner = runner or stream_command
    flags = prepare_flags(flags, store, default_builder)
    env = resolve(flags.env_files, flags.env, lookup)

    cmd = [pack_binary] + build_pack_args(flags.image, flags.builder, env)
    get_logger().debugf("running: %s", " ".join(cmd))
    runner(cmd)
    return 0


def _version_at_least(version, minimum):
    version_parts = list(map(int, version.split(".")))
    min_version_parts = list(map(int, minimum.split(".")))

    # Compare version components
    for i in range(len(min_version_parts)):
        if i >= len(version_parts):
            return False
        if version_parts[i] < min_version_parts[i]:
            return False
        if version_parts[i] > min_version_parts[i]:
            break
    return True


def is_pack_installed(pack_binary=PACK_BINARY):
    """
    Check if pack is installed and meets the minimum version requirement.

    Returns:
        tuple: (bool, str) - Whether pack is installed and meets requirements,
               and the installed version string
    """
    try:
        result = subprocess.run([pack_binary, "--version"],
                                capture_output=True, text=True, check=False)
    except OSError:
        return False, None
    if result.returncode != 0:
        return False, None

    # Extract version number, e.g. "0.32.1+git-b14250b.build-5241"
    match = re.search(r"(\d+\.\d+\.\d+)", result.stdout)
    if not match:
        return False, None

    version = match.group(1)
    return _version_at_least(version, PACK_MIN_VERSION), version
