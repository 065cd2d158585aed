"""
eve

Packs projects into container images with Cloud Native Buildpacks by
driving the pack CLI, with build-time variables taken from env-files,
the command line and the project state directory.
"""

__version__ = "0.1.0"

from .env import resolve, parse_env, parse_env_file, add_env_var
from .errors import EveError, EnvFileError, EnvParseError, StateError, PackError, ConfigError
from .logger import Logger, Level, get_logger, set_logger
from .state import StateStore, load_or_initialize
from .pack import PackFlags, prepare_flags, build_pack_args, run_pack, DEFAULT_BUILDER
