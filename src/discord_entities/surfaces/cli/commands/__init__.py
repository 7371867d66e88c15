from .inspect import register_inspect_commands
from .utils import get_version, raise_exit, read_json_file, require_config

__all__ = [
    "get_version",
    "raise_exit",
    "read_json_file",
    "register_inspect_commands",
    "require_config",
]
