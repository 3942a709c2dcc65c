"""Cross-platform persistence for a single application configuration value.

Typical use::

    @dataclass
    class MyAppConfig:
        window_pos: Tuple[int, int] = (320, 280)

    config = ConfigCell.default(MyAppConfig)
    manager = AppConfigManager(config, "my-app", "my-org")
    manager.load()   # keeps the defaults if nothing was saved yet
    ...
    manager.save()
"""

from .cell import ConfigCell
from .errors import (
    AppConfigError,
    DeserializationFailed,
    DirectoryCreationFailed,
    InvalidIdentifier,
    ReadFailed,
    SerializationFailed,
    WriteFailed,
)
from .manager import CONFIG_FILENAME, AppConfigManager
from .paths import PlatformInfo, base_data_dir

__version__ = "0.1.0"

__all__ = [
    "AppConfigError",
    "AppConfigManager",
    "CONFIG_FILENAME",
    "ConfigCell",
    "DeserializationFailed",
    "DirectoryCreationFailed",
    "InvalidIdentifier",
    "PlatformInfo",
    "ReadFailed",
    "SerializationFailed",
    "WriteFailed",
    "base_data_dir",
]
