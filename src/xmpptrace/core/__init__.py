from .config import settings, get_settings, Settings
from .constants import *  # noqa: F401,F403
from .models import PacketRecord, TcpFlag

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "PacketRecord",
    "TcpFlag",
] + [name for name in globals().keys() if name.isupper()]
