"""
win_toast - Windows toast notifikace z Pythonu.

    from win_toast import Notification, Action, Audio, push

    push(Notification(
        app_id="Example App",
        title="Moje notifikace",
        message="Něco důležitého se stalo...",
        actions=[
            Action("protocol", "Jsem tlačítko", ""),
            Action("protocol", "Já taky!", ""),
        ],
    ))
"""

from .builder import ToastTemplate, build_xml
from .delivery import PowerShellDelivery
from .errors import (
    BuildError,
    ConfigError,
    DeliveryError,
    InvalidAudioError,
    InvalidDurationError,
    ToastError,
)
from .notification import (
    Action,
    Audio,
    Duration,
    Notification,
    parse_audio,
    parse_duration,
    with_defaults,
)
from .notifier import ToastNotifier, push

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Audio",
    "BuildError",
    "ConfigError",
    "DeliveryError",
    "Duration",
    "InvalidAudioError",
    "InvalidDurationError",
    "Notification",
    "PowerShellDelivery",
    "ToastError",
    "ToastNotifier",
    "ToastTemplate",
    "build_xml",
    "parse_audio",
    "parse_duration",
    "push",
    "with_defaults",
]
