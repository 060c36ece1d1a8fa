"""Public exports for completion notifier components."""

from .chime import synthesize_chime
from .config import NotifierConfig, NotifierConfigurationError
from .output import NotifierError, SoundDeviceAudioOutput
from .service import BellNotifier, NotificationService, build_notifier

__all__ = [
    "BellNotifier",
    "NotificationService",
    "NotifierConfig",
    "NotifierConfigurationError",
    "NotifierError",
    "SoundDeviceAudioOutput",
    "build_notifier",
    "synthesize_chime",
]
