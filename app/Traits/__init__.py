from .ChangeTrackable import ChangeTracker, ChangeTrackableMixin, listen_for_change_tracking
from .Uuidable import UuidableMixin, UuidConfigurationError, listen_for_uuids

__all__ = [
    "ChangeTracker",
    "ChangeTrackableMixin",
    "listen_for_change_tracking",
    "UuidableMixin",
    "UuidConfigurationError",
    "listen_for_uuids",
]
