from skillwatch.tracking.cooldown_store import ActiveCooldown, CooldownStore
from skillwatch.tracking.notifications import LiveToast, NotificationQueue

__all__ = ["ActiveCooldown", "CooldownStore", "LiveToast", "NotificationQueue"]
