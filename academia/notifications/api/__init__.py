from academia.notifications.api.notifications import NotificationsController

__all__ = ["NotificationsController"]
