from .deadline_service import DeadlineNotificationService, NotificationPreferences, priority_for

__all__ = ["DeadlineNotificationService", "NotificationPreferences", "priority_for"]
