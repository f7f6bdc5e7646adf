# =============================================================================
# File: membership/notifications/__init__.py
# Description: Account lifecycle email notifications
# =============================================================================
# EMPTY - use direct imports:
#   from membership.notifications.dispatcher import NotificationDispatcher
#   from membership.notifications.event_router import EmailAccountEventsRouter
