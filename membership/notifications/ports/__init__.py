# =============================================================================
# File: membership/notifications/ports/__init__.py
# Description: Ports directory for Notifications
# =============================================================================
# EMPTY - use direct imports:
#   from membership.notifications.ports.message_formatter_port import MessageFormatterPort
#   from membership.notifications.ports.message_delivery_port import MessageDeliveryPort
