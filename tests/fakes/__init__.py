# Test doubles for notification ports
