# =============================================================================
# File: membership/user_account/ports/__init__.py
# Description: Ports directory for UserAccount domain
# =============================================================================
# EMPTY - use direct imports:
#   from membership.user_account.ports.user_account_repository_port import UserAccountRepositoryPort
