"""
Service layer.

``validator`` holds the account type rule, ``store`` the persistence
boundary, and ``account_service``/``category_service`` the
orchestration used by the API handlers.
"""
