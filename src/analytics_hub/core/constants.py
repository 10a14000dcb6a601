"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Reserved role names
SUPER_ADMIN_ROLE = "Super Admin"
ADMIN_ROLE = "Admin"
EDITOR_ROLE = "Editor"
VIEWER_ROLE = "Viewer"

# Permission names are "<resource>.<action>"
PERMISSION_SEPARATOR = "."

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_ROLE_NAME_LENGTH = 100
MAX_PERMISSION_NAME_LENGTH = 150
MAX_PERMISSION_RESOURCE_LENGTH = 100
MAX_PERMISSION_ACTION_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 255
MAX_MENU_TITLE_LENGTH = 100
MAX_MENU_SLUG_LENGTH = 100
MAX_MENU_PATH_LENGTH = 255
MAX_MENU_ICON_LENGTH = 100

# Menu tree
MAX_MENU_DEPTH = 3
ROOT_MENU_LEVEL = 1
