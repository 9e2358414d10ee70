"""
Shared constants for the puncher.
"""

from puncher import __version__

APP_NAME = "Kiho Worktime Puncher"
USER_AGENT = f"{APP_NAME} v{__version__}"

# Documentation: http://developers.kiho.fi/api
KIHO_API_URL = "https://v3.kiho.fi/api/v1/punch"
DEFAULT_HTTP_TIMEOUT = 30

STAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DISPLAY_FORMAT = "%d.%m.%Y %H:%M:%S"

# Recurring task menu
GROUP_DELIMITER = "|"
UNCLASSIFIED = "(unclassified)"
GROUP_KEYS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Cost centres
DEFAULT_COST_CENTRE = 901184  # 'Tuotekehitys Yleinen'
ISO27_COST_CENTRE = 892621  # 'ISO27001 2024'

# Config locations
CONFIG_DIR_NAME = ".kiho-puncher"
CONFIG_FILE_NAME = "config.yaml"
CONFIG_ENV_VAR = "PUNCHER_CONFIG"
API_KEY_ENV_VAR = "KIHO_API_KEY"
