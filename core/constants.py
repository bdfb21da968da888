"""
Shared constants.

This module has no dependencies on models or services to avoid circular imports.
"""

# Maximum length for workout, program and exercise names
MAX_NAME_LENGTH = 200

# Maximum length for descriptions, notes and instructions
MAX_TEXT_LENGTH = 2000

# Calendar label for one day of an enrolled program
PROGRAM_DAY_LABEL = "{program_name} - Day {day_number}"
