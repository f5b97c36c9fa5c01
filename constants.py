"""Constants used throughout the SQL snippet parameter tool"""

# Detection patterns
IDENTIFIER_PATTERN = r'((?:\b\w+\.)?\w+)'

BETWEEN_PATTERN = IDENTIFIER_PATTERN + r"\s+between\s+'([^']+)'\s+and\s+'([^']+)'"
IN_PATTERN = IDENTIFIER_PATTERN + r'\s+in\s*\(([^)]+)\)'
EQ_LIKE_PATTERN = IDENTIFIER_PATTERN + r"\s*(=|like)\s*\(?\s*'([^']*)'\s*\)?"

# Line comments
COMMENT_MARKER = '--'
COMMENT_PREFIX = '-- '

# Field label suffixes for the two rows of a BETWEEN clause
BETWEEN_FROM_SUFFIX = ' (From)'
BETWEEN_TO_SUFFIX = ' (To)'

# Month tables used when re-rendering date literals
SHORT_MONTHS = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
                'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']
FULL_MONTHS = ['JANUARY', 'FEBRUARY', 'MARCH', 'APRIL', 'MAY', 'JUNE',
               'JULY', 'AUGUST', 'SEPTEMBER', 'OCTOBER', 'NOVEMBER', 'DECEMBER']

DATE_SEPARATOR = '-'
ISO_DATE_FORMAT = '%Y-%m-%d'

# Renderer labels
TOGGLE_COMMENT_LABEL = 'Comment'
TOGGLE_UNCOMMENT_LABEL = 'Uncomment'

# Configuration
CONFIG_DIR = ".config/sqlparam"
CONFIG_FILE = "config.yaml"
BACKUP_SUFFIX = ".bak"
DEFAULT_LOG_LEVEL = "WARNING"

# Application metadata
APP_NAME = "SQL Snippet Parameters"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Re-parameterize stored SQL snippets without hand-editing the text"
