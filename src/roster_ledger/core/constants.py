"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Reconciliation pass that the current seed list corresponds to.
CURRENT_SCHEMA_VERSION = "4"

BACKUP_FORMAT_VERSION = 1

KEY_ROSTER = "roster"
KEY_LEDGER = "ledger"
KEY_SELECTED_DATE = "selectedDate"
KEY_SCHEMA_VERSION = "schemaVersion"

# Flush order: the schema marker is always written last.
STATE_KEYS = (KEY_ROSTER, KEY_LEDGER, KEY_SELECTED_DATE, KEY_SCHEMA_VERSION)

ISO_DATE_FORMAT = "%Y-%m-%d"
