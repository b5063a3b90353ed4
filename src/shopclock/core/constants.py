"""Constants and defaults.

Note: Keep storage keys here; renaming one orphans data already written under the old key.
"""

DEFAULT_NAMESPACE = "default"
NAMESPACE_HEX_LENGTH = 12

STAFF_KEY_PREFIX = "att_staffs_v1_"
RECORDS_KEY_PREFIX = "att_records_v1_"

CURRENT_USER_KEY = "current_user_id_v1"
LAST_AUTO_BACKUP_KEY = "lastAutoBackupDate"
LOCAL_ACCOUNTS_KEY = "local_accounts_v1"
SECRET_KEY_PREFIX = "secret_v1"

OWNER_SECRET_SERVICE = "attendance.owner"
OWNER_SECRET_ACCOUNT = "owner_password_hash"
AUTH_SECRET_SERVICE = "attendance.auth"
FEDERATED_SECRET_ACCOUNT = "federated_user_id"

DEFAULT_STAFF_NAMES = ("Alice", "Bob", "Charlie")

BACKUP_PREFIX = "backup_"
BACKUP_SUFFIX = ".json"

QUARTER_MINUTES = 15
MIN_OWNER_PASSWORD_LENGTH = 8
MIN_ACCOUNT_PASSWORD_LENGTH = 4
