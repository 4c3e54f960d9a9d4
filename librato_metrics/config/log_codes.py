"""
Log codes for configuration and client operations.
"""

CONFIG = "config"

# Client configuration
CLIENT_CONFIG = f"{CONFIG}.client"
CLIENT_CONFIG_RESOLVED = f"{CLIENT_CONFIG}.resolved"
CLIENT_CONFIG_MISSING_SECTION = f"{CLIENT_CONFIG}.missing_section"
CLIENT_CONFIG_TAGS_INVALID = f"{CLIENT_CONFIG}.invalid_tags"

# Process-wide settings
SETTINGS = f"{CONFIG}.settings"
SETTINGS_DEFAULT_ADAPTER_SET = f"{SETTINGS}.default_adapter_set"
SETTINGS_RESET = f"{SETTINGS}.reset"

# Client lifecycle
CLIENT = "client"
CONNECTION_RESOLVED = f"{CLIENT}.connection_resolved"
CONNECTION_FLUSHED = f"{CLIENT}.connection_flushed"
CREDENTIALS_MISSING = f"{CLIENT}.credentials_missing"
PERSISTER_RESOLVED = f"{CLIENT}.persister_resolved"
PERSISTENCE_FLUSHED = f"{CLIENT}.persistence_flushed"
SUBMIT = f"{CLIENT}.submit"

# Queue
QUEUE = "queue"
QUEUE_AUTOSUBMIT = f"{QUEUE}.autosubmit"
QUEUE_SUBMITTED = f"{QUEUE}.submitted"
