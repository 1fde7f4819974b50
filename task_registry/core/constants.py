"""Constants used throughout the Task Registry application."""

import re

# Data directory
DATA_DIR_NAME = ".task-registry"
DATA_DIR_ENV_VAR = "TASK_REGISTRY_DATA_DIR"
CONFIG_FILE_NAME = "registry_config.json"

# Archive snapshots
ARCHIVE_FILE_PREFIX = "tasks_memory_"
ARCHIVE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"

# Dependency references that look like ids are resolved as ids, anything else as a name
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Fields a caller may change through TaskRepository.update
UPDATABLE_FIELDS = frozenset({
    "name",
    "description",
    "notes",
    "dependencies",
    "related_files",
    "implementation_guide",
    "verification_criteria",
    "analysis_result",
    "summary",
})

# The only fields that stay writable once a task is completed
COMPLETED_MUTABLE_FIELDS = frozenset({"summary", "related_files"})

# Complexity thresholds (medium, high, very high); a metric reaching a value enters that tier
DESCRIPTION_LENGTH_THRESHOLDS = (500, 1000, 2000)
DEPENDENCIES_COUNT_THRESHOLDS = (2, 5, 10)
NOTES_LENGTH_THRESHOLDS = (200, 500, 1000)

# Search pagination
DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 20
