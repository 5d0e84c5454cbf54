"""Constants for combination planning."""

# Time format used in catalog and request files
TIME_FORMAT = "%H:%M"

# Day names accepted in input files (lowercase)
DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

# Value accepted for a FREEDAY priority that matches any free weekday
ANY_DAY_NAME = "any"

# Short Spanish/English aliases found in catalog exports
DAY_ALIASES = {
    "mon": "monday",
    "tue": "tuesday",
    "wed": "wednesday",
    "thu": "thursday",
    "fri": "friday",
    "sat": "saturday",
    "lunes": "monday",
    "martes": "tuesday",
    "miercoles": "wednesday",
    "miércoles": "wednesday",
    "jueves": "thursday",
    "viernes": "friday",
    "sabado": "saturday",
    "sábado": "saturday",
}

# Travel time (hours) between two different buildings on the same day
# when no building table is configured
DEFAULT_TRAVEL_TIME = 1.0

# Slope used by the linear weight transform
DEFAULT_TRANSFORM_SLOPE = 10.0

# Default configuration directory
DEFAULT_CONFIG_DIR = "reference"

# Configuration file names inside the config directory
PLANNER_CONFIG_FILE = "planner.json"
TRAVEL_TIMES_FILE = "travel-times.json"

# Number of combinations shown by the CLI by default
DEFAULT_TOP_RESULTS = 10
