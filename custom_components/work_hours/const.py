"""Constants for the Work Hours integration."""

DOMAIN = "work_hours"

CONF_BASE_URL = "base_url"
CONF_CURRENCY_URL = "currency_url"
CONF_VIEW_MODE = "view_mode"
CONF_SCAN_INTERVAL = "scan_interval"

# Default values
DEFAULT_BASE_URL = "http://localhost:88"
DEFAULT_CURRENCY_URL = "http://www.geoplugin.net/json.gp"
DEFAULT_SCAN_INTERVAL = 60
DEFAULT_HOURLY_RATE = 0.0
DEFAULT_TARGET_HOURS = 40.0
REQUEST_TIMEOUT = 10
CURRENCY_RATE_TTL = 3600

# Service constants
SERVICE_NEXT_PERIOD = "next_period"
SERVICE_PREVIOUS_PERIOD = "previous_period"
SERVICE_SET_VIEW_MODE = "set_view_mode"
SERVICE_GO_TO_TODAY = "go_to_today"
SERVICE_UPDATE_EXTRA_MINUTES = "update_extra_minutes"
SERVICE_SET_TARGET_HOURS = "set_target_hours"

SERVICES = (
    SERVICE_NEXT_PERIOD,
    SERVICE_PREVIOUS_PERIOD,
    SERVICE_SET_VIEW_MODE,
    SERVICE_GO_TO_TODAY,
    SERVICE_UPDATE_EXTRA_MINUTES,
    SERVICE_SET_TARGET_HOURS,
)
