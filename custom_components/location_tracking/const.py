"""Constants for the Location Tracking integration."""

DOMAIN = "location_tracking"

CONF_NETWORK_ENTITY = "network_entity"
CONF_SATELLITE_ENTITY = "satellite_entity"

DEFAULT_NAME = "Location"

# Both providers share the same constructor constants.
NETWORK_MIN_INTERVAL_MS = 6000
NETWORK_MIN_DISPLACEMENT_M = 5.0
SATELLITE_MIN_INTERVAL_MS = 6000
SATELLITE_MIN_DISPLACEMENT_M = 5.0

LOG_TAG = "LOCATION"

ATTR_ALTITUDE = "altitude"
ATTR_BEARING = "bearing"
ATTR_COURSE = "course"
ATTR_LOCATION_SOURCE = "location_source"
ATTR_LAST_FIX = "last_fix"
ATTR_PROVIDER = "provider"

EVENT_PROVIDER_ENABLED = "location_tracking_provider_enabled"
EVENT_PROVIDER_DISABLED = "location_tracking_provider_disabled"
