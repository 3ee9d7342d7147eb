"""Shared constants for the Qibla compass engine."""

KAABA_LATITUDE = 21.422487
KAABA_LONGITUDE = 39.826206

SAMPLE_INTERVAL_MS = 100
FEEDBACK_COOLDOWN_MS = 4000.0

ACCURATE_THRESHOLD_DEGREES = 5.0
CLOSE_THRESHOLD_DEGREES = 15.0

FLAT_AXIS_THRESHOLD = 0.1
MAX_SMOOTHING_WINDOW_MS = 500.0

DECLINATION_EPOCH_YEAR = 2020

PERMISSION_DENIED_MESSAGE = "Permission to access location was denied"
LOCATION_UNAVAILABLE_MESSAGE = "Location unavailable"
SENSOR_INIT_FAILED_MESSAGE = "Error initializing sensors"
HOLD_FLAT_WARNING = "Please hold device flat"
