MAX_NAMESPACE_LENGTH = 255
NAMESPACE_PATTERN = r"^[a-zA-Z0-9_.\-/]+$"

# PutMetricData limits
MAX_METRICS_PER_REQUEST = 1000
MAX_DIMENSIONS_PER_METRIC = 30
MAX_VALUES_PER_METRIC = 150

STATISTIC_SET_MARKER = "statistic-set"
