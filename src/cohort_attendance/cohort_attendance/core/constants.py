"""Constants and thresholds.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ISO_DATE_FORMAT = "%Y-%m-%d"
EXPORT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# statistics
DEFAULT_TREND_WINDOW = 14
MIN_TREND_RECORDS = 4
TREND_SIGNIFICANCE = 0.1

HIGH_RISK_ATTENDANCE_RATE = 75
MEDIUM_RISK_ATTENDANCE_RATE = 85
HIGH_RISK_UNEXCUSED_RATIO = 0.15
MEDIUM_RISK_UNEXCUSED_RATIO = 0.05

# bulk
DEFAULT_BATCH_SIZE = 100
DEFAULT_RECORDS_PER_SECOND = 50
EDIT_WINDOW_DAYS = 30

# completion
TARGET_COMPLETION_RATE = 95
STUDENT_COMPLETION_THRESHOLD = 90
RECENT_MISSING_DAYS = 7

# reporting
TARGET_ATTENDANCE_RATE = 85
ATTENTION_ATTENDANCE_RATE = 80
TOP_PERFORMERS_LIMIT = 5
