import os

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Bulk writes
DEFAULT_BATCH_SIZE = int(os.getenv("ATTENDANCE_BATCH_SIZE", "100"))
ESTIMATED_RECORDS_PER_SECOND = float(os.getenv("ATTENDANCE_RECORDS_PER_SECOND", "50"))
