import os

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_BATCH_SIZE = int(os.getenv("ATTENDANCE_BATCH_SIZE", "200"))
ESTIMATED_RECORDS_PER_SECOND = float(os.getenv("ATTENDANCE_RECORDS_PER_SECOND", "50"))
