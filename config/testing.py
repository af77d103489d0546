DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

DEFAULT_BATCH_SIZE = 10
ESTIMATED_RECORDS_PER_SECOND = 50
