DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

WORK_DAY_HOURS = 8.0
