import os

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

WORK_DAY_HOURS = float(os.getenv("WORK_DAY_HOURS", "8"))
