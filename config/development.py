import os

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Daily presence target used by the calculators
WORK_DAY_HOURS = float(os.getenv("WORK_DAY_HOURS", "8"))
