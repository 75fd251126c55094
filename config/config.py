import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "salary-calculator-secret"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "10"))

    # Office policy
    OFFICE_START_HOUR = int(os.environ.get("OFFICE_START_HOUR", "10"))
    OFFICE_END_HOUR = int(os.environ.get("OFFICE_END_HOUR", "18"))
    OFFICE_END_MINUTE = int(os.environ.get("OFFICE_END_MINUTE", "30"))
    EXPECTED_WORK_MINUTES = int(os.environ.get("EXPECTED_WORK_MINUTES", "510"))
    BUFFER_MINUTES = int(os.environ.get("BUFFER_MINUTES", "15"))
    MAX_BUFFER_DAYS = int(os.environ.get("MAX_BUFFER_DAYS", "3"))


# Module-level names are what create_app reads.
SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = Config.LOG_LEVEL
MAX_UPLOAD_MB = Config.MAX_UPLOAD_MB

OFFICE_START_HOUR = Config.OFFICE_START_HOUR
OFFICE_END_HOUR = Config.OFFICE_END_HOUR
OFFICE_END_MINUTE = Config.OFFICE_END_MINUTE
EXPECTED_WORK_MINUTES = Config.EXPECTED_WORK_MINUTES
BUFFER_MINUTES = Config.BUFFER_MINUTES
MAX_BUFFER_DAYS = Config.MAX_BUFFER_DAYS

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
