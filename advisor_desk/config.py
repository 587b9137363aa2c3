# advisor_desk/config.py
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# MongoDB Configuration
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/")
MONGODB_DB = os.getenv("MONGODB_DB", "advisor_desk")

# Record fetch limits
DASHBOARD_FETCH_LIMIT = int(os.getenv("DASHBOARD_FETCH_LIMIT", "500"))
STUDENT_LIST_LIMIT = int(os.getenv("STUDENT_LIST_LIMIT", "200"))

# Dashboard windows (days)
ACTIVE_WINDOW_DAYS = int(os.getenv("ACTIVE_WINDOW_DAYS", "14"))
STALE_CONTACT_DAYS = int(os.getenv("STALE_CONTACT_DAYS", "7"))

# Author stamped on notes/communications when no advisor id is known
ADVISOR_AUTHOR_ID = os.getenv("ADVISOR_AUTHOR_ID", "admin-demo")

# System Configuration
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
