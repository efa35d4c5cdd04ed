import os
from dotenv import load_dotenv

load_dotenv()

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8000))
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./payroll.db")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:8000").split(",")
    if origin.strip()
]

# Identity provider ("database" reads the users table, "admin_api" calls the hosted auth admin API)
IDENTITY_PROVIDER = os.getenv("IDENTITY_PROVIDER", "database")
AUTH_ADMIN_URL = os.getenv("AUTH_ADMIN_URL", "")  # e.g. https://<project>.supabase.co/auth/v1
AUTH_SERVICE_KEY = os.getenv("AUTH_SERVICE_KEY", "")
IDENTITY_TIMEOUT_SECONDS = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", 10))

# Audit log queries
AUDIT_LOG_PAGE_LIMIT_DEFAULT = int(os.getenv("AUDIT_LOG_PAGE_LIMIT_DEFAULT", 50))
AUDIT_LOG_PAGE_LIMIT_MAX = int(os.getenv("AUDIT_LOG_PAGE_LIMIT_MAX", 200))
AUDIT_SUMMARY_DAYS = int(os.getenv("AUDIT_SUMMARY_DAYS", 30))

# Company roles allowed in the reviewer chain
ELIGIBLE_REVIEWER_ROLES = [
    role.strip().upper()
    for role in os.getenv("ELIGIBLE_REVIEWER_ROLES", "ADMIN,MANAGER").split(",")
    if role.strip()
]
