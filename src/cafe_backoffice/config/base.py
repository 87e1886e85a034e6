import os


def env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "cafe_backoffice"),
    "time_zone": os.getenv("DB_TIME_ZONE", "+05:30"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Payroll
LATE_PENALTY_RATE = float(os.getenv("LATE_PENALTY_RATE", "0.5"))
STRICT_PAYROLL_VALIDATION = env_bool("STRICT_PAYROLL_VALIDATION")

# Auth / security
INTERNAL_EMAIL_DOMAIN = os.getenv("INTERNAL_EMAIL_DOMAIN", "caferepublic.internal")
APP_URL = os.getenv("APP_URL", "http://localhost:5000")
# Location reported for loopback/private addresses when the proxy supplies none.
DEFAULT_GEO = {
    "country": "Localhost",
    "city": "Development",
    "region": "System",
    "latitude": 21.1458,
    "longitude": 79.0882,
    "isp": "Internal",
}

# Alert mail; leave SMTP_HOST empty to only store alerts.
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
ALERT_FROM_ADDRESS = os.getenv("ALERT_FROM_ADDRESS", f"security@{INTERNAL_EMAIL_DOMAIN}")

AUTO_INIT_DB = env_bool("AUTO_INIT_DB")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB")
BOOTSTRAP_ADMIN_EMAIL = os.getenv("BOOTSTRAP_ADMIN_EMAIL", "")
BOOTSTRAP_ADMIN_PASSWORD = os.getenv("BOOTSTRAP_ADMIN_PASSWORD", "")
