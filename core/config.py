import os


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ===================== STORE =====================
STORAGE_URL = _env("JOIN_STORAGE_URL", "https://join-projekt-33778-default-rtdb.europe-west1.firebasedatabase.app/")
AUTH_TOKEN = _env("JOIN_AUTH_TOKEN")  # vacío = sin token
REQUEST_TIMEOUT = _env_float("JOIN_REQUEST_TIMEOUT", 10.0)

# documentos
USERS_PATH = _env("JOIN_USERS_PATH", "users")
CONTACTS_PATH = "contacts"
TASKS_PATH = "tasks"

# ===================== APP =====================
USER_ID = _env("JOIN_USER_ID")
LOG_LEVEL = _env("JOIN_LOG_LEVEL", "INFO").upper()
LOG_DIR = _env("JOIN_LOG_DIR")  # vacío = solo consola
