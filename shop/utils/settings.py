# shop/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shop.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "0") == "1"

# "local" = locki w procesie, "redis" = locki wspoldzielone miedzy workerami
LOCK_BACKEND = os.getenv("LOCK_BACKEND", "local")
LOCK_TTL_SECONDS = int(os.getenv("LOCK_TTL_SECONDS", 30))
LOCK_WAIT_SECONDS = float(os.getenv("LOCK_WAIT_SECONDS", 5))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
