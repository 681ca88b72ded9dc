# shop/celery_worker.py
from celery import Celery

from shop.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "shop",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "shop.services.notification_service",
)

celery_app.conf.timezone = "UTC"
# bez brokera (dev, testy) taski wykonuja sie synchronicznie
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
