# -*- coding: utf-8 -*-
"""导出任务使用的 Celery 应用（broker 与 backend 均为 Redis）"""

from celery import Celery
from server import load_config
import logging

logger = logging.getLogger(__name__)


def create_celery_app() -> Celery:
    config = load_config()
    celery_config = config['celery']

    celery_app = Celery(
        'ceph_analysis',
        broker=celery_config['broker_url'],
        backend=celery_config['result_backend']
    )

    # 导出只是重算报告加一次回调，单任务 300 秒足够
    celery_app.conf.update(
        task_serializer='json',
        result_serializer='json',
        accept_content=['json'],
        timezone='UTC',
        enable_utc=True,
        task_track_started=True,
        task_time_limit=300,
        worker_prefetch_multiplier=1,
    )

    logger.info(f"Celery app created, broker: {celery_config['broker_url']}")
    return celery_app


celery_app = create_celery_app()
