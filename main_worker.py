# -*- coding: utf-8 -*-
"""导出 Worker 启动入口：消费导出队列，重算报告并回调"""

import logging
import os
from server.worker import celery_app
from server import load_config

# 注册 export_analysis_task
import server.tasks  # noqa: F401

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """启动 Worker；任务以回调 I/O 为主，Unix 上用 threads pool，Windows 上只能用 solo"""
    worker_config = load_config()['worker']

    worker_args = [
        'worker',
        f'--loglevel={worker_config["loglevel"]}',
        f'--concurrency={worker_config["concurrency"]}',
        '--pool=solo' if os.name == 'nt' else '--pool=threads',
    ]
    logger.info(f"Starting export worker: {' '.join(worker_args[1:])}")

    celery_app.worker_main(worker_args)


if __name__ == "__main__":
    main()
