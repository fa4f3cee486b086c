# -*- coding: utf-8 -*-
"""
API 服务启动入口 (P1)
负责处理 HTTP 请求：目录查询、测量计算、分析记录读写，导出任务推入队列后立即返回 202
"""

import uvicorn
import logging
from server import load_config

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """
    启动 API 服务

    工作流程：
    1. 加载配置文件
    2. 启动 Uvicorn 服务器
    """
    config = load_config()

    host = config['api']['host']
    port = config['api']['port']

    logger.info(f"Starting API service on {host}:{port}")
    uvicorn.run(
        "server.api:app",
        host=host,
        port=port,
        log_level="info",
        reload=False
    )


if __name__ == "__main__":
    main()
