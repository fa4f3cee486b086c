"""
服务层模块
负责 API, 持久化, 导出队列, 回调等服务功能
"""

import yaml
import os
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"


def _redis_url(redis_config: Dict[str, Any]) -> str:
    host = redis_config['host']
    port = redis_config['port']
    password = redis_config.get('password')
    if password:
        return f"redis://:{password}@{host}:{port}"
    return f"redis://{host}:{port}"


def load_config() -> Dict[str, Any]:
    """
    加载配置文件，支持环境变量覆盖

    配置文件路径默认为仓库根目录的 config.yaml，可用 CEPH_CONFIG 指定。
    环境变量优先级高于配置文件：
    - REDIS_HOST: Redis 主机地址
    - REDIS_PORT: Redis 端口
    - REDIS_DB: 分析记录所在的 Redis 数据库索引
    - REDIS_PASSWORD: Redis 密码

    Returns:
        Dict[str, Any]: 配置字典

    Raises:
        FileNotFoundError: 配置文件不存在
        ValueError: 配置文件为空
        yaml.YAMLError: YAML 解析失败
    """
    config_path = Path(os.environ.get('CEPH_CONFIG', DEFAULT_CONFIG_PATH))

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)

    if not config:
        raise ValueError("Configuration file is empty")

    redis_config = config['redis']
    if 'REDIS_HOST' in os.environ:
        redis_config['host'] = os.environ['REDIS_HOST']
    if 'REDIS_PORT' in os.environ:
        redis_config['port'] = int(os.environ['REDIS_PORT'])
    if 'REDIS_DB' in os.environ:
        redis_config['db'] = int(os.environ['REDIS_DB'])
    if 'REDIS_PASSWORD' in os.environ:
        redis_config['password'] = os.environ['REDIS_PASSWORD']

    # Celery 的 broker / backend 使用独立的库，避免与分析记录混在一起
    redis_url = _redis_url(redis_config)
    celery_config = config.setdefault('celery', {})
    celery_config['broker_url'] = f"{redis_url}/{redis_config['db'] + 1}"
    celery_config['result_backend'] = f"{redis_url}/{redis_config['db'] + 2}"

    return config
