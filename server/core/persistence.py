# -*- coding: utf-8 -*-
"""
分析记录持久化
负责 Redis 读/写操作
"""

import redis
import json
import logging
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)


class AnalysisPersistence:
    """
    头影测量分析记录的持久化管理

    每条分析记录以 JSON 字符串保存在 ceph_analysis:{analysis_id} 下。
    所有操作遵循 fail-fast 原则，连接错误直接抛出异常。
    """

    key_prefix = "ceph_analysis:"

    def __init__(self, config: Dict[str, Any], client: Optional[redis.Redis] = None):
        """
        初始化 Redis 连接

        Args:
            config: 配置字典，需包含 redis 和 analysis 配置项
            client: 已创建的 Redis 客户端（可选，主要用于测试注入）

        Raises:
            redis.ConnectionError: Redis 连接失败
            KeyError: 配置项缺失
        """
        redis_config = config['redis']
        self.redis_client = client or redis.Redis(
            host=redis_config['host'],
            port=redis_config['port'],
            db=redis_config['db'],
            password=redis_config.get('password'),
            decode_responses=True
        )
        # 0 表示永不过期
        self.ttl = int(config.get('analysis', {}).get('ttl', 0))

        self.redis_client.ping()
        logger.info(f"Redis connected: {redis_config['host']}:{redis_config['port']}/{redis_config['db']}")

    def _build_key(self, analysis_id: str) -> str:
        return f"{self.key_prefix}{analysis_id}"

    def save_analysis(self, analysis_id: str, record: Dict[str, Any]) -> bool:
        """
        保存（覆盖）分析记录

        Args:
            analysis_id: 分析 ID
            record: 分析记录（camelCase 键的字典）

        Returns:
            bool: 保存是否成功

        Raises:
            redis.RedisError: Redis 操作失败
        """
        key = self._build_key(analysis_id)
        value = json.dumps(record, ensure_ascii=False)

        if self.ttl > 0:
            result = self.redis_client.setex(key, self.ttl, value)
        else:
            result = self.redis_client.set(key, value)

        if result:
            logger.info(f"Analysis saved: {analysis_id}, TTL={self.ttl or 'none'}")
            return True
        logger.error(f"Failed to save analysis: {analysis_id}")
        return False

    def get_analysis(self, analysis_id: str) -> Optional[Dict[str, Any]]:
        """
        读取分析记录

        Returns:
            Optional[Dict]: 分析记录，不存在时返回 None

        Raises:
            redis.RedisError: Redis 操作失败
            json.JSONDecodeError: JSON 解析失败
        """
        value = self.redis_client.get(self._build_key(analysis_id))
        if value is None:
            logger.warning(f"Analysis not found: {analysis_id}")
            return None
        return json.loads(value)

    def analysis_exists(self, analysis_id: str) -> bool:
        exists = self.redis_client.exists(self._build_key(analysis_id)) > 0
        logger.debug(f"Analysis exists check: {analysis_id} -> {exists}")
        return exists

    def delete_analysis(self, analysis_id: str) -> bool:
        """
        删除分析记录

        Returns:
            bool: 是否删除了记录
        """
        deleted_count = self.redis_client.delete(self._build_key(analysis_id))
        if deleted_count > 0:
            logger.info(f"Analysis deleted: {analysis_id}")
            return True
        logger.warning(f"Analysis not found for deletion: {analysis_id}")
        return False
