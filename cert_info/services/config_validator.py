"""
配置验证服务
"""
from typing import Dict, Any
import logging

from ..config import CheckerConfig
from .certificate_fetcher import MIN_PORT, MAX_PORT
from .error_handler import InvalidArgument

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
SLOW_TIMEOUT_SECONDS = 60


class ConfigValidator:
    """配置验证器"""

    def __init__(self):
        """初始化配置验证器"""
        self.logger = logging.getLogger(__name__)

    def validate(self, config: CheckerConfig) -> Dict[str, Any]:
        """
        验证配置

        Args:
            config: 运行配置

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {
            'is_valid': True,
            'errors': [],
            'warnings': []
        }

        if config.timeout is None or config.timeout <= 0:
            result['errors'].append(f"Timeout must be greater than 0, got {config.timeout}")
        elif config.timeout > SLOW_TIMEOUT_SECONDS:
            result['warnings'].append(f"超时时间较长: {config.timeout} 秒")

        if not MIN_PORT <= config.default_port <= MAX_PORT:
            result['errors'].append(
                f"Default port must be between {MIN_PORT} and {MAX_PORT}, got {config.default_port}"
            )

        if config.warning_days < 0:
            result['errors'].append(f"Warning days must not be negative, got {config.warning_days}")

        if str(config.log_level).upper() not in LOG_LEVELS:
            result['errors'].append(f"Unknown log level: {config.log_level}")

        if result['errors']:
            result['is_valid'] = False

        for warning in result['warnings']:
            self.logger.warning(warning)

        return result

    def ensure_valid(self, config: CheckerConfig) -> CheckerConfig:
        """
        验证配置，无效时抛出异常

        Args:
            config: 运行配置

        Returns:
            CheckerConfig: 原配置

        Raises:
            InvalidArgument: 配置无效
        """
        result = self.validate(config)
        if not result['is_valid']:
            raise InvalidArgument("; ".join(result['errors']))
        return config
