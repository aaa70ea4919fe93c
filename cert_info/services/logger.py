"""
日志服务
"""
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any
from ..interfaces import LoggerServiceInterface
from ..models import CertificateInfo, Classification, ValidityState


class LoggerService(LoggerServiceInterface):
    """日志服务实现"""

    def __init__(self, logger_name: str = "cert_info", log_level: str = "WARNING"):
        """
        初始化日志服务

        Args:
            logger_name: 日志器名称
            log_level: 日志级别
        """
        self.logger_name = logger_name
        self.log_level = log_level

        # 配置日志器
        self.logger = logging.getLogger(logger_name)
        self._configure_logger()

        # 执行统计
        self.execution_stats = {
            'start_time': None,
            'end_time': None,
            'target': None,
            'outcome': None,
            'error': None
        }

    def _configure_logger(self):
        """配置日志器"""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        self.logger.setLevel(level)

        # 避免重复添加处理器
        if not self.logger.handlers:
            # 输出到 stderr，stdout 只保留证书报告
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)

            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)

            self.logger.addHandler(handler)

        # 防止日志传播到根日志器
        self.logger.propagate = False

    def log_check_start(self, hostname: str, port: int):
        """
        记录检查开始

        Args:
            hostname: 主机名
            port: 端口
        """
        self.execution_stats['start_time'] = datetime.now(timezone.utc)
        self.execution_stats['target'] = f"{hostname}:{port}"

        self.logger.info(f"开始获取 {hostname}:{port} 的证书")
        self.logger.debug(f"检查开始时间: {self.execution_stats['start_time'].isoformat()}")

    def log_certificate_info(self, cert_info: CertificateInfo, classification: Classification):
        """
        记录证书信息

        Args:
            cert_info: 证书信息
            classification: 分类结果
        """
        self.execution_stats['outcome'] = classification.state.value

        details = (
            f"主机: {cert_info.hostname}:{cert_info.port}, "
            f"持有者: {cert_info.subject}, "
            f"颁发者: {cert_info.issuer}, "
            f"过期时间: {cert_info.not_after.isoformat()}, "
            f"序列号: {cert_info.serial_number}"
        )

        if classification.state is ValidityState.EXPIRED:
            self.logger.warning(f"证书已过期 {classification.rounded_days} 天 - {details}")
        elif classification.state is ValidityState.EXPIRING_SOON:
            self.logger.warning(f"证书即将过期，剩余 {classification.rounded_days} 天 - {details}")
        else:
            self.logger.info(f"证书正常，剩余 {classification.rounded_days} 天 - {details}")

    def log_no_certificate(self, hostname: str, port: int):
        self.execution_stats['outcome'] = 'no_certificate'
        self.logger.warning(f"{hostname}:{port} 未提供证书")

    def log_error(self, hostname: str, error: Exception):
        """
        记录错误信息

        Args:
            hostname: 主机名
            error: 异常对象
        """
        self.execution_stats['outcome'] = 'error'
        self.execution_stats['error'] = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

        self.logger.error(f"{hostname} 检查时发生错误: {type(error).__name__}: {str(error)}")

        # 详细的堆栈跟踪（调试级别）
        self.logger.debug(f"{hostname} 错误堆栈跟踪:\n{traceback.format_exc()}")

    def log_check_end(self):
        """记录检查结束"""
        self.execution_stats['end_time'] = datetime.now(timezone.utc)

        self.logger.info(
            f"证书检查完成，目标: {self.execution_stats['target']}, "
            f"结果: {self.execution_stats['outcome']}, "
            f"耗时: {self.get_duration():.2f} 秒"
        )

    def log_configuration_info(self, config: Dict[str, Any]):
        """
        记录配置信息

        Args:
            config: 配置信息字典
        """
        self.logger.debug("运行配置:")
        for key, value in config.items():
            self.logger.debug(f"  {key}: {value}")

    def get_duration(self) -> float:
        start_time = self.execution_stats['start_time']
        end_time = self.execution_stats['end_time']
        if start_time and end_time:
            return (end_time - start_time).total_seconds()
        return 0.0
