"""
服务接口定义
"""
from abc import ABC, abstractmethod
from typing import Optional
from .models import CertificateInfo, Classification


class HostnameResolverInterface(ABC):
    """主机名解析器接口"""

    @abstractmethod
    def resolve_hostname(self, value: str) -> str:
        """从主机名或URL中提取主机名"""
        pass


class CertificateFetcherInterface(ABC):
    """证书获取器接口"""

    @abstractmethod
    def fetch_certificate(self, hostname: str, port: int) -> Optional[CertificateInfo]:
        """获取服务器的叶子证书"""
        pass


class LoggerServiceInterface(ABC):
    """日志服务接口"""

    @abstractmethod
    def log_check_start(self, hostname: str, port: int):
        """记录检查开始"""
        pass

    @abstractmethod
    def log_certificate_info(self, cert_info: CertificateInfo, classification: Classification):
        """记录证书信息"""
        pass

    @abstractmethod
    def log_error(self, hostname: str, error: Exception):
        """记录错误信息"""
        pass
