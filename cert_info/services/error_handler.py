"""
错误处理服务
"""
import socket
import ssl
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging


class CertInfoError(Exception):
    """证书检查工具的基础异常"""


class InvalidInput(CertInfoError, ValueError):
    """命令行输入的主机名为空或无法解析"""


class InvalidArgument(CertInfoError, ValueError):
    """参数超出允许范围（端口、超时等）"""


class ConnectionTimeout(CertInfoError):
    """连接或握手未在限定时间内完成"""


class ConnectionFailed(CertInfoError):
    """DNS解析失败、连接被拒绝或TLS握手失败"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}: {self.cause}"
        return message


class NoCertificatePresented(CertInfoError):
    """握手成功但对端没有提供证书"""


class InvalidCertificate(CertInfoError):
    """对端提供的证书无法解码"""


class ConnectionErrorHandler:
    """网络错误处理器，将底层异常转换为工具自身的错误类型"""

    def __init__(self):
        """初始化网络错误处理器"""
        self.logger = logging.getLogger(__name__)

    def translate(self, hostname: str, port: int, error: BaseException) -> CertInfoError:
        """
        将底层网络异常转换为工具的错误类型

        Args:
            hostname: 主机名
            port: 端口
            error: 底层异常

        Returns:
            CertInfoError: 对应的错误（由调用方抛出）
        """
        error_info = self.handle_connection_error(hostname, port, error)

        if error_info['is_timeout']:
            return ConnectionTimeout(f"Connection to {hostname}:{port} timed out")

        return ConnectionFailed(f"Failed to connect to {hostname}:{port}", cause=error)

    def handle_connection_error(self, hostname: str, port: int, error: BaseException) -> Dict[str, Any]:
        """
        处理连接错误

        Args:
            hostname: 主机名
            port: 端口
            error: 异常对象

        Returns:
            Dict[str, Any]: 错误处理结果
        """
        error_info = {
            'hostname': hostname,
            'port': port,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'is_timeout': self._is_timeout_error(error),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'suggested_action': self._get_suggested_action(error)
        }

        self.logger.error(
            f"{hostname}:{port} 连接错误 {error_info['error_type']}: "
            f"{error_info['error_message']}，建议: {error_info['suggested_action']}"
        )

        return error_info

    def _is_timeout_error(self, error: BaseException) -> bool:
        """
        判断是否为超时错误

        Args:
            error: 异常对象

        Returns:
            bool: 是否为超时
        """
        # Python 3.10 起 socket.timeout 是 TimeoutError 的别名
        return isinstance(error, (socket.timeout, TimeoutError))

    def _get_suggested_action(self, error: BaseException) -> str:
        """
        获取错误的建议处理方案

        Args:
            error: 异常对象

        Returns:
            str: 建议的处理方案
        """
        error_message = str(error).lower()

        if self._is_timeout_error(error):
            return "检查网络连接和防火墙，考虑增加超时时间"
        elif isinstance(error, socket.gaierror):
            return "检查主机名是否正确，DNS服务器是否可用"
        elif isinstance(error, ConnectionRefusedError):
            return "检查目标服务器是否运行，端口是否正确"
        elif isinstance(error, ssl.SSLError):
            if 'wrong version number' in error_message:
                return "目标端口可能不是TLS服务"
            elif 'handshake failure' in error_message:
                return "TLS握手失败，检查TLS版本和加密套件兼容性"
            else:
                return "TLS连接问题，检查服务器TLS配置"
        elif isinstance(error, ConnectionResetError):
            return "连接被对端重置，检查目标端口是否为TLS服务"
        elif 'network is unreachable' in error_message:
            return "网络不可达，检查网络连接和路由"
        elif 'no route to host' in error_message:
            return "无法路由到主机，检查防火墙和网络配置"
        else:
            return "检查网络连接和服务器状态"
