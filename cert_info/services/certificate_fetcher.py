"""
证书获取服务
"""
import ssl
import socket
import time
from typing import Optional
import logging

from cryptography import x509
from cryptography.hazmat.primitives import hashes

from ..interfaces import CertificateFetcherInterface
from ..models import CertificateInfo
from .error_handler import ConnectionErrorHandler, InvalidArgument, InvalidCertificate

MIN_PORT = 1
MAX_PORT = 65535


class CertificateFetcher(CertificateFetcherInterface):
    """通过TLS握手获取服务器叶子证书"""

    def __init__(self, timeout: float = 5.0):
        """
        初始化证书获取器

        Args:
            timeout: 连接加握手的总超时时间（秒）
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)
        self.error_handler = ConnectionErrorHandler()

    def fetch_certificate(self, hostname: str, port: int) -> Optional[CertificateInfo]:
        """
        获取服务器的叶子证书

        只尝试一次，不重试。握手不校验证书链、有效期和主机名，
        以便检查过期或自签名的证书。

        Args:
            hostname: 主机名
            port: TLS端口

        Returns:
            Optional[CertificateInfo]: 证书信息，对端未提供证书时为 None

        Raises:
            InvalidArgument: 主机名为空或端口超出范围
            ConnectionTimeout: 连接或握手超时
            ConnectionFailed: DNS解析、连接或握手失败
            InvalidCertificate: 证书无法解码
        """
        self._validate_arguments(hostname, port)

        self.logger.debug(f"连接 {hostname}:{port}，超时 {self.timeout} 秒")

        try:
            der_bytes = self._get_peer_certificate(hostname, port)
        except (OSError, UnicodeError) as e:
            raise self.error_handler.translate(hostname, port, e) from e

        if not der_bytes:
            self.logger.warning(f"{hostname}:{port} 握手成功但未提供证书")
            return None

        return self._parse_certificate(hostname, port, der_bytes)

    def _validate_arguments(self, hostname: str, port: int):
        """
        校验主机名和端口，不做任何网络操作

        Args:
            hostname: 主机名
            port: 端口
        """
        if not hostname or not hostname.strip():
            raise InvalidArgument("Hostname must not be empty")

        if isinstance(port, bool) or not isinstance(port, int):
            raise InvalidArgument(f"Port must be an integer, got {port!r}")

        if port < MIN_PORT or port > MAX_PORT:
            raise InvalidArgument(f"Port must be between {MIN_PORT} and {MAX_PORT}")

    def _create_context(self) -> ssl.SSLContext:
        """
        创建不校验证书的TLS客户端上下文

        每次调用新建，不与其他连接共享。

        Returns:
            ssl.SSLContext: TLS上下文
        """
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def _get_peer_certificate(self, hostname: str, port: int) -> Optional[bytes]:
        """
        建立连接并完成握手，返回DER编码的叶子证书

        Args:
            hostname: 主机名
            port: 端口

        Returns:
            Optional[bytes]: DER编码的证书
        """
        deadline = time.monotonic() + self.timeout
        context = self._create_context()

        with self._open_connection(hostname, port, deadline) as sock:
            # 握手共用同一个截止时间
            sock.settimeout(self._remaining(deadline))

            with context.wrap_socket(sock, server_hostname=hostname) as ssock:
                return ssock.getpeercert(binary_form=True)

    def _open_connection(self, hostname: str, port: int, deadline: float) -> socket.socket:
        """
        依次尝试解析出的每个地址，所有尝试共用一个截止时间

        Args:
            hostname: 主机名
            port: 端口
            deadline: time.monotonic() 时间轴上的截止时间

        Returns:
            socket.socket: 已连接的套接字
        """
        addresses = socket.getaddrinfo(hostname, port, 0, socket.SOCK_STREAM)
        last_error: Optional[OSError] = None

        for family, socktype, proto, _, address in addresses:
            # 解析耗尽时间或上一个地址超时后不再继续
            remaining = self._remaining(deadline)

            sock = socket.socket(family, socktype, proto)
            try:
                sock.settimeout(remaining)
                sock.connect(address)
            except OSError as e:
                sock.close()
                self.logger.debug(f"连接 {address} 失败: {type(e).__name__}: {str(e)}")
                last_error = e
                continue

            return sock

        if last_error is not None:
            raise last_error
        raise OSError(f"getaddrinfo returned no addresses for {hostname}")

    def _remaining(self, deadline: float) -> float:
        """
        距离截止时间的剩余秒数

        Raises:
            socket.timeout: 已超过截止时间
        """
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise socket.timeout("timed out")
        return remaining

    def _parse_certificate(self, hostname: str, port: int, der_bytes: bytes) -> CertificateInfo:
        """
        解析DER编码的证书

        Args:
            hostname: 主机名
            port: 端口
            der_bytes: DER编码的证书

        Returns:
            CertificateInfo: 证书信息
        """
        try:
            cert = x509.load_der_x509_certificate(der_bytes)
        except ValueError as e:
            self.logger.error(f"{hostname}:{port} 的证书无法解码: {str(e)}")
            raise InvalidCertificate(f"Could not decode certificate from {hostname}:{port}") from e

        return CertificateInfo(
            hostname=hostname,
            port=port,
            subject=cert.subject.rfc4514_string(),
            issuer=cert.issuer.rfc4514_string(),
            not_before=cert.not_valid_before_utc,
            not_after=cert.not_valid_after_utc,
            thumbprint=cert.fingerprint(hashes.SHA1()).hex().upper(),
            serial_number=format(cert.serial_number, 'X')
        )
