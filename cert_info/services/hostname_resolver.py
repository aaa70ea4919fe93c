"""
主机名解析服务
"""
from urllib.parse import urlsplit
import logging

from ..interfaces import HostnameResolverInterface
from .error_handler import InvalidInput


class HostnameResolver(HostnameResolverInterface):
    """从命令行参数（主机名或URL）中提取主机名"""

    def __init__(self, default_scheme: str = "https"):
        """
        初始化主机名解析器

        Args:
            default_scheme: 输入不带协议时补全的协议
        """
        self.default_scheme = default_scheme
        self.logger = logging.getLogger(__name__)

    def resolve_hostname(self, value: str) -> str:
        """
        提取主机名

        以 http 开头（不区分大小写）的输入按URL解析，其余输入补全
        https:// 后解析。解析失败时原样返回输入。

        Args:
            value: 主机名或URL

        Returns:
            str: 主机名

        Raises:
            InvalidInput: 输入为空或只包含空白字符
        """
        if value is None or not value.strip():
            raise InvalidInput("Invalid input. Please provide a valid hostname or URL.")

        if value.lower().startswith("http"):
            candidate = value
        else:
            candidate = f"{self.default_scheme}://{value}"

        host = self._extract_host(candidate)
        if not host:
            self.logger.debug(f"无法将 {value!r} 解析为URL，按主机名处理")
            return value

        return host

    def _extract_host(self, url: str) -> str:
        """
        解析URL中的主机部分

        Args:
            url: URL字符串

        Returns:
            str: 主机名，解析失败时为空字符串
        """
        try:
            parts = urlsplit(url)
        except ValueError:
            return ""

        if not parts.scheme or not parts.netloc:
            return ""

        try:
            return parts.hostname or ""
        except ValueError:
            return ""
