"""
运行配置
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict

DEFAULT_TIMEOUT = 5.0
DEFAULT_PORT = 443
DEFAULT_WARNING_DAYS = 30


@dataclass
class CheckerConfig:
    """单次证书检查的配置，只来自命令行参数"""
    timeout: float = DEFAULT_TIMEOUT
    default_port: int = DEFAULT_PORT
    warning_days: int = DEFAULT_WARNING_DAYS
    log_level: str = "CRITICAL"
    use_color: bool = True

    @classmethod
    def from_cli(cls, timeout: float, verbose: int, no_color: bool) -> "CheckerConfig":
        """
        根据命令行选项创建配置

        Args:
            timeout: 超时时间（秒）
            verbose: -v 出现的次数
            no_color: 是否禁用颜色
        """
        if verbose >= 2:
            log_level = "DEBUG"
        elif verbose == 1:
            log_level = "INFO"
        else:
            log_level = "CRITICAL"

        return cls(timeout=timeout, log_level=log_level, use_color=not no_color)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
