"""
数据模型定义
"""
import math
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

# RFC 4514 中被转义的逗号不作为分隔符
_DN_SEPARATOR = re.compile(r'(?<!\\),')


def first_dn_component(distinguished_name: str) -> str:
    """取DN的第一个组成部分，并去掉 CN= 前缀"""
    first = _DN_SEPARATOR.split(distinguished_name, maxsplit=1)[0]
    return first.replace("CN=", "").strip()


@dataclass
class CertificateInfo:
    """服务器叶子证书信息"""
    hostname: str
    port: int
    subject: str
    issuer: str
    not_before: datetime
    not_after: datetime
    thumbprint: str
    serial_number: Optional[str] = None

    @property
    def subject_name(self) -> str:
        """证书持有者名称（通用名称）"""
        return first_dn_component(self.subject)

    @property
    def issuer_name(self) -> str:
        """证书颁发者名称（通用名称）"""
        return first_dn_component(self.issuer)


class ValidityState(Enum):
    """证书有效状态"""
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    VALID = "valid"


@dataclass
class Classification:
    """证书过期分类结果"""
    state: ValidityState
    days: float

    @property
    def rounded_days(self) -> int:
        """四舍五入后的天数（0.5 向远离零的方向进位）"""
        return int(math.copysign(math.floor(abs(self.days) + 0.5), self.days))


class Tone(Enum):
    """输出行的显示风格，在最终打印时才映射为终端颜色"""
    PLAIN = "plain"
    HEADER = "header"
    HIGHLIGHT = "highlight"
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    ACCENT = "accent"


@dataclass
class OutputLine:
    """一行控制台输出"""
    text: str = ""
    tone: Tone = Tone.PLAIN
    label: Optional[str] = None
