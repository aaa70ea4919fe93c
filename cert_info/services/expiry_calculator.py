"""
证书过期计算服务
"""
from datetime import datetime, timezone, timedelta
from typing import Optional
from ..models import Classification, ValidityState

SECONDS_PER_DAY = timedelta(days=1).total_seconds()


class ExpiryCalculator:
    """证书过期计算器"""

    def __init__(self, warning_days: int = 30):
        """
        初始化过期计算器

        Args:
            warning_days: 提前警告天数，默认30天
        """
        self.warning_days = warning_days

    def calculate_days_until_expiry(self, not_after: datetime, now: datetime) -> float:
        """
        计算距离过期的天数

        Args:
            not_after: 过期时间
            now: 当前时间

        Returns:
            float: 剩余天数（带小数，负数表示已过期）
        """
        return (not_after - now).total_seconds() / SECONDS_PER_DAY

    def classify(self, not_after: datetime, now: Optional[datetime] = None) -> Classification:
        """
        对证书进行有效状态分类

        只有 not_after 严格早于 now 才算过期，恰好相等时属于即将过期（0天）。

        Args:
            not_after: 过期时间
            now: 当前时间，为 None 时取一次当前UTC时间

        Returns:
            Classification: 状态和天数
        """
        if now is None:
            now = datetime.now(timezone.utc)

        days_remaining = self.calculate_days_until_expiry(not_after, now)

        if not_after < now:
            return Classification(ValidityState.EXPIRED, abs(days_remaining))

        if days_remaining <= self.warning_days:
            return Classification(ValidityState.EXPIRING_SOON, days_remaining)

        return Classification(ValidityState.VALID, days_remaining)
