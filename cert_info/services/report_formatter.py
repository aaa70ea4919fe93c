"""
证书报告格式化服务
"""
from datetime import datetime
from typing import Callable, List, Optional

from ..models import CertificateInfo, Classification, OutputLine, Tone, ValidityState

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LABEL_WIDTH = 15
HEADER_TITLE = "Certificate Information"

STATE_TONES = {
    ValidityState.EXPIRED: Tone.ERROR,
    ValidityState.EXPIRING_SOON: Tone.WARNING,
    ValidityState.VALID: Tone.OK,
}


class ReportFormatter:
    """将证书信息格式化为带显示风格的输出行"""

    def format_thumbprint(self, raw: str) -> str:
        """
        每两个字符之间插入一个空格

        Args:
            raw: 十六进制指纹

        Returns:
            str: 格式化后的指纹，奇数长度时原样返回
        """
        if not raw:
            return ""

        if len(raw) % 2:
            return raw

        return " ".join(raw[i:i + 2] for i in range(0, len(raw), 2))

    def format_status(self, classification: Classification) -> str:
        """
        生成状态文本

        Args:
            classification: 分类结果

        Returns:
            str: 状态文本
        """
        days = classification.rounded_days

        if classification.state is ValidityState.EXPIRED:
            return f"EXPIRED ({days} days ago)"
        elif classification.state is ValidityState.EXPIRING_SOON:
            return f"EXPIRING SOON (in {days} days)"
        else:
            return f"VALID (expires in {days} days)"

    def format_date(self, value: datetime) -> str:
        return value.strftime(DATE_FORMAT)

    def format_header(self) -> List[OutputLine]:
        """带边框的标题"""
        inner_width = len(HEADER_TITLE) + 5
        return [
            OutputLine("╔" + "═" * inner_width + "╗", Tone.HEADER),
            OutputLine("║  " + HEADER_TITLE.ljust(inner_width - 2) + "║", Tone.HEADER),
            OutputLine("╚" + "═" * inner_width + "╝", Tone.HEADER),
        ]

    def format_report(self, cert_info: CertificateInfo, classification: Classification) -> List[OutputLine]:
        """
        生成证书信息块

        Args:
            cert_info: 证书信息
            classification: 分类结果

        Returns:
            List[OutputLine]: 输出行
        """
        state_tone = STATE_TONES[classification.state]

        lines = [OutputLine()]
        lines.extend(self.format_header())
        lines.append(OutputLine())
        lines.extend([
            self._property("Subject", cert_info.subject_name, Tone.HIGHLIGHT),
            self._property("Issuer", cert_info.issuer_name, Tone.HIGHLIGHT),
            self._property("Valid From", self.format_date(cert_info.not_before), Tone.OK),
            self._property("Valid Until", self.format_date(cert_info.not_after), state_tone),
            self._property("Status", self.format_status(classification), state_tone),
            self._property("Thumbprint", self.format_thumbprint(cert_info.thumbprint), Tone.ACCENT),
        ])
        lines.append(OutputLine())
        return lines

    def format_progress(self, hostname: str, port: int) -> OutputLine:
        return OutputLine(f"Fetching certificate details for {hostname}:{port}...")

    def format_not_retrieved(self) -> OutputLine:
        return OutputLine("Could not retrieve certificate information.", Tone.ERROR)

    def format_error(self, error: Exception) -> OutputLine:
        return OutputLine(f"Error: {error}", Tone.ERROR)

    @staticmethod
    def render(line: OutputLine, paint: Optional[Callable[[str, Tone], str]] = None) -> str:
        """
        拼接标签和值

        Args:
            line: 输出行
            paint: 按显示风格为值着色的函数，为 None 时输出纯文本

        Returns:
            str: 一行文本，标签不着色
        """
        value = line.text
        if value and paint is not None:
            value = paint(value, line.tone)

        if line.label is None:
            return value
        return ReportFormatter.format_label(line.label) + value

    @staticmethod
    def format_label(label: str) -> str:
        return f"{label}: ".ljust(LABEL_WIDTH)

    def _property(self, label: str, value: str, tone: Tone) -> OutputLine:
        return OutputLine(value, tone, label=label)
