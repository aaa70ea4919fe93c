"""
命令行入口
"""
from typing import Iterator, Optional

import click

from . import __version__
from .config import CheckerConfig, DEFAULT_PORT, DEFAULT_TIMEOUT
from .models import OutputLine, Tone
from .services.certificate_fetcher import CertificateFetcher
from .services.config_validator import ConfigValidator
from .services.error_handler import CertInfoError, InvalidInput, NoCertificatePresented
from .services.expiry_calculator import ExpiryCalculator
from .services.hostname_resolver import HostnameResolver
from .services.logger import LoggerService
from .services.report_formatter import ReportFormatter

USAGE = "Usage: cert-info <hostname|url> [port]"

TONE_STYLES = {
    Tone.PLAIN: {},
    Tone.HEADER: {'fg': 'cyan'},
    Tone.HIGHLIGHT: {'fg': 'bright_yellow'},
    Tone.OK: {'fg': 'green'},
    Tone.WARNING: {'fg': 'yellow'},
    Tone.ERROR: {'fg': 'red'},
    Tone.ACCENT: {'fg': 'magenta'},
}


class CertificateInspector:
    """证书检查主类：解析输入、获取证书、分类并生成输出行"""

    def __init__(self, config: Optional[CheckerConfig] = None,
                 resolver: Optional[HostnameResolver] = None,
                 fetcher: Optional[CertificateFetcher] = None,
                 calculator: Optional[ExpiryCalculator] = None,
                 formatter: Optional[ReportFormatter] = None,
                 logger_service: Optional[LoggerService] = None):
        """初始化各服务组件，未传入的按配置创建"""
        self.config = config or CheckerConfig()
        self.logger_service = logger_service or LoggerService(log_level=self.config.log_level)
        self.resolver = resolver or HostnameResolver()
        self.fetcher = fetcher or CertificateFetcher(timeout=self.config.timeout)
        self.calculator = calculator or ExpiryCalculator(warning_days=self.config.warning_days)
        self.formatter = formatter or ReportFormatter()

        self.logger_service.log_configuration_info(self.config.to_dict())

    def inspect(self, target: str, port: int) -> Iterator[OutputLine]:
        """
        执行一次证书检查

        逐行产生输出，进度提示在连接之前产生。所有工具自身的错误都
        转换为一行错误输出，不向外抛出。

        Args:
            target: 主机名或URL
            port: 端口

        Yields:
            OutputLine: 输出行
        """
        try:
            hostname = self.resolver.resolve_hostname(target)
        except InvalidInput as e:
            self.logger_service.log_error(str(target), e)
            yield OutputLine(str(e), Tone.ERROR)
            return

        yield self.formatter.format_progress(hostname, port)

        self.logger_service.log_check_start(hostname, port)
        try:
            cert_info = self.fetcher.fetch_certificate(hostname, port)
            if cert_info is None:
                raise NoCertificatePresented(f"{hostname}:{port} did not present a certificate")

            # 只取一次当前时间
            classification = self.calculator.classify(cert_info.not_after)
            self.logger_service.log_certificate_info(cert_info, classification)

            lines = self.formatter.format_report(cert_info, classification)
        except NoCertificatePresented:
            self.logger_service.log_no_certificate(hostname, port)
            lines = [self.formatter.format_not_retrieved()]
        except CertInfoError as e:
            self.logger_service.log_error(hostname, e)
            lines = [self.formatter.format_error(e)]
        finally:
            self.logger_service.log_check_end()

        yield from lines


def parse_port(raw: Optional[str], default: int = DEFAULT_PORT) -> int:
    """
    解析端口参数，不是整数时静默使用默认端口

    范围检查留给证书获取器。
    """
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def echo_line(line: OutputLine, use_color: bool = True):
    """把输出行的显示风格映射为终端颜色并打印"""
    text = ReportFormatter.render(line, paint=lambda value, tone: click.style(value, **TONE_STYLES[tone]))
    click.echo(text, color=None if use_color else False)


@click.command(context_settings={
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
})
@click.version_option(version=__version__, prog_name="cert-info")
@click.argument("target", required=False)
@click.argument("port", required=False)
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True,
              help="Seconds allowed for connect and TLS handshake.")
@click.option("-v", "--verbose", count=True, help="Log progress to stderr (-vv for debug).")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
def main(target: Optional[str], port: Optional[str], timeout: float, verbose: int, no_color: bool):
    """Show the TLS certificate presented by TARGET (hostname or URL) on PORT (default 443)."""
    if target is None:
        click.echo(USAGE)
        return

    config = CheckerConfig.from_cli(timeout=timeout, verbose=verbose, no_color=no_color)
    # 先配置日志，校验器的警告才会按日志级别输出到 stderr
    logger_service = LoggerService(log_level=config.log_level)
    try:
        ConfigValidator().ensure_valid(config)
    except CertInfoError as e:
        echo_line(ReportFormatter().format_error(e), config.use_color)
        return

    inspector = CertificateInspector(config, logger_service=logger_service)
    for line in inspector.inspect(target, parse_port(port, config.default_port)):
        echo_line(line, config.use_color)
