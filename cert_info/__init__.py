"""
TLS证书查看工具
"""
__version__ = "1.0.0"
