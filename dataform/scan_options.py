from dataclasses import dataclass
from typing import Optional


@dataclass
class ScanOptions:
    """扫描选项配置"""
    max_workers: Optional[int] = None  # 并行分组数，None 表示按CPU核心数
    read_delay: float = 0.001          # 每次读文件前的暂停（秒），避免IO饱和
    encoding: str = "utf-8-sig"        # 源文件编码
    errors: str = "replace"            # 无法解码的字节替换为 U+FFFD；"strict" 时解码失败视为文件不可读
