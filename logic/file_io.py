import codecs
import logging
import time
from typing import Optional, Tuple

from dataform.resource_model import ProjectFile
from dataform.scan_options import ScanOptions

logger = logging.getLogger(__name__)

# 按长度从长到短检查，UTF-32 LE 的BOM以 UTF-16 LE 的BOM开头
_BOM_ENCODINGS = (
    (codecs.BOM_UTF32_LE, 'utf-32-le'),
    (codecs.BOM_UTF32_BE, 'utf-32-be'),
    (codecs.BOM_UTF8, 'utf-8'),
    (codecs.BOM_UTF16_LE, 'utf-16-le'),
    (codecs.BOM_UTF16_BE, 'utf-16-be'),
)


class SourceFileReader:
    def __init__(self, options: Optional[ScanOptions] = None):
        self.options = options or ScanOptions()

    def read_all_lines(self, project_file: ProjectFile) -> Tuple[str, ...]:
        """
        读取源文件的全部行

        读取失败（文件不存在、无权限、被占用、编码错误）时返回空元组，
        与空文件同等对待，不会中断整个扫描。
        """
        if self.options.read_delay > 0:
            time.sleep(self.options.read_delay)

        try:
            with open(project_file.file_path, 'rb') as f:
                data = f.read()
            text = decode_source(data, self.options.encoding, self.options.errors)
        except (OSError, UnicodeError, ValueError) as e:
            logger.debug("读取文件失败 %s: %s", project_file.file_path, e)
            return ()

        return split_lines(text)


def decode_source(data: bytes, encoding: str, errors: str) -> str:
    """有BOM时按BOM解码，否则使用配置的编码"""
    for bom, bom_encoding in _BOM_ENCODINGS:
        if data.startswith(bom):
            return data[len(bom):].decode(bom_encoding, errors)
    return data.decode(encoding, errors)


def split_lines(text: str) -> Tuple[str, ...]:
    """按 \\r\\n、\\n、\\r 拆行，末尾换行不产生额外空行"""
    lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
    if lines[-1] == '':
        lines.pop()
    return tuple(lines)
