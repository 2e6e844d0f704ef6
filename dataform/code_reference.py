from dataclasses import dataclass
from typing import Tuple

from dataform.resource_model import ProjectFile


@dataclass(frozen=True)
class CodeReference:
    """代码引用数据类 - 记录资源条目在源文件中的一次出现"""
    project_file: ProjectFile       # 所在源文件（共享引用）
    line_number: int                # 行号（从1开始）
    line_segments: Tuple[str, ...]  # 五段拆分：前文、首个匹配、中间、第二个匹配、后文

    @property
    def line_text(self) -> str:
        """拼接后的行内容（前后空白已被裁剪）"""
        return "".join(self.line_segments)
