import os
from typing import Iterable

from dataform.resource_model import ProjectFile

# 资源文件扩展名
RESOURCE_EXTS = {".resx", ".resw"}

# 使用VB语法（标识符不区分大小写）的扩展名
VISUAL_BASIC_EXTS = {".vb"}

# 设计器生成文件的文件名后缀（不含扩展名）
DESIGNER_SUFFIX = ".designer"


class ExtensionFileClassifier:
    """按扩展名对项目文件分类"""

    def __init__(self, resource_exts: Iterable[str] = RESOURCE_EXTS,
                 visual_basic_exts: Iterable[str] = VISUAL_BASIC_EXTS,
                 designer_suffix: str = DESIGNER_SUFFIX):
        self.resource_exts = {ext.lower() for ext in resource_exts}
        self.visual_basic_exts = {ext.lower() for ext in visual_basic_exts}
        self.designer_suffix = designer_suffix.lower()

    def _split(self, project_file: ProjectFile):
        stem, ext = os.path.splitext(os.path.basename(project_file.file_path))
        return stem.lower(), ext.lower()

    def is_resource_file(self, project_file: ProjectFile) -> bool:
        _, ext = self._split(project_file)
        return ext in self.resource_exts

    def is_designer_file(self, project_file: ProjectFile) -> bool:
        # 例如 Resources.Designer.cs、Form1.designer.vb
        stem, _ = self._split(project_file)
        return stem.endswith(self.designer_suffix)

    def is_visual_basic_file(self, project_file: ProjectFile) -> bool:
        _, ext = self._split(project_file)
        return ext in self.visual_basic_exts
