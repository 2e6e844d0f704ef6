"""
资源模型接口

扫描核心只通过这里定义的属性访问外部的文件枚举与资源模型：
  - ProjectFile.file_path
  - ResourceEntity.base_name / ResourceEntity.entries
  - ResourceTableEntry.owner / key / code_references
任何拥有同名属性的对象都可以直接传入扫描器。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, runtime_checkable


@dataclass(eq=False)
class ProjectFile:
    """项目中的一个源文件"""
    file_path: str

    def __repr__(self):
        return f"ProjectFile({self.file_path!r})"


@dataclass(eq=False)
class ResourceTableEntry:
    """资源表中的一个条目"""
    owner: "ResourceEntity"
    key: str
    code_references: Optional[Sequence] = None  # None 表示尚未扫描

    def __repr__(self):
        return f"ResourceTableEntry({self.owner.base_name!r}, {self.key!r})"


@dataclass(eq=False)
class ResourceEntity:
    """资源容器 - 同一个基础名称下的所有条目"""
    base_name: str
    entries: List[ResourceTableEntry] = field(default_factory=list)

    def add_entry(self, key: str) -> ResourceTableEntry:
        entry = ResourceTableEntry(self, key)
        self.entries.append(entry)
        return entry

    def __repr__(self):
        return f"ResourceEntity({self.base_name!r}, {len(self.entries)} entries)"


@runtime_checkable
class FileClassifier(Protocol):
    """文件分类能力 - 由调用方注入"""

    def is_resource_file(self, project_file) -> bool: ...

    def is_designer_file(self, project_file) -> bool: ...

    def is_visual_basic_file(self, project_file) -> bool: ...
