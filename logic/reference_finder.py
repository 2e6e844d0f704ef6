import concurrent.futures
import logging
import multiprocessing as mp
import time
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from dataform.code_reference import CodeReference
from dataform.resource_model import FileClassifier, ProjectFile, ResourceTableEntry
from dataform.scan_options import ScanOptions
from dataform.scan_statistics import ScanStatistics
from logic.cancellation import CancellationToken
from logic.file_classifier import ExtensionFileClassifier
from logic.file_io import SourceFileReader
from logic.line_segmenter import get_line_segments
from logic.word_matcher import find_whole_word_offsets

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class SourceContent(NamedTuple):
    """已读入内存的源文件"""
    project_file: ProjectFile
    lines: Tuple[str, ...]
    case_sensitive: bool


class GroupResult(NamedTuple):
    """一个基础名称分组的扫描结果，每个条目一个预先分配的结果列表"""
    base_name: str
    slots: List[Tuple[ResourceTableEntry, List[CodeReference]]]


class CodeReferenceFinder:
    """代码引用查找器 - 按基础名称分组并行扫描所有源文件"""

    def __init__(self, classifier: Optional[FileClassifier] = None,
                 options: Optional[ScanOptions] = None,
                 reader: Optional[SourceFileReader] = None):
        self.options = options or ScanOptions()
        self.classifier = classifier or ExtensionFileClassifier()
        self.reader = reader or SourceFileReader(self.options)
        # 使用CPU核心数，但限制最大值避免过度创建线程
        self.max_workers = min(self.options.max_workers or mp.cpu_count(), 8)

    def run_scan(self, entries: Iterable[ResourceTableEntry], source_files: Iterable[ProjectFile],
                 token: Optional[CancellationToken] = None,
                 progress_callback: Optional[ProgressCallback] = None) -> Optional[ScanStatistics]:
        """
        扫描源文件，把找到的引用写入每个条目的 code_references

        Args:
            entries: 资源条目
            source_files: 候选源文件（资源文件和设计器文件会被排除）
            token: 取消令牌
            progress_callback: 进度回调 (已完成分组数, 分组总数)

        Returns:
            扫描统计；扫描被取消时返回 None

        Raises:
            外部组件（文件分类、文件读取）抛出的异常，此时未赋值的条目已被设为空列表
        """
        token = token or CancellationToken()
        entries = list(entries)
        start_time = time.time()

        if not token.commit(lambda: self._reset_entries(entries)):
            return None

        try:
            return self._find_references(entries, source_files, token, progress_callback, start_time)
        except Exception:
            # 外部组件出错时条目仍然要得到结果（可能为空）
            token.commit(lambda: self._fill_unset_entries(entries))
            raise

    def _find_references(self, entries: List[ResourceTableEntry], source_files: Iterable[ProjectFile],
                         token: CancellationToken, progress_callback: Optional[ProgressCallback],
                         start_time: float) -> Optional[ScanStatistics]:
        sources = self._read_sources(source_files, token)
        if sources is None:
            return None

        groups = self._group_by_base_name(entries)

        stats = ScanStatistics()
        stats.total_files = len(sources)
        stats.total_lines = sum(len(source.lines) for source in sources)
        stats.total_groups = len(groups)
        stats.total_entries = len(entries)

        logger.info("🚀 开始查找代码引用: %d 个文件, %d 行, %d 个分组, %d 个条目",
                    stats.total_files, stats.total_lines, stats.total_groups, stats.total_entries)

        if groups:
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=min(self.max_workers, len(groups)),
                thread_name_prefix="CodeReferenceWorker"
            ) as executor:
                future_to_group = {
                    executor.submit(self._scan_group, base_name, group_entries, sources, token): base_name
                    for base_name, group_entries in groups.items()
                }

                completed_groups = 0
                for future in concurrent.futures.as_completed(future_to_group):
                    if token.is_cancelled():
                        for f in future_to_group:
                            if not f.done():
                                f.cancel()
                        break

                    try:
                        group_result = future.result()
                    except Exception:
                        logger.exception("❌ 分组扫描失败: %s", future_to_group[future])
                        group_result = None

                    if group_result is not None:
                        if not token.commit(lambda: self._commit_group(group_result)):
                            break
                        stats.total_references += sum(len(refs) for _, refs in group_result.slots)

                    completed_groups += 1
                    if progress_callback is not None:
                        progress_callback(completed_groups, len(groups))

        if not token.commit(lambda: self._fill_unset_entries(entries)):
            logger.info("🛑 代码引用查找已取消")
            return None

        stats.search_time = time.time() - start_time
        stats.calculate_throughput()
        stats.update_memory_usage()

        logger.info("✅ 代码引用查找完成: %d 个引用, 耗时 %.3f秒",
                    stats.total_references, stats.search_time)
        return stats

    def _read_sources(self, source_files: Iterable[ProjectFile],
                      token: CancellationToken) -> Optional[List[SourceContent]]:
        """一次性读入所有待扫描的源文件"""
        sources = []
        for project_file in source_files:
            if self.classifier.is_resource_file(project_file) or self.classifier.is_designer_file(project_file):
                continue
            if token.is_cancelled():
                return None

            sources.append(SourceContent(
                project_file,
                self.reader.read_all_lines(project_file),
                not self.classifier.is_visual_basic_file(project_file),
            ))
        return sources

    @staticmethod
    def _group_by_base_name(entries: List[ResourceTableEntry]) -> Dict[str, List[ResourceTableEntry]]:
        groups: Dict[str, List[ResourceTableEntry]] = {}
        for entry in entries:
            groups.setdefault(entry.owner.base_name, []).append(entry)
        return groups

    def _scan_group(self, base_name: str, group_entries: List[ResourceTableEntry],
                    sources: List[SourceContent], token: CancellationToken) -> Optional[GroupResult]:
        """扫描一个分组：先匹配基础名称，命中后再逐个匹配条目的键"""
        slots = [(entry, []) for entry in group_entries]

        for source in sources:
            if token.is_cancelled():
                return None

            case_sensitive = source.case_sensitive

            for line_number, line in enumerate(source.lines, start=1):
                base_name_offsets = list(find_whole_word_offsets(line, base_name, case_sensitive))
                if not base_name_offsets:
                    continue

                for entry, references in slots:
                    key = entry.key
                    key_offsets = list(find_whole_word_offsets(line, key, case_sensitive))
                    if not key_offsets:
                        continue

                    segments = get_line_segments(line, base_name_offsets, len(base_name),
                                                 key_offsets, len(key))
                    references.append(CodeReference(source.project_file, line_number, segments))

        return GroupResult(base_name, slots)

    @staticmethod
    def _reset_entries(entries: List[ResourceTableEntry]):
        for entry in entries:
            entry.code_references = None

    @staticmethod
    def _commit_group(group_result: GroupResult):
        for entry, references in group_result.slots:
            if references:
                entry.code_references = references

    @staticmethod
    def _fill_unset_entries(entries: List[ResourceTableEntry]):
        for entry in entries:
            if entry.code_references is None:
                entry.code_references = []
