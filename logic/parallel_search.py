import logging
from functools import partial
from typing import Iterable, List, Optional

from PyQt5.QtCore import QObject, QThread, pyqtSignal

from dataform.resource_model import FileClassifier, ProjectFile, ResourceEntity, ResourceTableEntry
from dataform.scan_options import ScanOptions
from logic.cancellation import CancellationToken
from logic.reference_finder import CodeReferenceFinder

logger = logging.getLogger(__name__)


class CodeReferenceWorker(QThread):
    """代码引用查找线程 - 在后台执行一次完整扫描"""

    # 信号定义
    progress_updated = pyqtSignal(int, int)  # (completed_groups, total_groups)
    scan_completed = pyqtSignal(object)  # ScanStatistics
    scan_cancelled = pyqtSignal()
    scan_failed = pyqtSignal(str)  # error message

    def __init__(self, finder: CodeReferenceFinder, entries: List[ResourceTableEntry],
                 source_files: List[ProjectFile]):
        super().__init__()
        self.finder = finder
        self.entries = entries
        self.source_files = source_files
        self.token = CancellationToken()
        self.superseded = False  # 被新的扫描取代

    def run(self):
        try:
            stats = self.finder.run_scan(self.entries, self.source_files, self.token,
                                         self.progress_updated.emit)
        except Exception as e:
            logger.exception("❌ 代码引用查找线程错误")
            self.scan_failed.emit(str(e))
            return

        if stats is None:
            self.scan_cancelled.emit()
        else:
            self.scan_completed.emit(stats)

    def stop(self):
        """停止扫描，不等待线程结束"""
        self.token.cancel()

    def is_stop_requested(self) -> bool:
        return self.token.is_cancelled()


class CodeReferenceScanner(QObject):
    """
    代码引用扫描管理器

    同一时间最多只有一个扫描在运行：begin_find() 会先取消正在进行的扫描，
    被取消的扫描不会再修改任何资源条目；被取代的扫描不会再发出信号。
    """

    scan_started = pyqtSignal()
    scan_progress = pyqtSignal(int, int)  # (completed_groups, total_groups)
    scan_completed = pyqtSignal(object)  # ScanStatistics
    scan_cancelled = pyqtSignal()
    scan_failed = pyqtSignal(str)  # error message

    def __init__(self, classifier: Optional[FileClassifier] = None,
                 options: Optional[ScanOptions] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.finder = CodeReferenceFinder(classifier, options)
        self._worker: Optional[CodeReferenceWorker] = None
        self._retired_workers: List[CodeReferenceWorker] = []  # 已取消但仍在运行的线程

    def begin_find(self, resource_entities: Iterable[ResourceEntity],
                   all_source_files: Iterable[ProjectFile]):
        """
        开始在后台查找代码引用（立即返回）

        Args:
            resource_entities: 资源容器，所有条目都会被扫描
            all_source_files: 候选源文件
        """
        self._cancel_current(superseded=True)

        entries = [entry for entity in resource_entities for entry in entity.entries]
        worker = CodeReferenceWorker(self.finder, entries, list(all_source_files))

        worker.progress_updated.connect(partial(self._on_progress, worker))
        worker.scan_completed.connect(partial(self._on_completed, worker))
        worker.scan_cancelled.connect(partial(self._on_cancelled, worker))
        worker.scan_failed.connect(partial(self._on_failed, worker))

        self._worker = worker
        worker.start(QThread.LowestPriority)

        logger.info("🚀 启动代码引用查找 - %d 个条目, %d 个文件",
                    len(entries), len(worker.source_files))
        self.scan_started.emit()

    def stop_find(self):
        """取消正在进行的扫描（可重复调用），不等待线程结束"""
        self._cancel_current(superseded=False)

    def _cancel_current(self, superseded: bool):
        worker = self._worker
        if worker is None:
            return

        worker.superseded = superseded
        worker.stop()
        self._worker = None
        self._retire(worker)
        logger.info("🛑 代码引用查找停止请求已发送")

    def is_running(self) -> bool:
        return self._worker is not None and self._worker.isRunning()

    def wait(self, msecs: int = -1) -> bool:
        """等待当前及已取消的扫描线程全部结束"""
        workers = list(self._retired_workers)
        if self._worker is not None:
            workers.append(self._worker)

        finished = True
        for worker in workers:
            finished = (worker.wait() if msecs < 0 else worker.wait(msecs)) and finished

        self._retired_workers = [w for w in self._retired_workers if not w.isFinished()]
        return finished

    def _retire(self, worker: CodeReferenceWorker):
        # 线程运行时不能被销毁，保留引用直到结束
        self._retired_workers = [w for w in self._retired_workers if not w.isFinished()]
        if not worker.isFinished():
            self._retired_workers.append(worker)

    def _on_progress(self, worker, completed: int, total: int):
        if worker is self._worker:
            self.scan_progress.emit(completed, total)

    def _on_completed(self, worker, stats):
        if worker is self._worker:
            self._worker = None
            self._retire(worker)
            self.scan_completed.emit(stats)

    def _on_cancelled(self, worker):
        self._retire(worker)
        if not worker.superseded:
            self.scan_cancelled.emit()

    def _on_failed(self, worker, message: str):
        self._retire(worker)
        if worker is self._worker:
            self._worker = None
            self.scan_failed.emit(message)


_default_scanner: Optional[CodeReferenceScanner] = None


def default_scanner() -> CodeReferenceScanner:
    """进程内共享的扫描管理器"""
    global _default_scanner
    if _default_scanner is None:
        _default_scanner = CodeReferenceScanner()
    return _default_scanner


def begin_find(resource_entities: Iterable[ResourceEntity], all_source_files: Iterable[ProjectFile]):
    default_scanner().begin_find(resource_entities, all_source_files)


def stop_find():
    default_scanner().stop_find()
