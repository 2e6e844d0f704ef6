from typing import Callable

from PyQt5.QtCore import QMutex, QMutexLocker


class CancellationToken:
    """
    扫描取消令牌

    cancel() 与 commit() 共用同一把锁：cancel() 返回之后，
    被取消的扫描不会再向资源条目写入任何结果。
    """

    def __init__(self):
        self._cancelled = False
        self._mutex = QMutex()

    def cancel(self):
        """请求取消（可重复调用）"""
        with QMutexLocker(self._mutex):
            self._cancelled = True

    def is_cancelled(self) -> bool:
        """检查是否已请求取消"""
        with QMutexLocker(self._mutex):
            return self._cancelled

    def commit(self, apply: Callable[[], None]) -> bool:
        """
        在未取消时执行写入操作

        Returns:
            是否执行了写入
        """
        with QMutexLocker(self._mutex):
            if self._cancelled:
                return False
            apply()
            return True
