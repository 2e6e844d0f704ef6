import psutil


class ScanStatistics:
    """扫描统计信息"""
    def __init__(self):
        self.total_files = 0
        self.total_lines = 0
        self.total_groups = 0
        self.total_entries = 0
        self.total_references = 0
        self.search_time = 0.0
        self.throughput = 0.0  # 行/秒
        self.memory_usage = 0.0  # MB

    def calculate_throughput(self):
        if self.search_time > 0:
            self.throughput = self.total_lines / self.search_time

    def update_memory_usage(self):
        self.memory_usage = psutil.Process().memory_info().rss / 1024 / 1024

    def __repr__(self):
        return (f"ScanStatistics(files={self.total_files}, lines={self.total_lines}, "
                f"groups={self.total_groups}, entries={self.total_entries}, "
                f"references={self.total_references}, time={self.search_time:.3f}s)")
