"""
扫描性能测试
生成较大的源文件集合，检查结果数量与统计信息
"""
from __future__ import annotations

from pathlib import Path

import pytest

from dataform.resource_model import ProjectFile, ResourceEntity
from dataform.scan_options import ScanOptions
from logic.reference_finder import CodeReferenceFinder

KEYS = ["Title", "Message", "Error", "Warning", "Success"]


def generate_test_data(lines: int) -> str:
    """生成测试数据：每100行引用 Strings.Title，每50行引用 Errors.Error"""
    test_lines = []
    for i in range(lines):
        if i % 100 == 0:
            test_lines.append(f"    label{i}.Text = Strings.Title; // line {i}")
        elif i % 50 == 0:
            test_lines.append(f"    throw new Exception(Errors.Error + \"{i}\");")
        elif i % 25 == 0:
            test_lines.append(f"    var s{i} = Strings.ToString();")
        else:
            test_lines.append(f"    DoWork({i});")
    return "\n".join(test_lines) + "\n"


@pytest.fixture()
def large_project(tmp_path: Path) -> list[ProjectFile]:
    files = []
    for index in range(20):
        path = tmp_path / f"File{index}.cs"
        path.write_text(generate_test_data(2000), encoding="utf-8")
        files.append(ProjectFile(str(path)))
    return files


@pytest.fixture()
def entities() -> list[ResourceEntity]:
    strings = ResourceEntity("Strings")
    errors = ResourceEntity("Errors")
    for key in KEYS:
        strings.add_entry(key)
        errors.add_entry(key)
    return [strings, errors]


@pytest.mark.parametrize("max_workers", [1, 4])
def test_large_scan(large_project, entities, max_workers: int) -> None:
    finder = CodeReferenceFinder(options=ScanOptions(max_workers=max_workers, read_delay=0))
    entries = [entry for entity in entities for entry in entity.entries]

    stats = finder.run_scan(entries, large_project)

    strings, errors = entities
    counts = {(entry.owner.base_name, entry.key): len(entry.code_references) for entry in entries}
    assert counts[("Strings", "Title")] == 20 * 20
    assert counts[("Errors", "Error")] == 20 * 20
    assert sum(counts.values()) == 800

    assert stats.total_lines == 20 * 2000
    assert stats.total_references == 800
    assert stats.search_time > 0
    assert stats.throughput > 0
    assert stats.memory_usage > 0

    title_refs = strings.entries[0].code_references
    assert [ref.line_number for ref in title_refs[:3]] == [1, 101, 201]
    assert title_refs[0].project_file is large_project[0]
