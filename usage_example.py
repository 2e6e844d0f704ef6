#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CodeReferenceScanner 使用示例
展示如何在后台查找资源条目在源代码中的引用
"""

import logging
import os
import sys
import tempfile

from PyQt5.QtCore import QCoreApplication

from dataform.resource_model import ProjectFile, ResourceEntity
from logic.parallel_search import CodeReferenceScanner


def create_sample_project(root: str) -> list:
    """生成示例源文件"""
    sources = {
        "Program.cs": "class Program {\n"
                      "    void Main() {\n"
                      "        Console.WriteLine(Strings.Greeting);\n"
                      "        Console.WriteLine(Strings.Farewell);\n"
                      "    }\n"
                      "}\n",
        "Module1.vb": "Module Module1\n"
                      "    Sub Main()\n"
                      "        MsgBox(strings.greeting)\n"
                      "    End Sub\n"
                      "End Module\n",
        "Strings.Designer.cs": "internal static string Greeting => Strings.Greeting;\n",
    }

    files = []
    for name, text in sources.items():
        path = os.path.join(root, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        files.append(ProjectFile(path))
    return files


def example_basic_usage(app: QCoreApplication, root: str):
    """基本使用示例"""
    print("🔍 基本使用示例")
    print("-" * 40)

    strings = ResourceEntity("Strings")
    for key in ("Greeting", "Farewell", "Unused"):
        strings.add_entry(key)

    files = create_sample_project(root)
    scanner = CodeReferenceScanner()

    def on_completed(stats):
        print(f"\n✅ 查找完成! {stats}")
        for entry in strings.entries:
            print(f"\n📋 {entry.owner.base_name}.{entry.key}: {len(entry.code_references)} 个引用")
            for ref in entry.code_references:
                before, first, middle, second, after = ref.line_segments
                print(f"  {os.path.basename(ref.project_file.file_path)}:{ref.line_number}  "
                      f"{before}[{first}]{middle}[{second}]{after}")
        app.quit()

    scanner.scan_completed.connect(on_completed)
    scanner.scan_progress.connect(lambda done, total: print(f"⏳ 进度: {done}/{total} 个分组"))

    # 立即返回，扫描在后台线程进行
    scanner.begin_find([strings], files)
    app.exec_()
    scanner.wait()


def main():
    """主函数"""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QCoreApplication(sys.argv)

    print("🔬 代码引用查找使用示例")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as root:
        example_basic_usage(app, root)

    print("\n" + "=" * 60)
    print("✅ 示例运行完成!")
    print("=" * 60)


if __name__ == "__main__":
    main()
