from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PyQt5.QtCore import QCoreApplication

from dataform.resource_model import ProjectFile, ResourceEntity
from dataform.scan_options import ScanOptions


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture()
def options() -> ScanOptions:
    return ScanOptions(max_workers=4, read_delay=0)


@pytest.fixture()
def write_source(tmp_path: Path) -> Callable[[str, str], ProjectFile]:
    def _write(name: str, text: str) -> ProjectFile:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return ProjectFile(str(path))

    return _write


@pytest.fixture()
def strings_entity() -> ResourceEntity:
    entity = ResourceEntity("Strings")
    for key in ("Greeting", "Farewell", "Unused"):
        entity.add_entry(key)
    return entity


@pytest.fixture()
def errors_entity() -> ResourceEntity:
    entity = ResourceEntity("Errors")
    for key in ("NotFound", "Greeting"):
        entity.add_entry(key)
    return entity


@pytest.fixture()
def sample_project(write_source) -> list[ProjectFile]:
    return [
        write_source(
            "src/Program.cs",
            "using System;\n"
            "class Program {\n"
            "    void Main() {\n"
            "        Console.WriteLine(Strings.Greeting);\n"
            "        Console.WriteLine(Errors.NotFound);\n"
            "        var s = MyStrings.Greeting;\n"
            "        Show(Strings.Farewell, Strings.Greeting);\n"
            "    }\n"
            "}\n",
        ),
        write_source(
            "src/Module1.vb",
            "Module Module1\n"
            "    Sub Main()\n"
            "        MsgBox(strings.greeting)\n"
            "    End Sub\n"
            "End Module\n",
        ),
        write_source("src/Strings.Designer.cs", "public static string Greeting => Strings.Greeting;\n"),
        write_source("src/Strings.resx", "<data name=\"Greeting\">Strings.Greeting</data>\n"),
        ProjectFile("src/Missing.cs"),
    ]
