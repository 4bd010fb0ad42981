"""Tests for the default workspace collaborators."""

import pytest

from gocomplete.config import SuggestConfig
from gocomplete.domain.types import TextEdit
from gocomplete.infrastructure.workspace import (
    FilenamePackageGuesser,
    GoEnvModuleDetector,
    GopathPackageRoot,
    GopkgsPackageSource,
    PreludeImportEditor,
    guess_package_names,
    parse_gopkgs_output,
)

from stubs import posix_only, write_script


def edit_tuples(edits: list[TextEdit]) -> list[tuple]:
    return [
        (e.range.start.line, e.range.start.character, e.range.end.line, e.range.end.character, e.new_text)
        for e in edits
    ]


class TestImportEdits:
    """Edits that add an import declaration."""

    def test_adds_to_import_block(self):
        text = 'package main\n\nimport (\n\t"fmt"\n)\n'
        edits = PreludeImportEditor().import_edits(text, "os")
        assert edit_tuples(edits) == [(3, 0, 3, 0, '\t"os"\n')]

    def test_collapses_single_imports_into_block(self):
        text = 'package main\n\nimport "fmt"\nimport "io"\n\nfunc main() {}\n'
        edits = PreludeImportEditor().import_edits(text, "os")
        assert edit_tuples(edits) == [
            (2, 0, 2, 0, 'import (\n\t"os"\n'),
            (2, 0, 2, 12, '\t"fmt"'),
            (3, 0, 3, 11, '\t"io"'),
            (4, 0, 4, 0, ")\n"),
        ]

    def test_inserts_block_after_package_clause(self):
        text = "package main\n\nfunc main() {}\n"
        edits = PreludeImportEditor().import_edits(text, "os")
        assert edit_tuples(edits) == [(1, 0, 1, 0, '\nimport (\n\t"os"\n)\n')]

    def test_no_package_clause_means_no_edits(self):
        assert PreludeImportEditor().import_edits("func main() {}\n", "os") == []


class TestPackageNameGuessing:
    """Package clause proposals from the file location."""

    def test_main_file(self, tmp_path):
        assert guess_package_names(str(tmp_path / "main.go")) == ["main"]

    def test_directory_name(self, tmp_path):
        directory = tmp_path / "go-yaml.v2"
        directory.mkdir()
        assert guess_package_names(str(directory / "decode.go")) == ["v2"]

    def test_go_segment_is_ignored(self, tmp_path):
        directory = tmp_path / "redis.go"
        directory.mkdir()
        assert guess_package_names(str(directory / "client.go")) == ["redis"]

    def test_test_file_adds_external_test_package(self, tmp_path):
        directory = tmp_path / "util"
        directory.mkdir()
        assert guess_package_names(str(directory / "util_test.go")) == ["util", "util_test"]

    def test_directory_with_main_file(self, tmp_path):
        directory = tmp_path / "cmd"
        directory.mkdir()
        (directory / "main.go").write_text("package main\n")
        assert guess_package_names(str(directory / "flags.go")) == ["main"]

    @pytest.mark.asyncio
    async def test_async_guesser(self, tmp_path):
        directory = tmp_path / "util"
        directory.mkdir()
        assert await FilenamePackageGuesser().guess_package_names(str(directory / "util.go")) == ["util"]


class TestPackageRoot:
    """Import path prefix inside GOPATH."""

    def test_inside_gopath(self, tmp_path):
        src = tmp_path / "gopath" / "src" / "example.com" / "app"
        config = SuggestConfig(toolsGopath=str(tmp_path / "gopath"))

        root = GopathPackageRoot(config).package_root(str(src / "main.go"))

        assert root == "example.com/app"

    def test_workspace_folder_wins(self, tmp_path):
        src = tmp_path / "gopath" / "src"
        config = SuggestConfig(toolsGopath=str(tmp_path / "gopath"))
        resolver = GopathPackageRoot(config, workspace_folder=str(src / "example.com" / "app"))

        assert resolver.package_root(str(src / "example.com" / "app" / "cmd" / "main.go")) == "example.com/app"

    def test_outside_gopath(self, tmp_path):
        config = SuggestConfig(toolsGopath=str(tmp_path / "gopath"))
        assert GopathPackageRoot(config).package_root(str(tmp_path / "elsewhere" / "main.go")) is None


def test_parse_gopkgs_output() -> None:
    output = "fmt;fmt\nhttp;net/http\nmain;example.com/app/cmd\nfoo;example.com/app/internal/foo\nbogus\nerrors;github.com/pkg/errors\n"

    assert parse_gopkgs_output(output) == {
        "fmt": "fmt",
        "net/http": "http",
        "github.com/pkg/errors": "errors",
    }


@posix_only
class TestGoToolAdapters:
    """gopkgs and go env adapters against fake tools on PATH."""

    @pytest.mark.asyncio
    async def test_gopkgs_listing(self, isolated_path, tmp_path):
        write_script(
            isolated_path / "gopkgs",
            f'echo "$@" > "{tmp_path}/gopkgs-args.txt"\nprintf "fmt;fmt\\nhttp;net/http\\n"\n',
        )

        packages = await GopkgsPackageSource().importable_packages("/work/app/main.go", module_aware=True)

        assert packages == {"fmt": "fmt", "net/http": "http"}
        args = (tmp_path / "gopkgs-args.txt").read_text().split()
        assert args == ["-format", "{{.Name}};{{.ImportPath}}", "-workDir", "/work/app"]

    @pytest.mark.asyncio
    async def test_gopkgs_failure_gives_empty_listing(self, isolated_path):
        write_script(isolated_path / "gopkgs", "exit 1\n")
        assert await GopkgsPackageSource().importable_packages("/work/app/main.go", module_aware=False) == {}

    @pytest.mark.asyncio
    async def test_missing_gopkgs(self, isolated_path):
        assert await GopkgsPackageSource().importable_packages("/work/app/main.go", module_aware=False) == {}

    @pytest.mark.asyncio
    async def test_module_aware_directory(self, isolated_path, tmp_path):
        write_script(isolated_path / "go", 'echo "$PWD/go.mod"\n')
        assert await GoEnvModuleDetector().is_module_aware(str(tmp_path)) is True

    @pytest.mark.asyncio
    async def test_gopath_directory(self, isolated_path, tmp_path):
        write_script(isolated_path / "go", "echo\n")
        assert await GoEnvModuleDetector().is_module_aware(str(tmp_path)) is False
