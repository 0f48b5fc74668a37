"""Tests for projsync.generation.descriptor."""

from __future__ import annotations

from projsync.generation import DescriptorBuilder
from projsync.generation.descriptor import BASE_NO_WARN
from projsync.guids import guid_for
from projsync.models import Module
from projsync.parsing import parse_response_file
from projsync.paths import PathMapper


def _builder(**kwargs) -> DescriptorBuilder:  # type: ignore[no-untyped-def]
    return DescriptorBuilder(PathMapper("/project", user_extensions=["txt"]), **kwargs)


def test_module_without_primary_sources_yields_nothing() -> None:
    module = Module(name="Shaders", output_path="Temp/Shaders.dll", source_files=("Assets/A.shader",))

    assert _builder().build(module) is None


def test_defaults_without_response_file() -> None:
    module = Module(name="Game", output_path="Temp/Game.dll", source_files=("Assets/A.cs",))

    descriptor = _builder().build(module)

    assert descriptor is not None
    assert descriptor.guid == guid_for("Game")
    assert descriptor.path == "Game.csproj"
    assert descriptor.defines == ["DEBUG", "TRACE"]
    assert descriptor.no_warn == list(BASE_NO_WARN)
    assert descriptor.warn_as_errors == []
    assert descriptor.warning_level == 4
    assert descriptor.lang_version == "latest"
    assert descriptor.allow_unsafe is False
    assert descriptor.treat_warnings_as_errors is False
    assert descriptor.nullable is None


def test_sets_are_unions_and_scalars_prefer_response_file() -> None:
    module = Module(
        name="Game",
        output_path="Temp/Game.dll",
        source_files=("Assets/A.cs",),
        defines=("MODULE_DEF", "DEBUG"),
        unsafe_allowed=True,
        warning_level=2,
        lang_version="7.3",
    )
    options = parse_response_file(
        "-define:RSP_DEF;MODULE_DEF -nowarn:10 -nowarn:11,12 -w:1 -unsafe- -warnaserror+ -warnaserror:10,11"
    )

    descriptor = _builder().build(module, options)

    assert descriptor is not None
    assert descriptor.defines == ["DEBUG", "TRACE", "MODULE_DEF", "RSP_DEF"]
    assert descriptor.no_warn == ["0169", "10", "11", "12"]
    assert descriptor.warning_level == 1
    assert descriptor.lang_version == "7.3"
    assert descriptor.allow_unsafe is False
    assert descriptor.treat_warnings_as_errors is True
    assert descriptor.warn_as_errors == ["10", "11"]


def test_module_scalars_used_when_response_file_silent() -> None:
    module = Module(
        name="Game",
        output_path="Temp/Game.dll",
        source_files=("Assets/A.cs",),
        unsafe_allowed=True,
        treat_warnings_as_errors=True,
    )

    descriptor = _builder().build(module, parse_response_file("-nowarn:1"))

    assert descriptor is not None
    assert descriptor.allow_unsafe is True
    assert descriptor.treat_warnings_as_errors is True


def test_files_are_split_into_compile_and_non_compile_items() -> None:
    module = Module(
        name="Game",
        output_path="Temp/Game.dll",
        source_files=("/project/Assets/A.cs", "Assets/B.shader", "Assets/C.txt", "Assets/D.dll", "Assets/A.cs"),
    )
    builder = _builder(assets_for=lambda name: ["Assets/UI/Main.uss", "Assets/Image.png"])

    descriptor = builder.build(module)

    assert descriptor is not None
    assert descriptor.compile_items == ["Assets\\A.cs"]
    assert descriptor.non_compile_items == ["Assets\\B.shader", "Assets\\C.txt", "Assets\\UI\\Main.uss"]


def test_include_path_filter_hides_files() -> None:
    module = Module(
        name="Package",
        output_path="Temp/Package.dll",
        source_files=("Packages/com.example/A.cs",),
    )

    hidden = _builder(include_path=lambda path: not path.startswith("Packages/"))
    visible = _builder()

    assert hidden.build(module) is None
    assert visible.build(module) is not None


def test_response_file_paths_are_mapped() -> None:
    module = Module(name="Game", output_path="Temp/Game.dll", source_files=("Assets/A.cs",))
    options = parse_response_file(
        "-a:/project/Analyzers/One.dll;/opt/Two.dll -additionalfile:Assets/stylecop.json "
        "-ruleset:Assets/A.ruleset -ruleset:Assets/B.ruleset -doc:Docs/Game.xml -nullable"
    )

    descriptor = _builder().build(module, options)

    assert descriptor is not None
    assert descriptor.analyzers == ["Analyzers\\One.dll", "\\opt\\Two.dll"]
    assert descriptor.additional_files == ["Assets\\stylecop.json"]
    assert descriptor.rulesets == ["Assets\\A.ruleset", "Assets\\B.ruleset"]
    assert descriptor.documentation_files == ["Docs\\Game.xml"]
    assert descriptor.nullable == "enable"


def test_repeated_rulesets_and_docs_render_once_per_occurrence() -> None:
    module = Module(name="Game", output_path="Temp/Game.dll", source_files=("Assets/A.cs",))
    options = parse_response_file(
        "-ruleset:Assets/A.ruleset -ruleset:Assets/A.ruleset -doc:Game.xml -doc:Game.xml"
    )

    descriptor = _builder().build(module, options)

    assert descriptor is not None
    assert descriptor.rulesets == ["Assets\\A.ruleset", "Assets\\A.ruleset"]
    assert descriptor.documentation_files == ["Game.xml", "Game.xml"]
