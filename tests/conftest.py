"""Shared fixtures: tiny .NET solutions written into tmp_path."""

from pathlib import Path

import pytest

SDK_PROJECT = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
{properties}
  </PropertyGroup>
  <ItemGroup>
{items}
  </ItemGroup>
</Project>
"""


def make_project(
    root: Path,
    relpath: str,
    framework: str | None = "net8.0",
    references: tuple[str, ...] = (),
    packages: tuple[str, ...] = (),
    properties: dict[str, str] | None = None,
) -> Path:
    """Write an SDK-style .csproj and return its path."""
    props = dict(properties or {})
    if framework:
        props = {"TargetFramework": framework, **props}
    prop_xml = "\n".join(f"    <{k}>{v}</{k}>" for k, v in props.items())
    item_xml = "\n".join(
        [f'    <ProjectReference Include="{ref}" />' for ref in references]
        + [f'    <PackageReference Include="{pkg}" Version="1.0.0" />' for pkg in packages]
    )
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SDK_PROJECT.format(properties=prop_xml, items=item_xml))
    return path


@pytest.fixture
def project_factory(tmp_path):
    """Write projects beneath tmp_path: project_factory("App/App.csproj", references=...)."""

    def factory(relpath: str, **kwargs) -> Path:
        return make_project(tmp_path, relpath, **kwargs)

    return factory


@pytest.fixture
def sample_solution(tmp_path, project_factory):
    """A small solution: an app and its tests on top of a shared core library."""
    project_factory(
        "src/App/App.csproj",
        references=(r"..\Core\Core.csproj",),
        packages=("Serilog", "Serilog.Sinks.Console", "Avalonia"),
        properties={"Nullable": "enable"},
    )
    project_factory(
        "src/Core/Core.csproj",
        framework="netstandard2.0",
        packages=("Newtonsoft.Json", "System.Text.Json"),
    )
    project_factory(
        "tests/App.Tests/App.Tests.csproj",
        references=(r"..\..\src\App\App.csproj", r"..\..\src\Core\Core.csproj"),
        packages=("NUnit", "NUnit3TestAdapter", "Moq", "Microsoft.NET.Test.Sdk"),
        properties={"Nullable": "enable"},
    )
    (tmp_path / "src" / "App" / "MainWindow.axaml").write_text("<Window />")
    (tmp_path / "src" / "App" / "Strings.resx").write_text("<root />")
    (tmp_path / "src" / "App" / "Strings.fr.resx").write_text("<root />")
    (tmp_path / "README.md").write_text("# Sample\n")
    return tmp_path
