"""Tests for repository-wide .NET preferences."""

from agent_primer.manifests import ProjectDeclaration, read_declarations
from agent_primer.preferences import (
    nullable_enabled,
    preferred_mocking_framework,
    preferred_test_framework,
    preferred_ui_libraries,
    uses_windows_forms,
)
from agent_primer.scoring import UNKNOWN


def decl(name="P.csproj", readable=True, **flags):
    return ProjectDeclaration(name=name, flags={k: (v,) for k, v in flags.items()}, readable=readable)


class TestFrameworks:
    def test_from_package_names(self):
        packages = [("NUnit", ""), ("NUnit3TestAdapter", ""), ("xunit", ""), ("NSubstitute", "")]
        assert preferred_test_framework(packages) == "NUnit"
        assert preferred_mocking_framework(packages) == "NSubstitute"

    def test_descriptions_are_not_signals(self):
        packages = [("Acme.Testing", "Helpers for xunit and moq users")]
        assert preferred_test_framework(packages) == UNKNOWN
        assert preferred_mocking_framework(packages) == UNKNOWN

    def test_no_packages(self):
        assert preferred_test_framework([]) == UNKNOWN
        assert preferred_mocking_framework([]) == UNKNOWN


class TestNullable:
    def test_no_projects_reports_disabled(self):
        assert nullable_enabled([]) is False

    def test_half_disabled_is_enabled(self):
        projects = [decl(Nullable="enable"), decl(), decl(Nullable="Enable"), decl(Nullable="disable")]
        assert nullable_enabled(projects) is True

    def test_majority_disabled(self):
        assert nullable_enabled([decl(Nullable="enable"), decl(), decl(Nullable="warnings")]) is False

    def test_unreadable_projects_do_not_disable(self):
        assert nullable_enabled([decl(Nullable="enable"), decl(readable=False), decl(readable=False)]) is True


class TestUiLibraries:
    def test_windows_forms_first_declaring_project_wins(self):
        assert uses_windows_forms([decl(), decl(UseWindowsForms="true"), decl(UseWPF="true")])
        assert not uses_windows_forms([decl(UseWPF="True"), decl(UseWindowsForms="true")])
        assert not uses_windows_forms([decl(UseWindowsForms="false")])

    def test_wpf_and_winforms(self, tmp_path):
        (tmp_path / "MainWindow.xaml").write_text("<Window />")
        (tmp_path / "App.xaml").write_text("<Application />")
        projects = [decl(UseWindowsForms="true")]
        assert preferred_ui_libraries(tmp_path, projects) == ["WPF", "WinForms"]

    def test_winforms_last_even_when_avalonia_is_weaker(self, tmp_path):
        (tmp_path / "View.axaml").write_text("<UserControl />")
        assert preferred_ui_libraries(tmp_path, [decl(UseWindowsForms="true")]) == ["Avalonia", "WinForms"]

    def test_unknown_without_evidence(self, tmp_path):
        assert preferred_ui_libraries(tmp_path, []) == [UNKNOWN]

    def test_sample_solution(self, sample_solution):
        projects = read_declarations(sample_solution)
        assert preferred_ui_libraries(sample_solution, projects) == ["Avalonia"]
        assert nullable_enabled(projects) is True
