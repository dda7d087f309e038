"""
Tests for the dependency resolver.
"""

import os

import pytest

from depcopy.depcopy_exceptions import AssemblyLookupError, DependencyResolutionError
from depcopy.dependency_models import DependencyProject
from depcopy.dependency_resolver import DependencyResolver


@pytest.fixture
def resolver(lookup_factory, logger):
    return DependencyResolver(lookup_factory, logger)


def _paths(resolved):
    return [r.path for r in resolved]


class TestLiteralPaths:
    def test_literal_path_passes_through(self, resolver, literal_assembly):
        project = DependencyProject.from_paths([str(literal_assembly)])
        resolved = resolver.resolve(project)
        assert _paths(resolved) == [str(literal_assembly)]
        assert resolved[0].spec is project.dependencies[0]

    def test_missing_literal_is_not_checked(self, resolver, tmp_path):
        missing = str(tmp_path / "nope" / "Missing.dll")
        project = DependencyProject.from_paths([missing])
        assert _paths(resolver.resolve(project)) == [missing]

    def test_literal_non_binary_is_kept(self, resolver, library_dir):
        pdb = str(library_dir / "Alpha.pdb")
        project = DependencyProject.from_paths([pdb])
        assert _paths(resolver.resolve(project)) == [pdb]

    def test_empty_project(self, resolver, lookup_factory):
        assert resolver.resolve(DependencyProject()) == []
        assert lookup_factory.created == []


class TestWildcards:
    def test_keeps_only_binaries(self, resolver, library_dir):
        project = DependencyProject.from_paths([str(library_dir / "*")])
        assert _paths(resolver.resolve(project)) == [
            str(library_dir / "Alpha.dll"),
            str(library_dir / "Beta.exe"),
        ]

    def test_pattern_with_extension(self, resolver, library_dir):
        project = DependencyProject.from_paths([str(library_dir / "Alpha.*")])
        assert _paths(resolver.resolve(project)) == [str(library_dir / "Alpha.dll")]

    def test_question_mark(self, resolver, library_dir):
        project = DependencyProject.from_paths([str(library_dir / "Bet?.exe")])
        assert _paths(resolver.resolve(project)) == [str(library_dir / "Beta.exe")]

    def test_extension_filter_ignores_case(self, resolver, tmp_path):
        (tmp_path / "Upper.DLL").write_bytes(b"x")
        (tmp_path / "Upper.EXE").write_bytes(b"x")
        project = DependencyProject.from_paths([str(tmp_path / "*")])
        assert _paths(resolver.resolve(project)) == [
            str(tmp_path / "Upper.DLL"),
            str(tmp_path / "Upper.EXE"),
        ]

    def test_pattern_ignores_case(self, resolver, library_dir):
        project = DependencyProject.from_paths([str(library_dir / "alpha.DLL*")])
        assert _paths(resolver.resolve(project)) == [str(library_dir / "Alpha.dll")]

    def test_not_recursive(self, resolver, library_dir):
        nested = library_dir / "nested"
        nested.mkdir()
        (nested / "Deep.dll").write_bytes(b"x")
        project = DependencyProject.from_paths([str(library_dir / "*.dll")])
        assert _paths(resolver.resolve(project)) == [str(library_dir / "Alpha.dll")]

    def test_square_brackets_are_literal(self, resolver, tmp_path):
        (tmp_path / "Lib[1].dll").write_bytes(b"x")
        (tmp_path / "Lib1.dll").write_bytes(b"x")
        project = DependencyProject.from_paths([str(tmp_path / "Lib[1].*")])
        assert _paths(resolver.resolve(project)) == [str(tmp_path / "Lib[1].dll")]

    def test_no_matches(self, resolver, library_dir):
        project = DependencyProject.from_paths([str(library_dir / "*.so")])
        assert resolver.resolve(project) == []

    def test_missing_directory_fails(self, resolver, tmp_path):
        project = DependencyProject.from_paths([str(tmp_path / "missing" / "*.dll")])
        with pytest.raises(DependencyResolutionError) as excinfo:
            resolver.resolve(project)
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_pattern_without_directory_uses_cwd(self, resolver, library_dir, monkeypatch):
        monkeypatch.chdir(library_dir)
        project = DependencyProject.from_paths(["*.exe"])
        assert _paths(resolver.resolve(project)) == [os.path.join(os.curdir, "Beta.exe")]

    def test_custom_binary_extensions(self, lookup_factory, logger, library_dir):
        resolver = DependencyResolver(lookup_factory, logger, binary_extensions=[".pdb"])
        project = DependencyProject.from_paths([str(library_dir / "*")])
        assert _paths(resolver.resolve(project)) == [str(library_dir / "Alpha.pdb")]


class TestGacReferences:
    def test_gac_reference_is_looked_up(self, resolver, lookup_factory, literal_assembly):
        lookup_factory.locations["Gamma, Version=1.0.0.0"] = str(literal_assembly)
        project = DependencyProject.from_paths(["GAC:Gamma, Version=1.0.0.0"])

        assert _paths(resolver.resolve(project)) == [str(literal_assembly)]
        assert len(lookup_factory.created) == 1
        assert lookup_factory.created[0].requests == ["Gamma, Version=1.0.0.0"]
        assert lookup_factory.created[0].release_count == 1

    def test_lookup_created_once(self, resolver, lookup_factory, literal_assembly):
        lookup_factory.locations["Gamma"] = str(literal_assembly)
        lookup_factory.locations["Gamma2"] = str(literal_assembly)
        project = DependencyProject.from_paths(["GAC:Gamma", "GAC:Gamma2"])

        assert len(resolver.resolve(project)) == 2
        assert len(lookup_factory.created) == 1
        assert lookup_factory.created[0].release_count == 1

    def test_lookup_not_created_without_gac_references(
        self, resolver, lookup_factory, literal_assembly
    ):
        resolver.resolve(DependencyProject.from_paths([str(literal_assembly)]))
        assert lookup_factory.created == []

    def test_gac_result_with_wildcards_is_expanded(self, resolver, lookup_factory, library_dir):
        lookup_factory.locations["Everything"] = str(library_dir / "*")
        project = DependencyProject.from_paths(["GAC:Everything"])
        assert len(resolver.resolve(project)) == 2

    def test_lookup_failure_aborts_and_releases(self, resolver, lookup_factory, literal_assembly):
        project = DependencyProject.from_paths(
            ["GAC:Unknown", str(literal_assembly)]
        )
        with pytest.raises(AssemblyLookupError):
            resolver.resolve(project)
        assert lookup_factory.created[0].release_count == 1

    def test_release_after_later_failure(self, resolver, lookup_factory, literal_assembly, tmp_path):
        lookup_factory.locations["Gamma"] = str(literal_assembly)
        project = DependencyProject.from_paths(
            ["GAC:Gamma", str(tmp_path / "missing" / "*.dll")]
        )
        with pytest.raises(DependencyResolutionError):
            resolver.resolve(project)
        assert lookup_factory.created[0].release_count == 1

    def test_unexpected_lookup_error_is_wrapped(self, logger, literal_assembly):
        class BrokenLookup:
            def get_assembly_location(self, identity):
                raise RuntimeError("cache unavailable")

            def release(self):
                pass

        resolver = DependencyResolver(lambda project: BrokenLookup(), logger)
        with pytest.raises(DependencyResolutionError) as excinfo:
            resolver.resolve(DependencyProject.from_paths(["GAC:Gamma"]))
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_factory_failure_is_wrapped(self, logger):
        def factory(project):
            raise OSError("no cache")

        resolver = DependencyResolver(factory, logger)
        with pytest.raises(DependencyResolutionError):
            resolver.resolve(DependencyProject.from_paths(["GAC:Gamma"]))


class TestOrdering:
    def test_mixed_specs_resolve_in_order(self, resolver, lookup_factory, library_dir, literal_assembly):
        lookup_factory.locations["Gamma"] = str(literal_assembly)
        project = DependencyProject.from_paths(
            [str(library_dir / "*"), "GAC:Gamma", str(literal_assembly)]
        )
        assert _paths(resolver.resolve(project)) == [
            str(library_dir / "Alpha.dll"),
            str(library_dir / "Beta.exe"),
            str(literal_assembly),
            str(literal_assembly),
        ]
