"""
Shared fixtures for depcopy tests.
"""

import pytest

from depcopy.assembly_lookup import AssemblyLookup
from depcopy.depcopy_exceptions import AssemblyLookupError
from depcopy.depcopy_logger import DepCopyLogger


class FakeAssemblyLookup(AssemblyLookup):
    """Resolves identities from a dict and counts releases."""

    def __init__(self, locations):
        self.locations = locations
        self.requests = []
        self.release_count = 0

    def get_assembly_location(self, identity):
        self.requests.append(identity)
        if identity not in self.locations:
            raise AssemblyLookupError(f"Unknown assembly '{identity}'")
        return self.locations[identity]

    def release(self):
        self.release_count += 1


class FakeLookupFactory:
    """Creates FakeAssemblyLookup instances and remembers them."""

    def __init__(self):
        self.locations = {}
        self.created = []

    def __call__(self, project):
        lookup = FakeAssemblyLookup(self.locations)
        self.created.append(lookup)
        return lookup


@pytest.fixture
def logger():
    return DepCopyLogger()


@pytest.fixture
def lookup_factory():
    return FakeLookupFactory()


@pytest.fixture
def library_dir(tmp_path):
    """
    A folder of build output: two binaries plus their symbols and docs.
    """
    lib = tmp_path / "lib"
    lib.mkdir()
    for name in ("Alpha.dll", "Beta.exe", "Alpha.pdb", "Alpha.xml"):
        (lib / name).write_bytes(name.encode("utf-8"))
    return lib


@pytest.fixture
def literal_assembly(tmp_path):
    """A single assembly outside the library folder."""
    other = tmp_path / "other"
    other.mkdir()
    path = other / "Gamma.dll"
    path.write_bytes(b"gamma")
    return path
