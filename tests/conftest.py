"""Shared test fixtures for typescope tests."""

from pathlib import Path
from types import MappingProxyType

import pytest

from typescope.analysis.models import (
    FileOverview,
    FunctionInformation,
    ProjectOverview,
    PropertyInformation,
    TypeInformation,
)
from typescope.scanning.syntax import TypeKind


@pytest.fixture
def scan_root():
    """Root directory that sample overviews are reported relative to."""
    return Path("/project")


@pytest.fixture
def sample_overview(scan_root):
    """Two files: a User struct with a Repository protocol, and a Service class."""
    user = TypeInformation(
        kind=TypeKind.STRUCT,
        functions=(
            FunctionInformation(
                name="init",
                return_type="Void",
                argument_types=("String",),
                used_types=frozenset({"String"}),
            ),
        ),
        properties=(PropertyInformation(name="name", type="String"),),
        used_types=frozenset({"String", "Codable"}),
    )
    repository = TypeInformation(
        kind=TypeKind.PROTOCOL,
        functions=(
            FunctionInformation(
                name="find",
                return_type="User",
                argument_types=("String",),
                used_types=frozenset({"String", "User"}),
            ),
        ),
        used_types=frozenset({"User", "String"}),
    )
    service = TypeInformation(
        kind=TypeKind.CLASS,
        properties=(PropertyInformation(name="repository", type="Repository"),),
        used_types=frozenset({"Repository"}),
    )
    files = {
        scan_root / "Sources" / "Service.swift": FileOverview(types=MappingProxyType({"Service": service})),
        scan_root / "Sources" / "Models" / "User.swift": FileOverview(
            types=MappingProxyType({"User": user, "Repository": repository})
        ),
    }
    return ProjectOverview(
        files=MappingProxyType(files),
        folders=(scan_root / "Sources", scan_root / "Sources" / "Models"),
    )


@pytest.fixture
def swift_project(tmp_path):
    """A small Swift package on disk."""
    sources = tmp_path / "Sources" / "App"
    sources.mkdir(parents=True)
    (sources / "User.swift").write_text(
        "struct User: Codable {\n"
        "    let name: String\n"
        "    let friends: [User]\n"
        "}\n"
    )
    (sources / "Store.swift").write_text(
        "class Store {\n"
        "    var users: Dictionary<String, User>\n"
        "    init(users: Dictionary<String, User>) {\n"
        "        self.users = users\n"
        "    }\n"
        "    func user(named name: String) -> User? {\n"
        "        return users[name]\n"
        "    }\n"
        "}\n"
    )
    return tmp_path
