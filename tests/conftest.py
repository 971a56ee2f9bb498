"""Shared pytest fixtures for the aix test suite.

Provides reusable fixtures for:
- An isolated ``Config`` whose local data directory lives under ``tmp_path``
- A template tree matching the remote repository layout
- A fake git client that "clones" a template tree without touching the network
- Mock asyncio subprocesses
- A real git repository for integration tests
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from aix.config import Config, LocalStore, TemplateRepository
from aix.git import GitClient


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------

TEMPLATE_FILES: dict[str, str] = {
    "standalone/Cargo.toml": (
        "[package]\n"
        'name = "{{ crate_name }}"\n'
        'rust-version = "{{rust_version}}"\n'
    ),
    "standalone/src/main.rs": "use {{crate_name}}::Result;\n\nfn main() {}\n",
    "standalone/src/error.rs": "pub type Result<T> = core::result::Result<T, Error>;\n",
    "workspace/Cargo.toml": '[workspace]\nmembers = ["{{ crate_name }}"]\n',
    "extras/docker/Dockerfile": (
        "FROM rust:latest AS builder\n"
        "RUN cargo build --release && mv ./target/release/{{crate_name}} ./{{crate_name}}\n"
        'CMD ["./{{crate_name}}"]\n'
    ),
    "extras/docker/.dockerignore": "target\n",
    "extras/ci/github/.github/workflows/ci.yml": (
        "name: CI\n"
        "on:\n"
        "  push:\n"
        '    branches: ["main"]\n'
        "jobs:\n"
        "  test:\n"
        "    runs-on: ${{ matrix.os }}\n"
        "    strategy:\n"
        "      matrix:\n"
        "        os: [ubuntu-latest]\n"
        "    steps:\n"
        "      - uses: actions/checkout@v4\n"
        "      - run: cargo test\n"
    ),
}


def write_template_tree(root: Path) -> Path:
    """Write the template layout (``standalone/``, ``workspace/``, ``extras/``) under *root*."""
    for relative, content in TEMPLATE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def template_files() -> dict[str, str]:
    """Relative path to content for every file in the template tree."""
    return dict(TEMPLATE_FILES)


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A standalone template tree outside any cache."""
    return write_template_tree(tmp_path / "template-source")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config rooted in a temporary local data directory (cache empty)."""
    return Config(
        store=LocalStore(local_data_dir=tmp_path / "data" / "aix"),
        repository=TemplateRepository(url="https://example.invalid/aix.git"),
    )


@pytest.fixture
def cached_config(config: Config) -> Config:
    """Config whose templates cache is already populated."""
    write_template_tree(config.templates_dir)
    return config


# ---------------------------------------------------------------------------
# Fake git client
# ---------------------------------------------------------------------------

class FakeGitClient(GitClient):
    """GitClient that materialises a template tree instead of running git.

    ``clone_sparse`` writes the templates under ``<dir>/templates`` together
    with files outside it (which a real sparse checkout might also leave
    behind) and records every call in ``calls``.
    """

    def __init__(self, installed: bool = True) -> None:
        super().__init__()
        self.installed = installed
        self.calls: list[tuple] = []

    def is_installed(self) -> bool:
        return self.installed

    async def clone_sparse(self, directory, url, branch=None) -> None:
        self.calls.append(("clone_sparse", Path(directory), url, branch))
        directory = Path(directory)
        write_template_tree(directory / "templates")
        (directory / "README.md").write_text("# aix\n", encoding="utf-8")
        (directory / "src").mkdir()
        (directory / "src" / "lib.rs").write_text("// lib\n", encoding="utf-8")
        (directory / ".git").mkdir()

    async def sparse_checkout_init(self, directory) -> None:
        self.calls.append(("sparse_checkout_init", Path(directory)))

    async def sparse_checkout_set_path(self, directory, path) -> None:
        self.calls.append(("sparse_checkout_set_path", Path(directory), path))


@pytest.fixture
def fake_git() -> FakeGitClient:
    return FakeGitClient()


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Real git repository
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_template_repo(tmp_path: Path) -> Path:
    """Temporary git repository on branch ``main`` holding a ``templates/`` tree.

    Also commits files outside ``templates/`` so tests can check that only the
    template subdirectory reaches the cache.
    """
    repo_dir = tmp_path / "template-repo"
    repo_dir.mkdir()

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo_dir, check=True, capture_output=True)

    git("init")
    git("symbolic-ref", "HEAD", "refs/heads/main")
    git("config", "user.email", "test@aix.local")
    git("config", "user.name", "aix Test")
    git("config", "commit.gpgsign", "false")
    git("config", "uploadpack.allowFilter", "true")

    write_template_tree(repo_dir / "templates")
    (repo_dir / "README.md").write_text("# aix\n", encoding="utf-8")
    (repo_dir / "cli").mkdir()
    (repo_dir / "cli" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")

    git("add", ".")
    git("commit", "-m", "Initial commit")
    yield repo_dir
