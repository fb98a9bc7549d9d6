"""Pytest configuration and fixtures."""

import shutil
import tempfile
from pathlib import Path
from types import SimpleNamespace

import git
import pytest
from git import Actor

from nano_git_analyzer.git.fixture import InMemorySourceRepository


# Fixed commit times so imports are comparable across runs
TIME_A = 1577836800  # 2020-01-01T00:00:00Z
TIME_B = 1577923200  # 2020-01-02T00:00:00Z
TIME_C = 1578009600  # 2020-01-03T00:00:00Z
TIME_M = 1578096000  # 2020-01-04T00:00:00Z

AUTHOR = Actor("Alice Example", "alice@example.com")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def memory_source():
    """Empty synthetic source repository."""
    return InMemorySourceRepository()


@pytest.fixture
def linear_source():
    """A (root) -> B with branch main at B."""
    source = InMemorySourceRepository()
    a = source.add_commit(
        files={"/readme.txt": b"Hello World!"},
        message="Initial commit\n",
        commit_time=TIME_A,
    )
    b = source.add_commit(
        files={"/readme.txt": b"Hello World!", "/more.txt": b"More!"},
        parents=[a],
        message="Add more\n\nA longer description\nof the change.\n",
        commit_time=TIME_B,
    )
    source.set_branch("main", b)
    source.ids = {"A": a, "B": b}
    return source


@pytest.fixture
def merge_source():
    """Merge M with first parent A and other parent B, both roots."""
    source = InMemorySourceRepository()
    a = source.add_commit(files={"a.txt": b"A"}, message="A", commit_time=TIME_A)
    b = source.add_commit(files={"b.txt": b"B"}, message="B", commit_time=TIME_B)
    m = source.add_commit(
        files={"a.txt": b"A", "b.txt": b"B"},
        parents=[a, b],
        message="Merge B into A",
        commit_time=TIME_M,
    )
    source.set_branch("main", m)
    source.ids = {"A": a, "B": b, "M": m}
    return source


def _commit(repo, repo_path, files, message, when, parent_commits=None, head=True):
    for name, content in files.items():
        path = repo_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    if files:
        repo.index.add(list(files))
    date = f"{when} +0000"
    return repo.index.commit(
        message,
        parent_commits=parent_commits,
        head=head,
        author=AUTHOR,
        committer=AUTHOR,
        author_date=date,
        commit_date=date,
    )


def _init_repo(repo_path):
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)
    repo.git.symbolic_ref("HEAD", "refs/heads/main")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", AUTHOR.name)
        writer.set_value("user", "email", AUTHOR.email)
    return repo


@pytest.fixture
def sample_git_repo(temp_dir):
    """Create a sample git repository for testing.
    
    main: A -> B, annotated tag v1.0 on A, lightweight tag v1.1 on B and a
    lightweight tag pointing at B's tree.
    """
    repo_path = temp_dir / "sample_repo"
    repo = _init_repo(repo_path)
    
    commit_a = _commit(repo, repo_path, {"readme.txt": b"Hello World!"}, "Initial commit", TIME_A)
    commit_b = _commit(
        repo, repo_path,
        {"more.txt": b"More!", "docs/guide.md": b"# Guide\n"},
        "Add more files\n\nWith a guide.",
        TIME_B,
    )
    
    repo.create_tag("v1.0", ref=commit_a, message="Release 1.0")
    repo.create_tag("v1.1", ref=commit_b)
    repo.create_tag("tree-tag", ref=commit_b.tree)
    
    yield SimpleNamespace(
        repo=repo,
        path=repo_path,
        ids={"A": commit_a.hexsha, "B": commit_b.hexsha, "tree_B": commit_b.tree.hexsha},
    )
    repo.close()


@pytest.fixture
def merge_git_repo(temp_dir):
    """Git repository with a feature branch merged into main.
    
    A (root) -> B on main, A -> C on feature, M = merge(B, C) on main.
    """
    repo_path = temp_dir / "merge_repo"
    repo = _init_repo(repo_path)
    
    commit_a = _commit(repo, repo_path, {"readme.txt": b"Hello World!"}, "Initial commit", TIME_A)
    commit_c = _commit(
        repo, repo_path, {"feature.txt": b"Feature"}, "Add feature", TIME_C,
        parent_commits=[commit_a], head=False,
    )
    repo.create_head("feature", commit_c)
    
    # Back to A in the index; feature.txt stays behind untracked
    repo.head.reset(commit_a, index=True, working_tree=False)
    commit_b = _commit(repo, repo_path, {"more.txt": b"More!"}, "Add more", TIME_B)
    commit_m = _commit(
        repo, repo_path, {"feature.txt": b"Feature"}, "Merge feature", TIME_M,
        parent_commits=[commit_b, commit_c],
    )
    
    yield SimpleNamespace(
        repo=repo,
        path=repo_path,
        ids={"A": commit_a.hexsha, "B": commit_b.hexsha, "C": commit_c.hexsha, "M": commit_m.hexsha},
    )
    repo.close()
