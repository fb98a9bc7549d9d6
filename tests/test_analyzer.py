"""End-to-end tests for loading repositories into memory."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest

from nano_git_analyzer.analysis.analyzer import (
    NanoGitAnalyzer,
    create_nano_repo_from_git_path,
    create_nano_repo_from_git_repo,
    create_nano_repo_from_git_url,
    create_nano_repo_from_source,
)
from nano_git_analyzer.core.constants import AUTHOR_NAME_PATH, COMMIT_MESSAGE_SHORT_PATH
from nano_git_analyzer.exceptions import ContentReadError, SourceAccessError
from nano_git_analyzer.git.fixture import InMemorySourceRepository
from nano_git_analyzer.git.models import TreeEntry
from nano_git_analyzer.git.repository import GitSourceRepository
from nano_git_analyzer.memory import MemoryNanoRepo

from conftest import TIME_A, TIME_B, TIME_C, TIME_M


def _utc(seconds):
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _build_dag(source, size=25):
    """Deterministic DAG with merges, several roots and a few refs."""
    shas = []
    for index in range(size):
        parents = []
        if index % 6 != 0:
            parents.append(shas[index - 1])
        if index >= 4 and index % 4 == 0:
            parents.append(shas[index - 3])
        if index >= 9 and index % 9 == 0:
            parents.append(shas[index - 7])
        shas.append(source.add_commit(
            files={"index.txt": str(index).encode(), f"dir{index % 3}/file.txt": b"x" * index},
            parents=parents,
            message=f"Commit {index}",
            commit_time=1000000000 + (index * 7919) % 5000,
        ))
    source.set_branch("main", shas[-1])
    source.set_branch("old", shas[10])
    source.set_branch("side", shas[23])
    source.set_tag("start", shas[0])
    source.set_tag("release", source.add_tag_object(shas[17], "release"))
    return shas


class TestNanoGitAnalyzer:
    """Test NanoGitAnalyzer class."""
    
    def test_linear_scenario(self, linear_source):
        ids = linear_source.ids
        
        result = NanoGitAnalyzer().analyze(linear_source)
        
        assert result.commit_count == 2
        a = result.commits_by_hash[ids["A"]]
        b = result.commits_by_hash[ids["B"]]
        assert a.is_root
        assert b.first_parent is a
        assert result.branches == ["main"]
        assert result.repo.get_latest_commit_for_branch("main") is b
        
        checked_out = result.repo.checkout(result.repo.get_latest_commit_for_branch("main"))
        assert checked_out.as_dict() == {"/readme.txt": b"Hello World!", "/more.txt": b"More!"}
    
    def test_merge_scenario(self, merge_source):
        ids = merge_source.ids
        
        result = NanoGitAnalyzer().analyze(merge_source)
        
        merge = result.commits_by_hash[ids["M"]]
        assert merge.first_parent is result.commits_by_hash[ids["A"]]
        assert merge.other_parents == (result.commits_by_hash[ids["B"]],)
        assert result.commits_by_hash[ids["A"]].is_root
        assert result.commits_by_hash[ids["B"]].is_root
    
    def test_every_edge_is_reconstructed(self):
        source = InMemorySourceRepository()
        shas = _build_dag(source)
        
        result = NanoGitAnalyzer().analyze(source)
        
        assert result.commit_count == len(shas)
        assert len(result.repo) == len(shas)
        for sha in shas:
            commit = source.parse_commit(sha)
            reconstructed = result.commits_by_hash[sha]
            expected_parents = tuple(result.commits_by_hash[p] for p in commit.parents)
            assert reconstructed.parents == expected_parents
            if not commit.parents:
                assert reconstructed.is_root
            elif len(commit.parents) == 1:
                assert reconstructed.other_parents == ()
            else:
                assert reconstructed.first_parent is result.commits_by_hash[commit.parents[0]]
                assert len(reconstructed.other_parents) == len(commit.parents) - 1
    
    def test_timestamp_fidelity(self):
        source = InMemorySourceRepository()
        shas = _build_dag(source)
        
        result = NanoGitAnalyzer().analyze(source)
        
        for sha in shas:
            assert result.commits_by_hash[sha].timestamp == _utc(source.parse_commit(sha).commit_time)
            assert result.commits_by_hash[sha].timestamp.year == 2001
    
    def test_idempotent_runs(self):
        source = InMemorySourceRepository()
        _build_dag(source)
        
        first = NanoGitAnalyzer().analyze(source)
        second = NanoGitAnalyzer().analyze(source)
        
        assert first.repo is not second.repo
        assert first.repo.get_branch_names() == second.repo.get_branch_names()
        assert first.repo.get_tag_names() == second.repo.get_tag_names()
        
        def describe(commit):
            return (
                dict(commit.snapshot),
                commit.timestamp,
                commit.message,
                tuple(p.timestamp for p in commit.parents),
                commit.first_parent is None,
                len(commit.other_parents),
            )
        
        for name in first.repo.get_branch_names():
            assert describe(first.repo.get_latest_commit_for_branch(name)) == \
                describe(second.repo.get_latest_commit_for_branch(name))
        for name in first.repo.get_tag_names():
            assert describe(first.repo.get_commit_for_tag(name)) == \
                describe(second.repo.get_commit_for_tag(name))
    
    def test_runs_do_not_share_state(self, linear_source, merge_source):
        analyzer = NanoGitAnalyzer()
        
        first = analyzer.analyze(linear_source)
        second = analyzer.analyze(merge_source)
        
        assert first.commit_count == 2
        assert second.commit_count == 3
        assert first.repo.clock is not second.repo.clock
    
    def test_non_commit_references_are_skipped(self, linear_source):
        ids = linear_source.ids
        tree = linear_source.parse_commit(ids["A"]).tree
        linear_source.set_tag("tree-tag", tree)
        linear_source.set_tag("blob-tag", linear_source.add_blob(b"Hello World!"))
        linear_source.set_tag("missing-tag", "c" * 40)
        linear_source.set_tag("v1", ids["A"])
        
        result = NanoGitAnalyzer().analyze(linear_source)
        
        assert result.commit_count == 2
        assert result.tags == ["v1"]
        assert sorted(result.skipped_references) == [
            "refs/tags/blob-tag",
            "refs/tags/missing-tag",
            "refs/tags/tree-tag",
        ]
        assert result.repo.get_tag_names() == ["v1"]
    
    def test_unreachable_from_branches_but_tagged(self, linear_source):
        detached = linear_source.add_commit(files={"x.txt": b"X"}, message="Detached", commit_time=TIME_C)
        linear_source.set_tag("detached", detached)
        
        result = NanoGitAnalyzer().analyze(linear_source)
        
        assert result.commit_count == 3
        assert result.repo.get_commit_for_tag("detached") is result.commits_by_hash[detached]
    
    def test_unreadable_content_aborts(self, linear_source):
        tree = linear_source.add_tree_entries([TreeEntry(name="lost.txt", object_id="9" * 40)])
        broken = linear_source.add_commit(
            tree=tree, parents=[linear_source.ids["B"]], message="Broken", commit_time=TIME_C
        )
        linear_source.set_branch("main", broken)
        
        with pytest.raises(ContentReadError):
            NanoGitAnalyzer().analyze(linear_source)
    
    def test_backslash_file_names_stay_distinct(self, memory_source):
        sha = memory_source.add_commit(files={"a/b": b"SLASH", "a\\b": b"BACKSLASH"})
        memory_source.set_branch("main", sha)
        
        result = NanoGitAnalyzer().analyze(memory_source)
        
        assert result.commits_by_hash[sha].snapshot == {"/a/b": b"SLASH", "/a\\b": b"BACKSLASH"}
    
    def test_reference_listing_failure_is_logged(self):
        source = Mock()
        source.list_references.side_effect = SourceAccessError("Repository is gone")
        
        with patch("nano_git_analyzer.analysis.analyzer.logger") as mock_logger:
            with pytest.raises(SourceAccessError):
                NanoGitAnalyzer().analyze(source)
        
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["error"] == "Repository is gone"
    
    def test_empty_source(self, memory_source):
        result = NanoGitAnalyzer().analyze(memory_source)
        
        assert result.commit_count == 0
        assert result.branches == []
        assert len(result.repo) == 0
    
    def test_identity_map_is_read_only(self, linear_source):
        result = NanoGitAnalyzer().analyze(linear_source)
        
        with pytest.raises(TypeError):
            result.commits_by_hash["new"] = None
    
    def test_create_nano_repo_from_source(self, linear_source):
        repo = create_nano_repo_from_source(linear_source)
        
        assert isinstance(repo, MemoryNanoRepo)
        assert repo.get_branch_names() == ["main"]


class TestGitRepositoryImport:
    """Import real git repositories built with GitPython."""
    
    def test_sample_repository(self, sample_git_repo):
        with GitSourceRepository(str(sample_git_repo.path)) as source:
            result = NanoGitAnalyzer().analyze(source)
        
        ids = sample_git_repo.ids
        a = result.commits_by_hash[ids["A"]]
        b = result.commits_by_hash[ids["B"]]
        assert result.commit_count == 2
        assert b.first_parent is a
        assert a.timestamp == _utc(TIME_A)
        assert b.timestamp == _utc(TIME_B)
        assert b.commit_tags[AUTHOR_NAME_PATH] == "Alice Example"
        assert b.commit_tags[COMMIT_MESSAGE_SHORT_PATH] == "Add more files"
        assert dict(b.snapshot) == {
            "/readme.txt": b"Hello World!",
            "/more.txt": b"More!",
            "/docs/guide.md": b"# Guide\n",
        }
        
        assert result.repo.get_branch_names() == ["main"]
        assert result.repo.get_tag_names() == ["v1.0", "v1.1"]
        assert result.repo.get_commit_for_tag("v1.0") is a
        assert result.repo.get_commit_for_tag("v1.1") is b
        assert result.skipped_references == ["refs/tags/tree-tag"]
    
    def test_merge_repository(self, merge_git_repo):
        with GitSourceRepository(str(merge_git_repo.path)) as source:
            result = NanoGitAnalyzer().analyze(source)
        
        ids = merge_git_repo.ids
        merge = result.commits_by_hash[ids["M"]]
        assert result.commit_count == 4
        assert merge.first_parent is result.commits_by_hash[ids["B"]]
        assert merge.other_parents == (result.commits_by_hash[ids["C"]],)
        assert merge.timestamp == _utc(TIME_M)
        assert result.repo.get_branch_names() == ["feature", "main"]
        assert result.repo.get_latest_commit_for_branch("feature") is result.commits_by_hash[ids["C"]]
        
        tip = result.repo.checkout(result.repo.get_latest_commit_for_branch("main"))
        assert tip.as_dict() == {
            "/readme.txt": b"Hello World!",
            "/more.txt": b"More!",
            "/feature.txt": b"Feature",
        }
    
    def test_create_from_git_path(self, sample_git_repo):
        repo = create_nano_repo_from_git_path(str(sample_git_repo.path))
        
        assert repo.get_branch_names() == ["main"]
        assert len(repo) == 2
    
    def test_create_from_open_git_repo(self, merge_git_repo):
        repo = create_nano_repo_from_git_repo(merge_git_repo.repo)
        
        assert len(repo) == 4
    
    def test_create_from_git_url(self, sample_git_repo, temp_dir):
        repo = create_nano_repo_from_git_url(str(sample_git_repo.path), str(temp_dir / "cloned"))
        
        # Remote tracking refs are walk starting points but only local branches are mirrored
        assert repo.get_branch_names() == ["main"]
        assert repo.get_tag_names() == ["v1.0", "v1.1"]
        assert len(repo) == 2
    
    def test_create_from_invalid_path(self, temp_dir):
        with pytest.raises(SourceAccessError):
            create_nano_repo_from_git_path(str(temp_dir))
    
    def test_repeated_imports_match(self, merge_git_repo):
        first = create_nano_repo_from_git_path(str(merge_git_repo.path))
        second = create_nano_repo_from_git_path(str(merge_git_repo.path))
        
        assert [c.timestamp for c in first.get_commits()] == [c.timestamp for c in second.get_commits()]
        assert [dict(c.snapshot) for c in first.get_commits()] == [dict(c.snapshot) for c in second.get_commits()]
