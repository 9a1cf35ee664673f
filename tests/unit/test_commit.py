"""Commit pipeline tests."""

import pytest

from minivcs.core.errors import NothingToCommitError, RepositoryLockedError
from minivcs.core.index import Index
from minivcs.core.lock import RepoLock
from minivcs.core.objects import Commit
from minivcs.operations.commit import commit_index, format_author
from minivcs.operations.staging import stage_paths

AUTHOR = 'Test User <test@example.com>'


def test_format_author():
    assert format_author('Jane', 'jane@example.com') == 'Jane <jane@example.com>'


def test_first_commit(repo):
    (repo.work_tree / 'a.txt').write_text('hi')
    stage_paths(repo, ['a.txt'])

    digest = commit_index(repo, 'first', AUTHOR, timestamp=1700000000)
    commit = repo.read_object(digest)

    assert isinstance(commit, Commit)
    assert commit.parent is None
    assert commit.author == AUTHOR
    assert commit.timestamp == 1700000000
    assert commit.message == 'first'

    assert repo.refs.resolve_head() == digest
    assert (repo.heads_dir / 'master').read_text() == digest + '\n'
    assert repo.head_file.read_text() == 'ref: refs/heads/master\n'


def test_commit_clears_index(repo):
    (repo.work_tree / 'a.txt').write_text('hi')
    stage_paths(repo, ['a.txt'])
    commit_index(repo, 'first', AUTHOR)

    assert len(Index.load(repo.index_file)) == 0


def test_second_commit_has_parent(repo):
    (repo.work_tree / 'a.txt').write_text('one')
    stage_paths(repo, ['a.txt'])
    first = commit_index(repo, 'one', AUTHOR)

    (repo.work_tree / 'a.txt').write_text('two')
    stage_paths(repo, ['a.txt'])
    second = commit_index(repo, 'two', AUTHOR)

    assert repo.read_object(second).parent == first
    assert repo.refs.resolve_head() == second


def test_commit_tree_holds_only_staged_files(repo):
    """Only the index contents go into the new snapshot."""
    (repo.work_tree / 'a.txt').write_text('one')
    stage_paths(repo, ['a.txt'])
    commit_index(repo, 'one', AUTHOR)

    (repo.work_tree / 'b.txt').write_text('two')
    stage_paths(repo, ['b.txt'])
    second = repo.read_object(commit_index(repo, 'two', AUTHOR))

    tree = repo.read_object(second.tree)
    assert [e.name for e in tree.entries] == ['b.txt']


def test_nothing_to_commit(repo):
    with pytest.raises(NothingToCommitError):
        commit_index(repo, 'empty', AUTHOR)
    assert repo.refs.resolve_head() is None


def test_commit_when_locked(repo):
    (repo.work_tree / 'a.txt').write_text('hi')
    stage_paths(repo, ['a.txt'])

    with RepoLock(repo):
        with pytest.raises(RepositoryLockedError):
            commit_index(repo, 'blocked', AUTHOR)

    assert repo.refs.resolve_head() is None
    assert len(Index.load(repo.index_file)) == 1


def test_detached_head_commit(repo):
    (repo.work_tree / 'a.txt').write_text('one')
    stage_paths(repo, ['a.txt'])
    first = commit_index(repo, 'one', AUTHOR)
    repo.head_file.write_text(first + '\n')

    (repo.work_tree / 'a.txt').write_text('two')
    stage_paths(repo, ['a.txt'])
    second = commit_index(repo, 'two', AUTHOR)

    assert repo.head_file.read_text().strip() == second
    assert (repo.heads_dir / 'master').read_text().strip() == first


def test_commit_after_file_becomes_directory(repo):
    path = repo.work_tree / 'a'
    path.write_text('file')
    stage_paths(repo, ['a'])

    path.unlink()
    path.mkdir()
    (path / 'b').write_text('nested')
    stage_paths(repo, ['a/b'])

    commit = repo.read_object(commit_index(repo, 'restructure', AUTHOR))
    root = repo.read_object(commit.tree)

    assert [(e.mode, e.name) for e in root.entries] == [('40000', 'a')]
    subtree = repo.read_object(root.get_entry('a').hash)
    assert [e.name for e in subtree.entries] == ['b']


def test_failed_commit_leaves_head_and_index(repo, monkeypatch):
    (repo.work_tree / 'a.txt').write_text('one')
    stage_paths(repo, ['a.txt'])
    first = commit_index(repo, 'one', AUTHOR)

    (repo.work_tree / 'a.txt').write_text('two')
    (repo.work_tree / 'd').mkdir()
    (repo.work_tree / 'd' / 'b.txt').write_text('nested')
    stage_paths(repo, ['a.txt', 'd'])
    index_before = repo.index_file.read_bytes()

    real_write = repo.write_object
    written = []

    def fail_on_commit(obj):
        if isinstance(obj, Commit):
            raise OSError("disk full")
        digest = real_write(obj)
        written.append(digest)
        return digest

    monkeypatch.setattr(repo, 'write_object', fail_on_commit)

    with pytest.raises(OSError):
        commit_index(repo, 'two', AUTHOR)

    # Trees were stored before the failure.
    assert len(written) == 2
    assert repo.refs.resolve_head() == first
    assert repo.index_file.read_bytes() == index_before
    assert not repo.lock_file.exists()
