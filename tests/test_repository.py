"""Repository and object store tests."""

import pytest

from minivcs.core.errors import (
    CorruptObjectError,
    InvalidInputError,
    ObjectNotFoundError,
    PathOutsideWorktreeError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)
from minivcs.core.objects import Blob
from minivcs.core.repository import Repository


def test_init_creates_layout(temp_dir):
    """Test repository initialization."""
    repo = Repository(str(temp_dir)).init()

    assert repo.vcs_dir.is_dir()
    assert repo.objects_dir.is_dir()
    assert repo.heads_dir.is_dir()
    assert repo.head_file.read_text() == 'ref: refs/heads/master\n'
    assert repo.index_file.read_text() == '[]'
    assert repo.config_file.exists()
    assert repo.exists()


def test_init_twice_fails(repo):
    with pytest.raises(RepositoryExistsError):
        Repository(str(repo.work_tree)).init()


def test_find_repository_from_subdirectory(repo):
    subdir = repo.work_tree / 'a' / 'b'
    subdir.mkdir(parents=True)

    found = Repository.find_repository(str(subdir))
    assert found is not None
    assert found.work_tree == repo.work_tree


def test_find_repository_none(temp_dir):
    assert Repository.find_repository(str(temp_dir)) is None
    with pytest.raises(RepositoryNotFoundError):
        Repository.discover(str(temp_dir))


def test_write_and_read_object(repo):
    blob = Blob(b'hello\n')
    digest = repo.write_object(blob)

    assert digest == blob.hash
    assert repo.object_path(digest) == repo.objects_dir / digest[:2] / digest[2:]
    assert repo.object_path(digest).read_bytes() == b'blob 6\0hello\n'
    assert repo.read_object(digest) == blob


def test_write_object_is_idempotent(repo):
    first = repo.write_object(Blob(b'same'))
    second = repo.write_object(Blob(b'same'))

    assert first == second
    assert list(repo.iter_objects()) == [first]


def test_existing_object_not_rewritten(repo):
    digest = repo.write_object(Blob(b'data'))
    path = repo.object_path(digest)
    mtime = path.stat().st_mtime_ns

    repo.write_object(Blob(b'data'))
    assert path.stat().st_mtime_ns == mtime


def test_read_missing_object(repo):
    with pytest.raises(ObjectNotFoundError):
        repo.read_object('0' * 40)
    assert not repo.object_exists('0' * 40)


def test_read_corrupt_object(repo):
    digest = 'ab' + '0' * 38
    path = repo.object_path(digest)
    path.parent.mkdir(parents=True)
    path.write_bytes(b'blob 99\0short')

    with pytest.raises(CorruptObjectError) as exc_info:
        repo.read_object(digest)
    assert exc_info.value.digest == digest


def test_relative_path(repo):
    assert repo.relative_path(repo.work_tree / 'dir' / 'f.txt') == 'dir/f.txt'
    assert repo.relative_path('dir/../g.txt') == 'g.txt'


def test_relative_path_outside(repo, tmp_path):
    with pytest.raises(PathOutsideWorktreeError):
        repo.relative_path(tmp_path / 'elsewhere.txt')


@pytest.mark.parametrize('digest', ['ab/../../../config', 'zz' + '0' * 38, 'abc', ''])
def test_read_object_rejects_malformed_digest(repo, digest):
    with pytest.raises(InvalidInputError):
        repo.read_object(digest)
    assert not repo.object_exists(digest)
