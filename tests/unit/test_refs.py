"""Reference tests."""

import pytest

from minivcs.core.errors import CorruptError


def test_fresh_repo_has_no_head(repo):
    assert repo.refs.resolve_head() is None
    assert repo.refs.current_branch() == 'master'
    assert repo.refs.head_ref() == 'refs/heads/master'
    assert not repo.refs.is_detached_head()


def test_update_head_writes_branch(repo):
    repo.refs.update_head('a' * 40)

    assert (repo.heads_dir / 'master').read_text() == 'a' * 40 + '\n'
    assert repo.refs.resolve_head() == 'a' * 40
    assert repo.refs.read_ref('refs/heads/master') == 'a' * 40


def test_detached_head(repo):
    repo.head_file.write_text('b' * 40 + '\n')

    assert repo.refs.is_detached_head()
    assert repo.refs.current_branch() is None
    assert repo.refs.resolve_head() == 'b' * 40

    repo.refs.update_head('c' * 40)
    assert repo.head_file.read_text() == 'c' * 40 + '\n'


def test_symbolic_head_to_other_branch(repo):
    repo.head_file.write_text('ref: refs/heads/dev\n')
    (repo.heads_dir / 'dev').write_text('d' * 40 + '\n')

    assert repo.refs.current_branch() == 'dev'
    assert repo.refs.resolve_head() == 'd' * 40


def test_empty_ref_file(repo):
    (repo.heads_dir / 'master').write_text('')
    assert repo.refs.resolve_head() is None


def test_ref_outside_repository(repo):
    repo.head_file.write_text('ref: ../../etc/passwd\n')
    with pytest.raises(CorruptError):
        repo.refs.resolve_head()
