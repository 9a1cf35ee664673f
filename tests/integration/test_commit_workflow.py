"""Integration tests for add and commit workflow."""

from click.testing import CliRunner

from minivcs.cli.main import cli
from minivcs.core.index import Index
from minivcs.core.lock import RepoLock
from minivcs.core.objects import Commit


def test_add_commit_log(in_repo):
    """Stage a file, commit it, and see it in the log."""
    repo = in_repo
    runner = CliRunner()
    (repo.work_tree / 'a.txt').write_text('hi')

    result = runner.invoke(cli, ['add', 'a.txt'])
    assert result.exit_code == 0
    assert 'Added 1 file(s)' in result.output

    result = runner.invoke(cli, ['commit', '-m', 'first', '--author', 'Ann <ann@example.com>'])
    assert result.exit_code == 0

    head = repo.refs.resolve_head()
    assert head[:8] in result.output

    result = runner.invoke(cli, ['log', '--oneline'])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines == [f'{head[:7]} first']


def test_commit_uses_configured_identity(in_repo):
    repo = in_repo
    runner = CliRunner()
    runner.invoke(cli, ['config', 'set', 'user.name', 'Config User'])
    runner.invoke(cli, ['config', 'set', 'user.email', 'config@example.com'])

    (repo.work_tree / 'a.txt').write_text('hi')
    runner.invoke(cli, ['add', '.'])
    result = runner.invoke(cli, ['commit', '-m', 'configured'])

    assert result.exit_code == 0
    commit = repo.read_object(repo.refs.resolve_head())
    assert commit.author == 'Config User <config@example.com>'


def test_commit_default_email(in_repo):
    repo = in_repo
    (repo.work_tree / 'a.txt').write_text('hi')
    runner = CliRunner()
    runner.invoke(cli, ['add', 'a.txt'])

    result = runner.invoke(cli, ['commit', '-m', 'defaults'])

    assert result.exit_code == 0
    commit = repo.read_object(repo.refs.resolve_head())
    assert commit.author.endswith('<user@example.com>')


def test_commit_nothing_staged(in_repo):
    result = CliRunner().invoke(cli, ['commit', '-m', 'empty'])

    assert result.exit_code == 1
    assert 'Nothing to commit' in result.output


def test_commit_requires_message(in_repo):
    result = CliRunner().invoke(cli, ['commit'])
    assert result.exit_code == 2


def test_commit_chain(in_repo):
    """Each commit points at the one before it."""
    repo = in_repo
    runner = CliRunner()
    path = repo.work_tree / 'a.txt'

    path.write_text('one')
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['commit', '-m', 'one'])
    first = repo.refs.resolve_head()

    path.write_text('two')
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['commit', '-m', 'two'])
    second = repo.read_object(repo.refs.resolve_head())

    assert isinstance(second, Commit)
    assert second.parent == first
    assert len(Index.load(repo.index_file)) == 0


def test_add_from_subdirectory(in_repo, monkeypatch):
    repo = in_repo
    sub = repo.work_tree / 'src'
    sub.mkdir()
    (sub / 'main.py').write_text('print(1)\n')
    monkeypatch.chdir(sub)

    result = CliRunner().invoke(cli, ['add', 'main.py'])

    assert result.exit_code == 0
    assert 'src/main.py' in Index.load(repo.index_file)


def test_add_missing_file(in_repo):
    result = CliRunner().invoke(cli, ['add', 'missing.txt'])

    assert result.exit_code == 1
    assert 'Path does not exist' in result.output


def test_add_while_locked(in_repo):
    repo = in_repo
    (repo.work_tree / 'a.txt').write_text('hi')

    with RepoLock(repo):
        result = CliRunner().invoke(cli, ['add', 'a.txt'])

    assert result.exit_code == 1
    assert 'Repository is locked' in result.output
