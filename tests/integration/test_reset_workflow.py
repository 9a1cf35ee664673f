"""Integration tests for vcs reset."""

from click.testing import CliRunner

from minivcs.cli.main import cli
from minivcs.core.index import Index


def test_reset_single_file(in_repo):
    repo = in_repo
    (repo.work_tree / 'a.txt').write_text('a')
    (repo.work_tree / 'b.txt').write_text('b')
    runner = CliRunner()
    runner.invoke(cli, ['add', '.'])

    result = runner.invoke(cli, ['reset', 'a.txt'])

    assert result.exit_code == 0
    assert 'Unstaged 1 file(s)' in result.output
    index = Index.load(repo.index_file)
    assert 'a.txt' not in index
    assert 'b.txt' in index
    assert (repo.work_tree / 'a.txt').exists()


def test_reset_all(in_repo):
    repo = in_repo
    (repo.work_tree / 'a.txt').write_text('a')
    runner = CliRunner()
    runner.invoke(cli, ['add', 'a.txt'])

    result = runner.invoke(cli, ['reset'])

    assert 'Unstaged all files' in result.output
    assert len(Index.load(repo.index_file)) == 0


def test_reset_nothing_staged(in_repo):
    result = CliRunner().invoke(cli, ['reset'])

    assert result.exit_code == 0
    assert 'No files were unstaged' in result.output


def test_reset_then_status_untracked(in_repo):
    (in_repo.work_tree / 'a.txt').write_text('a')
    runner = CliRunner()
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['reset', 'a.txt'])

    result = runner.invoke(cli, ['status'])
    assert 'Untracked files:' in result.output
    assert 'Changes to be committed:' not in result.output
