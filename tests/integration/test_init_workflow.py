"""Integration tests for vcs init."""

from click.testing import CliRunner

from minivcs.cli.main import cli
from minivcs.core.repository import Repository


def test_init_current_directory(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['init'])

    assert result.exit_code == 0
    assert 'Initialized empty repository' in result.output
    assert (temp_dir / '.vcs' / 'HEAD').read_text() == 'ref: refs/heads/master\n'


def test_init_new_directory(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['init', 'project'])

    assert result.exit_code == 0
    assert Repository(str(temp_dir / 'project')).exists()


def test_init_twice(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    runner = CliRunner()
    runner.invoke(cli, ['init'])

    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 1
    assert 'already exists' in result.output


def test_command_outside_repository(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['status'])

    assert result.exit_code == 1
    assert 'Not a vcs repository' in result.output


def test_version():
    result = CliRunner().invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert '0.1.0' in result.output
