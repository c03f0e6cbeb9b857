from typer.testing import CliRunner

from coffee_shop.cli.main import app

runner = CliRunner()


def test_help_lists_command_groups():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "users" in result.output
    assert "test-db-connection" in result.output


def test_create_super_rejects_weak_password():
    result = runner.invoke(app, ["users", "create-super", "--email", "boss@example.com", "--password", "weak"])
    assert result.exit_code == 1
    assert "Password must be at least 8 characters" in result.output


def test_set_role_rejects_unknown_role():
    result = runner.invoke(app, ["users", "set-role", "boss@example.com", "GUEST"])
    assert result.exit_code == 2
