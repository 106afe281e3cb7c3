import json
import pytest
from click.testing import CliRunner
from scimfilter.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def resource_file(tmp_path, sample_user):
    path = tmp_path / "users.json"
    other = {"schemas": sample_user["schemas"], "id": "2", "userName": "other@example.com", "active": False, "meta": {}}
    path.write_text(json.dumps({"Resources": [sample_user, other]}))
    return str(path)


def test_parse(runner):
    result = runner.invoke(cli, ["parse", 'userName eq "john"'])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"type": "compare", "attrPath": "userName", "op": "eq", "value": "john"}


def test_parse_invalid(runner):
    result = runner.invoke(cli, ["parse", 'userName eq "john'])

    assert result.exit_code == 1
    assert "Unterminated" in result.output


def test_eval(runner, resource_file):
    result = runner.invoke(cli, ["eval", "active eq true", resource_file])

    assert result.exit_code == 0
    assert "1 of 2 resources match" in result.output
    assert "bjensen@example.com" in result.output
    assert "other@example.com" not in result.output


def test_pushdown(runner):
    result = runner.invoke(cli, ["pushdown", 'displayName eq "Sales"', "--resource-type", "Group"])
    assert result.exit_code == 0
    assert "Pushed down" in result.output
    assert "display_name" in result.output

    result = runner.invoke(cli, ["pushdown", 'displayName eq "Sales"'])
    assert result.exit_code == 0
    assert "In-memory" in result.output


def test_project(runner, resource_file):
    result = runner.invoke(cli, ["project", resource_file, "--attributes", "userName"])

    assert result.exit_code == 0
    projected = json.loads(result.output)
    assert [set(r) for r in projected] == [{"schemas", "id", "meta", "userName"}] * 2


def test_config(runner):
    result = runner.invoke(cli, ["config"])

    assert result.exit_code == 0
    assert "Max Page Size" in result.output
