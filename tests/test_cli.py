import json

import pytest
from click.testing import CliRunner

from agentreg.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_validate_log_json_from_stdin(runner, make_log, base64_uri, spec_compliant_doc):
    log = make_log(base64_uri(spec_compliant_doc))
    result = runner.invoke(cli, ["validate-log", "-", "--json"], input=json.dumps(log))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["status"] is True
    assert payload["entries"]["agentId"] == "42"


def test_validate_log_jsonl_file(runner, tmp_path, make_log, base64_uri, spec_compliant_doc):
    path = tmp_path / "logs.jsonl"
    path.write_text(json.dumps(make_log(base64_uri(spec_compliant_doc))) + "\n\n" + json.dumps(make_log("")) + "\n")

    result = runner.invoke(cli, ["validate-log", str(path), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [r["status"] for r in payload] == [True, False]
    assert payload[1]["messages"] == ["uri: Is empty, agent has no Registration File"]


def test_validate_log_array_strict(runner, tmp_path, make_log):
    path = tmp_path / "logs.json"
    path.write_text(json.dumps([make_log(""), make_log("")]))

    result = runner.invoke(cli, ["validate-log", str(path), "--strict"])

    assert result.exit_code == 1
    assert "summary" in result.output


def test_validate_log_rejects_invalid_input(runner):
    result = runner.invoke(cli, ["validate-log", "-"], input="{not json\n")
    assert result.exit_code != 0
    assert "line 1: invalid JSON" in result.output

    result = runner.invoke(cli, ["validate-log", "-"], input="42")
    assert result.exit_code != 0
    assert "log #0: event_log:" in result.output


def test_validate_uri_table(runner, base64_uri, real_world_doc):
    result = runner.invoke(cli, ["validate-uri", base64_uri(real_world_doc), "--agent-id", "42"])

    assert result.exit_code == 0, result.output
    assert "base64" in result.output
    assert "fail" in result.output


def test_validate_uri_strict_exit_code(runner, base64_uri, spec_compliant_doc, real_world_doc):
    ok = runner.invoke(cli, ["validate-uri", base64_uri(spec_compliant_doc), "--strict"])
    bad = runner.invoke(cli, ["validate-uri", base64_uri(real_world_doc), "--strict"])

    assert ok.exit_code == 0
    assert bad.exit_code == 1


def test_validate_uri_json_carries_owner(runner):
    owner = "0x8Ec6C9A8A6b0d69f48734c4b7Ecd1cbb190a0D69"
    result = runner.invoke(cli, ["validate-uri", "ipfs://QmX", "--owner", owner, "--json"])

    payload = json.loads(result.output)
    assert payload["entries"]["ownerAddress"] == owner
    assert payload["categories"]["isIpfs"] is True


def test_classify(runner):
    result = runner.invoke(cli, ["classify", "https://myagent.com/agent.json"])
    assert result.exit_code == 0
    assert "http" in result.output

    result = runner.invoke(cli, ["classify", "ftp://x", "--json"])
    assert json.loads(result.output)["uriAgentType"] == "unknown"


def test_decode_prints_document(runner, gzip_uri, spec_compliant_doc):
    result = runner.invoke(cli, ["decode", gzip_uri(spec_compliant_doc)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == spec_compliant_doc


def test_decode_with_type_override(runner, base64_uri, spec_compliant_doc):
    result = runner.invoke(cli, ["decode", base64_uri(spec_compliant_doc), "--type", "json", "--json", "--strict"])

    assert result.exit_code == 1
    assert json.loads(result.output)["messages"] == ["uri: Contains inline JSON but parsing failed"]


def test_decode_rejects_unknown_type(runner):
    result = runner.invoke(cli, ["decode", "x", "--type", "ftp"])
    assert result.exit_code == 2


def test_verbose_flag(runner):
    result = runner.invoke(cli, ["-v", "classify", ""])
    assert result.exit_code == 0
