import json
from unittest.mock import AsyncMock, patch

from web3jobs import cli
from web3jobs.tools import AVAILABLE_TAGS, ToolResult


def test_build_arguments_leaves_unset_filters_out():
    args = cli.parse_args(["jobs"])
    assert cli.build_arguments(args) == {"limit": 20, "show_description": True}


def test_build_arguments_all_flags():
    args = cli.parse_args(["jobs", "--remote", "-n", "5", "--country", "germany", "--tag", "defi", "--no-description"])
    assert cli.build_arguments(args) == {
        "remote": True,
        "limit": 5,
        "country": "germany",
        "tag": "defi",
        "show_description": False,
    }


def test_tags_command_prints_tag_list(capsys):
    assert cli.main(["tags"]) == 0
    assert json.loads(capsys.readouterr().out) == AVAILABLE_TAGS


@patch("web3jobs.cli.get_web3_jobs", new_callable=AsyncMock)
def test_jobs_command_prints_result(mock_get_web3_jobs, capsys):
    mock_get_web3_jobs.return_value = ToolResult.text('[{"title": "Dev"}]')

    assert cli.main(["jobs", "--tag", "rust"]) == 0

    assert json.loads(capsys.readouterr().out) == [{"title": "Dev"}]
    _, arguments = mock_get_web3_jobs.await_args.args
    assert arguments["tag"] == "rust"


@patch("web3jobs.cli.get_web3_jobs", new_callable=AsyncMock)
def test_jobs_command_error_exit_code(mock_get_web3_jobs, capsys):
    mock_get_web3_jobs.return_value = ToolResult.text("Network error: Unable to reach the web3.career API.", is_error=True)

    assert cli.main(["jobs"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Unable to reach" in captured.err


def test_tools_command_lists_tool_descriptors(capsys):
    assert cli.main(["tools"]) == 0

    tools = json.loads(capsys.readouterr().out)
    assert [t["name"] for t in tools] == ["get_available_tags", "get_web3_jobs"]
    assert tools[1]["inputSchema"]["properties"]["limit"]["maximum"] == 100
