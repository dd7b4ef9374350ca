"""Tests for the fzf MCP tool server."""

from unittest.mock import AsyncMock, patch

import pytest

from fzf_mcp.exceptions import ContentSearchError, FzfExecutionError, FzfNotFoundError
from fzf_mcp.fzf import FzfResult
from models import MCPResponse
from tools.fuzzy.server import (
    fuzzy_filter,
    fuzzy_search_content,
    fuzzy_search_files,
    mcp,
)

SERVER = "tools.fuzzy.server"


def _fzf(stdout="", exit_code=0):
    return AsyncMock(return_value=FzfResult(stdout=stdout, stderr="", exit_code=exit_code))


@pytest.fixture(autouse=True)
def fzf_path():
    with patch(f"{SERVER}.resolve_fzf_path", return_value="fzf"):
        yield


@pytest.mark.asyncio
async def test_tools_are_registered():
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    assert set(tools) == {"fuzzy_search_files", "fuzzy_filter", "fuzzy_search_content"}

    schema = tools["fuzzy_filter"].inputSchema
    assert set(schema["required"]) == {"items", "query"}
    assert "max_results" in schema["properties"]
    assert "file_pattern" in tools["fuzzy_search_content"].inputSchema["properties"]


# fuzzy_search_files


@pytest.mark.asyncio
async def test_search_files_success(tmp_path):
    run_fzf = _fzf("src/readme.md\ndocs/README.rst")
    with patch(f"{SERVER}.list_files", AsyncMock(return_value="a\nsrc/readme.md\n")) as list_files, patch(
        f"{SERVER}.run_fzf", run_fzf
    ):
        result = await fuzzy_search_files(query="readme", directory=str(tmp_path))

    assert result == MCPResponse.success(
        result={
            "matches": ["src/readme.md", "docs/README.rst"],
            "count": 2,
            "truncated": False,
            "query": "readme",
        },
        message="Found 2 match(es)",
        content_type="json",
    ).to_dict()
    assert list_files.call_args.args == (str(tmp_path), None)
    args, kwargs = run_fzf.call_args
    assert args == (["--filter", "readme", "-i"], "a\nsrc/readme.md\n")
    assert kwargs["fzf_path"] == "fzf"


@pytest.mark.asyncio
async def test_search_files_passes_flags_and_limits(tmp_path):
    run_fzf = _fzf("\n".join(f"f{i}" for i in range(10)))
    with patch(f"{SERVER}.list_files", AsyncMock(return_value="x\n")), patch(
        f"{SERVER}.run_fzf", run_fzf
    ):
        result = await fuzzy_search_files(
            query="Main",
            directory=str(tmp_path),
            max_results=3,
            case_sensitive=True,
            exact=True,
        )

    assert result["status"] == "success"
    assert result["result"]["matches"] == ["f0", "f1", "f2"]
    assert result["result"]["truncated"] is True
    assert result["message"] == "Found 3 match(es) (limited to 3)"
    assert run_fzf.call_args.args[0] == ["--filter", "Main", "+i", "-e"]


@pytest.mark.asyncio
async def test_search_files_default_limit_from_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("FZF_MCP_MAX_RESULTS", "2")
    with patch(f"{SERVER}.list_files", AsyncMock(return_value="x\n")), patch(
        f"{SERVER}.run_fzf", _fzf("a\nb\nc")
    ):
        result = await fuzzy_search_files(query="a", directory=str(tmp_path))

    assert result["result"]["matches"] == ["a", "b"]


@pytest.mark.asyncio
async def test_search_files_no_files(tmp_path):
    run_fzf = _fzf()
    with patch(f"{SERVER}.list_files", AsyncMock(return_value="")), patch(
        f"{SERVER}.run_fzf", run_fzf
    ):
        result = await fuzzy_search_files(query="x", directory=str(tmp_path))

    assert result == MCPResponse.empty("No files found in directory").to_dict()
    run_fzf.assert_not_called()


@pytest.mark.asyncio
async def test_search_files_no_matches(tmp_path):
    with patch(f"{SERVER}.list_files", AsyncMock(return_value="a\n")), patch(
        f"{SERVER}.run_fzf", _fzf("", exit_code=1)
    ):
        result = await fuzzy_search_files(query="zzz", directory=str(tmp_path))

    assert result == MCPResponse.empty("No matches found").to_dict()


@pytest.mark.asyncio
async def test_search_files_missing_directory(tmp_path):
    result = await fuzzy_search_files(query="x", directory=str(tmp_path / "missing"))
    assert result["status"] == "error"
    assert "Directory not found" in result["message"]


@pytest.mark.asyncio
async def test_search_files_fzf_missing(tmp_path):
    with patch(f"{SERVER}.list_files", AsyncMock(return_value="a\n")), patch(
        f"{SERVER}.run_fzf", AsyncMock(side_effect=FzfNotFoundError("fzf"))
    ):
        result = await fuzzy_search_files(query="a", directory=str(tmp_path))

    assert result["status"] == "error"
    assert result["message"].startswith("Error: fzf binary not found")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"query": ""}, "'query'"),
        ({"query": "   "}, "'query'"),
        ({"query": "a", "max_results": 0}, "'max_results'"),
        ({"query": "a", "max_results": -5}, "'max_results'"),
        ({"query": "a", "max_depth": 0}, "'max_depth'"),
        ({"query": "a", "directory": ""}, "'directory'"),
    ],
)
async def test_search_files_validation(kwargs, message):
    result = await fuzzy_search_files(**kwargs)
    assert result["status"] == "error"
    assert message in result["message"]


# fuzzy_filter


@pytest.mark.asyncio
async def test_filter_success_uses_nul_delimiters():
    run_fzf = _fzf("apple pie\0apple\ncrumble\0")
    with patch(f"{SERVER}.run_fzf", run_fzf):
        result = await fuzzy_filter(
            items=["apple pie", "banana", "apple\ncrumble"], query="apple"
        )

    assert result["status"] == "success"
    assert result["result"]["matches"] == ["apple pie", "apple\ncrumble"]
    args, kwargs = run_fzf.call_args
    assert args == (["--filter", "apple", "-i"], "apple pie\0banana\0apple\ncrumble")
    assert kwargs["read0"] is True


@pytest.mark.asyncio
async def test_filter_no_matches():
    with patch(f"{SERVER}.run_fzf", _fzf("", exit_code=1)):
        result = await fuzzy_filter(items=["a", "b"], query="zzz")

    assert result == MCPResponse.empty("No matches found").to_dict()


@pytest.mark.asyncio
async def test_filter_empty_items():
    run_fzf = _fzf()
    with patch(f"{SERVER}.run_fzf", run_fzf):
        result = await fuzzy_filter(items=[], query="a")

    assert result == MCPResponse.empty("No items to filter").to_dict()
    run_fzf.assert_not_called()


@pytest.mark.asyncio
async def test_filter_rejects_non_string_items():
    result = await fuzzy_filter(items=["a", 3], query="a")
    assert result == MCPResponse.error("Error: 'items' must be a list of strings").to_dict()


@pytest.mark.asyncio
async def test_filter_fzf_error():
    with patch(
        f"{SERVER}.run_fzf",
        AsyncMock(side_effect=FzfExecutionError(2, "invalid option")),
    ):
        result = await fuzzy_filter(items=["a"], query="a")

    assert result == MCPResponse.error("Error: fzf exited with code 2: invalid option").to_dict()


@pytest.mark.asyncio
async def test_filter_unexpected_error_is_reported():
    with patch(f"{SERVER}.run_fzf", AsyncMock(side_effect=RuntimeError("boom"))):
        result = await fuzzy_filter(items=["a"], query="a")

    assert result == MCPResponse.error("Error: boom").to_dict()


# fuzzy_search_content


@pytest.mark.asyncio
async def test_search_content_success(tmp_path):
    grep_output = "src/a.py:10:def load_config():\nsrc/b.py:3:config = {}\n"
    search = AsyncMock(return_value=grep_output)
    run_fzf = _fzf("src/a.py:10:def load_config():")
    with patch(f"{SERVER}.search_content", search), patch(f"{SERVER}.run_fzf", run_fzf):
        result = await fuzzy_search_content(
            query="load_config",
            directory=str(tmp_path),
            file_pattern="*.py",
            case_sensitive=True,
        )

    assert result["status"] == "success"
    assert result["result"]["matches"] == ["src/a.py:10:def load_config():"]
    assert search.call_args.args == ("load_config", str(tmp_path), "*.py", True)
    assert run_fzf.call_args.args == (["--filter", "load_config", "+i"], grep_output)


@pytest.mark.asyncio
async def test_search_content_no_lines(tmp_path):
    run_fzf = _fzf()
    with patch(f"{SERVER}.search_content", AsyncMock(return_value="")), patch(
        f"{SERVER}.run_fzf", run_fzf
    ):
        result = await fuzzy_search_content(query="nothing", directory=str(tmp_path))

    assert result == MCPResponse.empty("No matches found").to_dict()
    run_fzf.assert_not_called()


@pytest.mark.asyncio
async def test_search_content_grep_failure(tmp_path):
    with patch(
        f"{SERVER}.search_content",
        AsyncMock(side_effect=ContentSearchError("grep failed: Input/output error")),
    ):
        result = await fuzzy_search_content(query="x", directory=str(tmp_path))

    assert result == MCPResponse.error("Error: grep failed: Input/output error").to_dict()


@pytest.mark.asyncio
async def test_search_content_validation():
    result = await fuzzy_search_content(query="x", file_pattern="")
    assert result["status"] == "error"
    assert "'file_pattern'" in result["message"]
