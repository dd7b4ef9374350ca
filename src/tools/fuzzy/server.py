"""MCP server exposing fzf-backed fuzzy search tools."""

from __future__ import annotations

from logging import getLogger
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from fzf_mcp.config import get_settings
from fzf_mcp.constants import (
    DEFAULT_DIRECTORY,
    DEFAULT_FILE_PATTERN,
    NO_FILES,
    NO_ITEMS,
    NO_MATCHES,
    SERVER_NAME,
)
from fzf_mcp.content import search_content
from fzf_mcp.exceptions import FzfMcpError
from fzf_mcp.fzf import build_filter_args, run_fzf, split_matches
from fzf_mcp.installer import ensure_fzf, resolve_fzf_path
from fzf_mcp.listing import list_files
from models import MCPResponse

logger = getLogger(__name__)

mcp = FastMCP(SERVER_NAME)


def _validate_query(query) -> Optional[str]:
    if not isinstance(query, str) or not query.strip():
        return "Error: 'query' must be a non-empty string"
    return None


def _resolve_max_results(max_results) -> tuple[Optional[int], Optional[str]]:
    if max_results is None:
        return get_settings().max_results, None
    if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
        return None, "Error: 'max_results' must be a positive integer"
    return max_results, None


def _validate_directory(directory) -> Optional[str]:
    if not isinstance(directory, str) or not directory:
        return "Error: 'directory' must be a non-empty string"
    return None


def _matches_response(
    stdout: str, query: str, max_results: int, separator: str = "\n"
) -> dict:
    """Turn fzf output into a success or empty response."""
    matches, truncated = split_matches(stdout, max_results, separator)
    if not matches:
        return MCPResponse.empty(NO_MATCHES).to_dict()

    message = f"Found {len(matches)} match(es)"
    if truncated:
        message += f" (limited to {max_results})"
    return MCPResponse.success(
        result={
            "matches": matches,
            "count": len(matches),
            "truncated": truncated,
            "query": query,
        },
        message=message,
        content_type="json",
    ).to_dict()


@mcp.tool()
async def fuzzy_search_files(
    query: str,
    directory: str = DEFAULT_DIRECTORY,
    max_results: Optional[int] = None,
    case_sensitive: bool = False,
    exact: bool = False,
    max_depth: Optional[int] = None,
) -> dict:
    """Search for files using the fzf fuzzy finder.

    Lists files recursively from a starting directory and returns the paths
    that fuzzy-match the query, best match first.

    Args:
        query: Fuzzy search query (e.g. 'readme', 'index.js', 'test').
               Spaces separate terms that must all match; ^ and $ anchor
               prefix/suffix, ! excludes, ' forces an exact term.
        directory: Starting directory for the search (default: current directory)
        max_results: Maximum number of results to return (default: 50)
        case_sensitive: Enable case-sensitive matching (default: false)
        exact: Enable exact matching instead of fuzzy (default: false)
        max_depth: Limit how many directory levels are descended (default: unlimited)
    """
    error = _validate_query(query) or _validate_directory(directory)
    limit, limit_error = _resolve_max_results(max_results)
    error = error or limit_error
    if max_depth is not None and (not isinstance(max_depth, int) or max_depth < 1):
        error = error or "Error: 'max_depth' must be a positive integer"
    if error:
        return MCPResponse.error(error).to_dict()

    settings = get_settings()
    try:
        file_list = await list_files(directory, max_depth, timeout=settings.timeout)
        if not file_list:
            return MCPResponse.empty(NO_FILES).to_dict()

        result = await run_fzf(
            build_filter_args(query, case_sensitive, exact),
            file_list,
            fzf_path=resolve_fzf_path(settings),
            timeout=settings.timeout,
        )
        return _matches_response(result.stdout, query, limit)
    except FzfMcpError as e:
        return MCPResponse.error(f"Error: {e}").to_dict()
    except Exception as e:
        logger.exception(f"Unexpected error in fuzzy_search_files for {query!r}")
        return MCPResponse.error(f"Error: {e}").to_dict()


@mcp.tool()
async def fuzzy_filter(
    items: List[str],
    query: str,
    max_results: Optional[int] = None,
    case_sensitive: bool = False,
    exact: bool = False,
) -> dict:
    """Filter a list of items using fzf's fuzzy matching algorithm.

    Pass a list of strings and a query; the items that match are returned
    ranked by fzf's score.

    Args:
        items: List of items to filter
        query: Fuzzy search query
        max_results: Maximum number of results to return (default: 50)
        case_sensitive: Enable case-sensitive matching (default: false)
        exact: Enable exact matching instead of fuzzy (default: false)
    """
    if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
        return MCPResponse.error("Error: 'items' must be a list of strings").to_dict()
    error = _validate_query(query)
    limit, limit_error = _resolve_max_results(max_results)
    error = error or limit_error
    if error:
        return MCPResponse.error(error).to_dict()
    if not items:
        return MCPResponse.empty(NO_ITEMS).to_dict()

    settings = get_settings()
    try:
        # NUL-delimited so items may contain newlines
        result = await run_fzf(
            build_filter_args(query, case_sensitive, exact),
            "\0".join(items),
            fzf_path=resolve_fzf_path(settings),
            timeout=settings.timeout,
            read0=True,
        )
        return _matches_response(result.stdout, query, limit, separator="\0")
    except FzfMcpError as e:
        return MCPResponse.error(f"Error: {e}").to_dict()
    except Exception as e:
        logger.exception(f"Unexpected error in fuzzy_filter for {query!r}")
        return MCPResponse.error(f"Error: {e}").to_dict()


@mcp.tool()
async def fuzzy_search_content(
    query: str,
    directory: str = DEFAULT_DIRECTORY,
    file_pattern: str = DEFAULT_FILE_PATTERN,
    max_results: Optional[int] = None,
    case_sensitive: bool = False,
) -> dict:
    """Search within file contents using fuzzy matching.

    Lines containing the query are collected with grep (findstr on Windows)
    and then ranked by fzf. Each result reads 'path:line:text'.

    Args:
        query: Content search query
        directory: Directory to search in (default: current directory)
        file_pattern: File name pattern to search (e.g. '*.py', '*.txt'; default: '*')
        max_results: Maximum number of results to return (default: 50)
        case_sensitive: Enable case-sensitive matching (default: false)
    """
    error = _validate_query(query) or _validate_directory(directory)
    limit, limit_error = _resolve_max_results(max_results)
    error = error or limit_error
    if not isinstance(file_pattern, str) or not file_pattern:
        error = error or "Error: 'file_pattern' must be a non-empty string"
    if error:
        return MCPResponse.error(error).to_dict()

    settings = get_settings()
    try:
        lines = await search_content(
            query,
            directory,
            file_pattern,
            case_sensitive,
            timeout=settings.timeout,
        )
        if not lines.strip():
            return MCPResponse.empty(NO_MATCHES).to_dict()

        result = await run_fzf(
            build_filter_args(query, case_sensitive),
            lines,
            fzf_path=resolve_fzf_path(settings),
            timeout=settings.timeout,
        )
        return _matches_response(result.stdout, query, limit)
    except FzfMcpError as e:
        return MCPResponse.error(f"Error: {e}").to_dict()
    except Exception as e:
        logger.exception(f"Unexpected error in fuzzy_search_content for {query!r}")
        return MCPResponse.error(f"Error: {e}").to_dict()


def main():
    """Run the MCP server."""
    fzf_path = ensure_fzf(get_settings())
    logger.info(f"fzf MCP server running on stdio (fzf: {fzf_path})")
    mcp.run()


if __name__ == "__main__":
    main()
