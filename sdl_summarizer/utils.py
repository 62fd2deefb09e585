"""Utility functions for schema loading and output."""

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from graphql import get_introspection_query

# Standard GraphQL introspection query, with descriptions
INTROSPECTION_QUERY = get_introspection_query(descriptions=True)


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def join(*parts: str) -> str:
    """Join path components."""
    return str(Path(*parts))


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


# File I/O
def read_text(path: str) -> str:
    """Read text file."""
    return Path(path).read_text(encoding="utf-8")


def write_text(path: str, text: str) -> None:
    Path(path).write_text(text, encoding="utf-8")


def read_json(path: str) -> dict:
    """Read JSON file."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str, data: Any) -> None:
    """Write JSON file with pretty formatting."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def to_json(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, indent=2)


# Hashing & timestamps
def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def sha256_text(text: str) -> str:
    """Short SHA-256 digest of a string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]


def sanitize_host(url: str) -> str:
    """Extract sanitized hostname from URL for use in filenames."""
    if url.startswith("file://"):
        return "file"
    parsed = urlparse(url)
    host = parsed.netloc or parsed.path
    # Remove port, replace special chars
    host = host.split(":")[0]
    return host.replace("/", "_").replace(":", "_")


def ensure_graphql_url(url: str) -> str:
    """Ensure URL ends with /graphql - append if missing."""
    url = url.rstrip("/")
    if not url.endswith("/graphql"):
        url = f"{url}/graphql"
    return url


def plural(count: int, noun: str) -> str:
    """'1 operation', '2 operations'."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


# HTTP response helpers
def safe_json_response(response, context: str = "API request") -> dict:
    """
    Safely parse JSON from HTTP response with helpful error messages.

    Args:
        response: requests.Response object
        context: Description of what operation failed (e.g., "GraphQL introspection")

    Returns:
        Parsed JSON as dict

    Raises:
        RuntimeError: If response is not valid JSON, with detailed diagnostic info
    """
    try:
        return response.json()
    except ValueError as e:
        url = response.url
        status = response.status_code
        content_type = response.headers.get("Content-Type", "unknown")

        # Preview response body (first 300 chars)
        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."

        error_parts = [
            f"{context} failed - server returned non-JSON response",
            "",
            f"  URL: {url}",
            f"  Status: {status}",
            f"  Content-Type: {content_type}",
            "",
            "  Response preview:",
            f"  {body_preview}",
            "",
            "  Suggestions:",
            "  - Verify the URL is correct and points to a GraphQL endpoint",
            "  - Authentication may be required - try adding --token YOUR_TOKEN",
            "  - Check that introspection is enabled on the server",
            "",
            f"  Original JSON error: {e}",
        ]
        raise RuntimeError("\n".join(error_parts)) from e
