"""Schema loading and caching."""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import requests
from graphql import GraphQLError

from . import parser, utils
from .config import Config

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)


class SchemaLoadError(RuntimeError):
    """Schema could not be read, fetched or converted to SDL."""


@dataclass
class SchemaProfile:
    """Loaded SDL text with metadata."""

    source: str
    fetched_at: str
    hash: str
    sdl: str


def load_schema(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    cfg: Optional[Config] = None,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> SchemaProfile:
    """
    Load SDL text from a file or via introspection.

    Args:
        url: GraphQL endpoint URL
        schema_file: Path to an SDL file or an introspection JSON file
        cfg: Configuration object
        allow_cache: Whether to use a cached schema
        refresh: Force refresh even if cached
        token: Optional API token for authentication

    Returns:
        SchemaProfile with loaded SDL

    Raises:
        SchemaLoadError: If nothing to load from, or loading fails
    """
    if schema_file:
        return load_file(schema_file)

    if not url:
        raise SchemaLoadError("No URL or schema file provided")

    cfg = cfg or Config()
    cache_path = cache_path_for(url, cfg)

    # Try cache first
    if allow_cache and utils.exists(cache_path) and not refresh:
        logger.debug("Using cached schema %s", cache_path)
        return SchemaProfile(**utils.read_json(cache_path))

    sdl = introspect(url, token or cfg.token)
    prof = SchemaProfile(source=url, fetched_at=utils.now_iso(), hash=utils.sha256_text(sdl), sdl=sdl)

    utils.ensure_dir(utils.dirname(cache_path))
    utils.write_json(cache_path, asdict(prof))
    logger.debug("Cached schema for %s at %s", url, cache_path)

    return prof


def load_file(path: str) -> SchemaProfile:
    """
    Load SDL from a file; JSON files are treated as introspection results.

    Raises:
        SchemaLoadError: If the file is missing or not a usable introspection result
    """
    if not utils.exists(path):
        raise SchemaLoadError(f"Schema file not found: {path}")

    if path.lower().endswith(JSON_SUFFIXES):
        try:
            sdl = parser.sdl_from_introspection(utils.read_json(path))
        except (ValueError, TypeError, KeyError, GraphQLError) as e:
            raise SchemaLoadError(f"Invalid introspection file {path}: {e}") from e
    else:
        sdl = utils.read_text(path)

    return SchemaProfile(
        source=f"file://{path}",
        fetched_at=utils.now_iso(),
        hash=utils.sha256_text(sdl),
        sdl=sdl,
    )


def introspect(graphql_url: str, token: Optional[str] = None) -> str:
    """
    Introspect a GraphQL endpoint via HTTP and render the result as SDL.

    Args:
        graphql_url: GraphQL endpoint URL
        token: Optional API token for authentication

    Returns:
        SDL text

    Raises:
        SchemaLoadError: If introspection fails
    """
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    logger.debug("Introspecting %s", graphql_url)
    try:
        resp = requests.post(graphql_url, json={"query": utils.INTROSPECTION_QUERY}, headers=headers, timeout=30)
    except requests.RequestException as e:
        raise SchemaLoadError(f"Introspection request to {graphql_url} failed: {e}") from e

    if resp.status_code != 200:
        raise SchemaLoadError(f"Introspection failed with status {resp.status_code}")

    try:
        payload = utils.safe_json_response(resp, context="GraphQL introspection")
    except RuntimeError as e:
        raise SchemaLoadError(str(e)) from e

    if payload.get("errors"):
        raise SchemaLoadError(f"Introspection errors: {payload['errors']}")

    try:
        return parser.sdl_from_introspection(payload["data"])
    except (KeyError, TypeError, GraphQLError) as e:
        raise SchemaLoadError(f"Unusable introspection result: {e}") from e


def cache_path_for(url: str, cfg: Config) -> str:
    """
    Get cache path for a schema URL.

    Args:
        url: GraphQL endpoint URL
        cfg: Configuration object

    Returns:
        Path to cache file
    """
    host = utils.sanitize_host(url)
    return utils.join(cfg.schema_cache_dir, f"{host}.json")
