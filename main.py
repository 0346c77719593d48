# =============================================================================
# main.py  —  Entry Point for the Goal Story MCP Gateway
# =============================================================================
#
# HOW TO RUN:
#   python main.py <GOALSTORY_API_BASE_URL> <GOALSTORY_API_TOKEN>
#   (or, once installed:  goalstory-mcp <base_url> <token>)
#
# WHAT HAPPENS:
#   1. .env is loaded (GOALSTORY_HTTP_TIMEOUT, GOALSTORY_LOG_LEVEL)
#   2. The two positional arguments are validated into a GatewayConfig
#   3. The FastMCP server is built with all 25 catalog tools
#   4. The server speaks MCP over stdio until the client disconnects
#
# A missing argument is a click usage error (exit 2).  An empty or
# malformed one is a ConfigError (exit 1).  Both are reported on stderr,
# before any tool is registered.
# =============================================================================

import os

import click
from dotenv import load_dotenv

from goalstory.config import ConfigError, GatewayConfig
from goalstory_mcp.mcp_server import configure_logging, create_server, describe_tools

LOG_LEVEL_ENV_VAR = "GOALSTORY_LOG_LEVEL"


@click.command()
@click.argument("base_url", required=False)
@click.argument("token", required=False)
@click.option("--list-tools", is_flag=True, help="Print the tool catalog as JSON and exit.")
def cli(base_url: str, token: str, list_tools: bool) -> None:
    """Serve the Goal Story API as MCP tools over stdio.

    BASE_URL is the Goal Story backend root (e.g. https://api.goalstory.ing)
    and TOKEN is the bearer token sent with every request.
    """
    if list_tools:
        click.echo(describe_tools())
        return

    if base_url is None:
        raise click.UsageError("Missing argument 'BASE_URL'.")
    if token is None:
        raise click.UsageError("Missing argument 'TOKEN'.")

    try:
        config = GatewayConfig.from_args(base_url, token)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    configure_logging(os.environ.get(LOG_LEVEL_ENV_VAR, "INFO"))
    create_server(config).run()


def main() -> None:
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
