"""Allow ``python -m omnifocus_mcp``."""

from omnifocus_mcp.server import run

if __name__ == "__main__":
    run()
