"""Entry point of ``blog-cli``.

Usage:
    blog-cli events list
    blog-cli --timeout 2 events list --relay-url http://localhost:4005
    blog-cli events publish CommentModerated -d '{"postId": "...", "id": "...", "status": "approved"}'
    python -m blog_services.cli events list
"""

from blog_services.cli.app import app
from blog_services.cli.utils import configure_cli_logging


def main() -> None:
    configure_cli_logging()
    app()


if __name__ == "__main__":
    main()
