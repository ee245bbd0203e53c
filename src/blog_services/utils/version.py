"""Version utility module for the blog services."""

from importlib.metadata import PackageNotFoundError, version

from loguru import logger

DISTRIBUTION_NAME = "blog-services"
DEVELOPMENT_VERSION = "0.1.0-dev"


def get_version() -> str:
    """Get the installed package version, with a fallback for source checkouts."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.warning(f"Package {DISTRIBUTION_NAME} is not installed, using default version")
        return DEVELOPMENT_VERSION
