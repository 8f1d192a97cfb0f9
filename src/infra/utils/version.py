from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "uptime-status-page"


def get_version(distribution_name: str = DISTRIBUTION_NAME) -> str:
    default_version = "1.0.0"

    try:
        return version(distribution_name)
    except PackageNotFoundError:
        return default_version
