from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as dist_version

try:
    __version__ = dist_version("tsv-registry")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"
