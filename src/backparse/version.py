from importlib.metadata import PackageNotFoundError, version

try:
    version = version("BackParse")
except PackageNotFoundError:
    version = "0.0.0"
