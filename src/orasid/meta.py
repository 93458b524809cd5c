"""Package metadata for orasid."""

__app_name__ = "orasid"
__version__ = "0.3.0"
__description__ = "Resumable runbook that changes an Oracle host name and database SID"
__license_type__ = "MIT"

__all__ = [
    "__app_name__",
    "__description__",
    "__license_type__",
    "__version__",
]
