"""Utility module for ngdp package."""

from .cli_utils import console, exit_with_error, progress_indicator, show_error, show_warning
from .config_loader import ConfigLoader

__all__ = [
	"ConfigLoader",
	"console",
	"exit_with_error",
	"progress_indicator",
	"show_error",
	"show_warning",
]
