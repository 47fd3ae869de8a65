"""Ordering of AngularJS scripts and styles into topology files."""

from ngdp.analyzer.models import Resources, Script

from .command import OrderCommand, collect_sources, rewrite_path
from .models import OrderConfig, Target

__all__ = [
	"OrderCommand",
	"OrderConfig",
	"Resources",
	"Script",
	"Target",
	"collect_sources",
	"rewrite_path",
]
