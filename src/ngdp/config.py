"""Default configuration settings for the ngdp tool."""

DEFAULT_CONFIG = {
	# Ordering of AngularJS scripts and styles
	"order": {
		# Part of the source paths replaced by the prefixes below
		"base_path": "",
		# Replacement for base_path in CSS / SCSS paths
		"css_prefix": "",
		# Replacement for base_path in JavaScript paths
		"js_prefix": "",
		# Extensions of files analysed as AngularJS scripts
		"script_extensions": [".js"],
		# Extensions of files treated as styles
		"style_extensions": [".css", ".scss"],
		# Abort when a script contains syntax errors (otherwise analyse what parsed)
		"fail_on_syntax_error": True,
		# Number of files parsed in parallel
		"max_workers": 4,
	},
	# Named targets, each with a list of source patterns and a destination file:
	#   targets:
	#     app1:
	#       src: ["app1/**/*.*"]
	#       dest: "app1/topology.json"
	"targets": {},
}
