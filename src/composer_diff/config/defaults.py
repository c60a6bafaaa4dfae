"""Starter .composer-diff.toml template."""

CONFIG_FILENAME = ".composer-diff.toml"

DEFAULT_TOML = """\
# composer-rich-diff configuration
version = "1.0"

[diff]
path = "composer.json"          # the lock file is derived: composer.lock

[github]
api_url = "https://api.github.com"
timeout = 30.0
token_env = "GITHUB_TOKEN"      # env var holding the API token

[output]
format = "terminal"             # terminal | json | markdown
show_summary = true

[comment]
author = "github-actions[bot]"  # login whose comment gets updated in place
"""
