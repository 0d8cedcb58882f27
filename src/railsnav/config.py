"""railsnav configuration and Rails layout constants."""

from __future__ import annotations

import os

# A directory holding this file is a Rails project root
MARKER_FILE = "config/environment.rb"

# Optional per-project overrides, handed to a sandboxed runner
OVERRIDE_FILE = "config/railsnav.yml"

# Top-level folders the root locator may strip while walking upward
TOP_LEVEL_DIRS = (
    "app", "components", "config", "db", "doc", "lib",
    "log", "public", "script", "test", "tmp", "vendor",
)

# Searched (in order) by the "find file" primitive, relative to the root
SEARCH_SUBDIRS = (
    "app",
    "app/models",
    "app/controllers",
    "app/helpers",
    "app/views",
    "app/apis",
    "components",
    "config",
    "lib",
    "vendor",
    "vendor/plugins/*/lib",
    "test",
    "test/unit",
    "test/functional",
    "test/integration",
    "public",
)

SUFFIXES = (".rb", ".rhtml", ".rxml", ".rjs", ".erb", ".builder", ".yml", ".css", ".js")

CLASS_SUFFIX = ".rb"
ASSETS_ROOT = "public"
VIEWS_DIR = "views"

# Templates whose partial calls are wrapped in <%= %>
ERB_EXTENSIONS = (".rhtml", ".erb")

RAKE = "rake"
RUBY = "ruby"

LOG_LEVEL = os.environ.get("RAILSNAV_LOG_LEVEL", "WARNING")
